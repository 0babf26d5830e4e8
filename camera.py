from dataclasses import dataclass, field

from surfaces import Ray
from vector import Vector, lerp


@dataclass(frozen=True)
class Camera:
    """
    Pinhole camera looking down +z through a fixed viewport.

    The viewport spans -viewport_width..viewport_width horizontally and
    -viewport_height..viewport_height vertically at distance focal_length.
    +x is screen-right, +y is screen-down, +z is into the screen.
    """
    viewport_height: float
    viewport_width: float
    focal_length: float
    location: Vector = field(default_factory=Vector)

    @classmethod
    def for_aspect_ratio(cls, aspect_ratio, viewport_height=2.0, focal_length=1.0,
                         location=None):
        """Build a camera whose viewport width follows the image aspect ratio."""
        return cls(
            viewport_height,
            viewport_height * aspect_ratio,
            focal_length,
            location if location is not None else Vector(),
        )

    def ray_at(self, u, v):
        """Generate the ray through normalized image-plane coordinates (u, v)."""
        x = lerp(-self.viewport_width, self.viewport_width, u)
        y = lerp(-self.viewport_height, self.viewport_height, v)
        z = self.focal_length
        return Ray(self.location, Vector(x, y, z))
