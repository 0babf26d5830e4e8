import math
from dataclasses import dataclass

from numba import njit

from surfaces.ray import Hit, intersect
from vector import Vector, unit_vector


@njit(cache=True, nogil=True, error_model="numpy")
def _sphere_roots(ox, oy, oz, dx, dy, dz, cx, cy, cz, radius):
    """
    Solve |O + tD - C|^2 = r^2 for t (JIT-compiled, releases the GIL).

    Returns (has_roots, root1, root2) with root1 = (-b - sqrt(disc)) / 2a.
    A zero direction gives a == 0; the numpy error model turns the division
    into inf/nan instead of raising.
    """
    ca_x = ox - cx
    ca_y = oy - cy
    ca_z = oz - cz

    a = dx*dx + dy*dy + dz*dz
    b = 2.0 * (ca_x*dx + ca_y*dy + ca_z*dz)
    c = ca_x*ca_x + ca_y*ca_y + ca_z*ca_z - radius*radius

    discriminant = b*b - 4.0*a*c
    if discriminant < 0.0:
        return False, 0.0, 0.0

    sqrt_disc = math.sqrt(discriminant)
    root1 = (-b - sqrt_disc) / (2.0*a)
    root2 = (-b + sqrt_disc) / (2.0*a)
    return True, root1, root2


@dataclass(frozen=True)
class Sphere:
    center: Vector
    radius: float

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError("Sphere radius must be positive, got {}".format(self.radius))

    def intersect(self, ray, t_min=0.0, t_max=math.inf):
        """Compute ray-sphere intersection using the quadratic formula."""
        origin, direction, center = ray.origin, ray.direction, self.center
        has_roots, root1, root2 = _sphere_roots(
            origin.dx, origin.dy, origin.dz,
            direction.dx, direction.dy, direction.dz,
            center.dx, center.dy, center.dz,
            self.radius,
        )
        if not has_roots:
            return None

        # A root outside the window is skipped even if it is a real hit;
        # callers shrink t_max to the nearest hit found so far.
        root1_in_range = t_min <= root1 <= t_max
        root2_in_range = t_min <= root2 <= t_max
        if root1_in_range and root2_in_range:
            t = min(root1, root2)
        elif root1_in_range:
            t = root1
        elif root2_in_range:
            t = root2
        else:
            return None

        normal = unit_vector(ray.at(t) - center)
        return Hit(t, normal)


intersect.register(Sphere, Sphere.intersect)
