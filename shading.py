import math
from dataclasses import dataclass

import numpy as np

from surfaces import intersect
from vector import lerp, vector_length

# The maximum value for a given color channel
CMAX = 255


@dataclass(frozen=True)
class Color:
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_unit(cls, red, green, blue):
        """Scale a [0, 1] float triple to integer channels, rounding half up."""
        return cls(*(int(math.floor(CMAX * channel + 0.5)) for channel in (red, green, blue)))

    def clamped(self):
        return Color(*(min(max(channel, 0), CMAX) for channel in self))

    def to_unit(self):
        return tuple(channel / CMAX for channel in self)

    def __iter__(self):
        yield self.red
        yield self.green
        yield self.blue


def background_color(ray):
    """Vertical sky gradient: bluish towards the top, white towards the bottom."""
    direction = ray.direction
    t = 0.5 * direction.dy / vector_length(direction)
    red = lerp(0.5, 1.0, t)
    green = lerp(0.7, 1.0, t)
    blue = 1.0
    return red, green, blue


def normal_color(normal):
    """Map each normal component from [-1, 1] to [0, 1]."""
    return 0.5 * (1.0 + normal.dx), 0.5 * (1.0 + normal.dy), 0.5 * (1.0 + normal.dz)


def nearest_hit(scene, ray):
    """
    Find the nearest surface intersection along the ray.

    Every surface is tested with the window shrunk to the closest hit so far,
    so the result is the nearest surface rather than the first one listed.
    """
    max_t = math.inf
    nearest = None
    for surface in scene:
        hit = intersect(surface, ray, 0.0, max_t)
        if hit is not None:
            max_t = hit.t
            nearest = hit
    return nearest


class Sampler:
    """
    Multi-sample pixel shader.

    Args:
        width, height: image size in pixels; u divides by (width - 1) and v by
            height, which keeps output comparable with existing renders.
        samples_per_pixel: jittered rays cast per pixel.
        jitter: when False every sample goes through the pixel corner exactly.
        blend_background: when False (default) samples that miss count as zero
            towards the average of a pixel that has any hit; when True they
            contribute their background color instead.
    """

    def __init__(self, width, height, samples_per_pixel=100, jitter=True, blend_background=False):
        if width < 2 or height < 1:
            raise ValueError("Image must be at least 2x1 pixels, got {}x{}".format(width, height))
        if samples_per_pixel < 1:
            raise ValueError("samples_per_pixel must be at least 1")
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.jitter = jitter
        self.blend_background = blend_background

    def _offsets(self, rng):
        """Per-sample (column, row) jitter in [-0.5, 0.5)."""
        if not self.jitter:
            return np.zeros((self.samples_per_pixel, 2))
        return rng.uniform(-0.5, 0.5, size=(self.samples_per_pixel, 2))

    def shade_pixel(self, scene, camera, row, col, rng):
        """Average samples_per_pixel jittered rays through pixel (row, col)."""
        n = self.samples_per_pixel
        accumulated = np.zeros(3)
        first_background = None
        hit_any = False

        for sample, (jitter_col, jitter_row) in enumerate(self._offsets(rng).tolist()):
            u = (col + jitter_col) / (self.width - 1)
            v = (row + jitter_row) / self.height
            ray = camera.ray_at(u, v)

            if sample == 0:
                first_background = background_color(ray)

            hit = nearest_hit(scene, ray)
            if hit is not None:
                hit_any = True
                accumulated += normal_color(hit.normal)
            elif self.blend_background:
                accumulated += background_color(ray)

        if hit_any or self.blend_background:
            return Color.from_unit(*(accumulated / n))
        return Color.from_unit(*first_background)
