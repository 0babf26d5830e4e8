import math
from dataclasses import dataclass
from functools import singledispatch
from typing import NamedTuple

from vector import Vector


@dataclass(frozen=True)
class Ray:
    origin: Vector
    direction: Vector

    def at(self, t):
        return self.origin + t * self.direction


class Hit(NamedTuple):
    t: float
    normal: Vector


@singledispatch
def intersect(surface, ray, t_min=0.0, t_max=math.inf):
    """
    Intersect ray with surface, reporting the nearest hit with t_min <= t <= t_max.

    Returns:
        Hit(t, normal) with an outward unit normal, or None when no root of
        the surface equation lies inside the window.
    """
    raise TypeError("Unknown surface type: {}".format(type(surface).__name__))
