import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0

    def __add__(self, other):
        return Vector(self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other):
        return Vector(self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __mul__(self, scalar):
        return Vector(self.dx * scalar, self.dy * scalar, self.dz * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return Vector(self.dx / scalar, self.dy / scalar, self.dz / scalar)

    def __neg__(self):
        return Vector(-self.dx, -self.dy, -self.dz)


def dot(u, v):
    return u.dx * v.dx + u.dy * v.dy + u.dz * v.dz


def vector_length(v):
    return math.sqrt(dot(v, v))


def unit_vector(v):
    """
    Scale v to length 1.

    A zero vector is not rejected: the division yields NaN components, the
    same way a zero-direction ray propagates NaN through intersection math.
    """
    length = vector_length(v)
    if length == 0.0:
        return Vector(math.nan, math.nan, math.nan)
    return v / length


def lerp(a, b, t):
    """The linear interpolation of t between a and b."""
    return a + t * (b - a)
