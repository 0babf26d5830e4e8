from surfaces.ray import Hit, Ray, intersect
from surfaces.sphere import Sphere

__all__ = ["Hit", "Ray", "Sphere", "intersect"]
