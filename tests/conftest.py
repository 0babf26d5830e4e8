import pytest

from camera import Camera
from surfaces import Sphere
from vector import Vector


@pytest.fixture
def unit_sphere():
    return Sphere(Vector(0.0, 0.0, 3.0), 1.0)


@pytest.fixture
def reference_camera():
    return Camera(viewport_height=2.0, viewport_width=2.0 * 16.0 / 9.0, focal_length=1.0)
