import pytest

from camera import Camera
from vector import Vector


def test_corners_span_the_viewport(reference_camera):
    vw = reference_camera.viewport_width
    assert reference_camera.ray_at(0.0, 0.0).direction == Vector(-vw, -2.0, 1.0)
    assert reference_camera.ray_at(1.0, 1.0).direction == Vector(vw, 2.0, 1.0)


def test_center_looks_down_positive_z(reference_camera):
    ray = reference_camera.ray_at(0.5, 0.5)
    assert ray.direction == Vector(0.0, 0.0, 1.0)
    assert ray.origin == Vector()


def test_increasing_v_moves_down_screen(reference_camera):
    # +y is screen-down
    assert reference_camera.ray_at(0.5, 0.75).direction.dy > 0
    assert reference_camera.ray_at(0.75, 0.5).direction.dx > 0


def test_location_is_ray_origin():
    camera = Camera(1.0, 1.0, 2.0, Vector(1.0, 2.0, 3.0))
    ray = camera.ray_at(0.5, 0.5)
    assert ray.origin == Vector(1.0, 2.0, 3.0)
    assert ray.direction == Vector(0.0, 0.0, 2.0)


def test_for_aspect_ratio():
    camera = Camera.for_aspect_ratio(16.0 / 9.0)
    assert camera.viewport_height == 2.0
    assert camera.viewport_width == pytest.approx(32.0 / 9.0)
    assert camera.focal_length == 1.0
    assert camera.location == Vector()
