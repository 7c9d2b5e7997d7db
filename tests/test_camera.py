"""Tests de la caméra (pan + zoom centré pointeur)."""

import itertools

import pytest

from tactical.engine.camera import Camera
from tactical.engine.rules import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP


def test_screen_world_transforms_are_inverse() -> None:
    camera = Camera(scale=2.0, pan_x=15.0, pan_y=-30.0)

    assert camera.screen_to_world((215.0, 170.0)) == pytest.approx((100.0, 100.0))
    assert camera.world_to_screen((100.0, 100.0)) == pytest.approx((215.0, 170.0))


def test_screen_to_world_has_no_side_effect() -> None:
    camera = Camera(scale=1.5, pan_x=4.0, pan_y=8.0)
    camera.screen_to_world((100.0, 100.0))

    assert (camera.scale, camera.pan_x, camera.pan_y) == (1.5, 4.0, 8.0)


def test_zoom_direction_and_step() -> None:
    camera = Camera()
    camera.apply_zoom((0.0, 0.0), -1)
    assert camera.scale == pytest.approx(ZOOM_STEP)

    camera = Camera()
    camera.apply_zoom((0.0, 0.0), 1)
    assert camera.scale == pytest.approx(1.0 / ZOOM_STEP)


@pytest.mark.parametrize(
    "scale, pan, pointer, direction",
    list(
        itertools.product(
            [MIN_ZOOM, 0.5, 1.0, 2.2, MAX_ZOOM],
            [(0.0, 0.0), (-250.0, 80.0)],
            [(0.0, 0.0), (350.0, 250.0), (699.0, 12.0)],
            [1, -1],
        )
    ),
)
def test_zoom_keeps_world_point_under_pointer(scale, pan, pointer, direction) -> None:
    camera = Camera(scale=scale, pan_x=pan[0], pan_y=pan[1])
    before = camera.screen_to_world(pointer)

    camera.apply_zoom(pointer, direction)

    assert camera.screen_to_world(pointer) == pytest.approx(before)
    assert MIN_ZOOM <= camera.scale <= MAX_ZOOM


def test_zoom_is_clamped() -> None:
    camera = Camera()
    for _ in range(200):
        camera.apply_zoom((100.0, 100.0), -1)
    assert camera.scale == MAX_ZOOM

    for _ in range(400):
        camera.apply_zoom((100.0, 100.0), 1)
    assert camera.scale == MIN_ZOOM


def test_out_of_range_initial_scale_is_clamped() -> None:
    assert Camera(scale=10.0).scale == MAX_ZOOM
    assert Camera(scale=0.01).scale == MIN_ZOOM


def test_pan_by_and_reset() -> None:
    camera = Camera()
    camera.pan_by(12.0, -7.0)
    camera.apply_zoom((40.0, 40.0), -1)

    camera.reset()

    assert (camera.scale, camera.pan_x, camera.pan_y) == (1.0, 0.0, 0.0)
