"""Tests for the pinhole camera and the render loop.

Tests cover:
- Canvas geometry for horizontal and vertical images
- Rays through the canvas center and corner, with and without a transform
- Taichi ray generation matching per-pixel rays
- Rendering the default world, progress reporting and worker validation
"""

import math

import numpy as np
import pytest

from whitted.camera.camera import Camera, _generate_directions
from whitted.core.ray import point, vector
from whitted.core.transforms import identity, rotation_y, translation, view_transform

HALF = math.sqrt(2.0) / 2.0


class TestCameraGeometry:
    """Tests for canvas size and pixel size."""

    def test_construction(self):
        """A camera stores its size and defaults to the identity transform."""
        camera = Camera(160, 120, math.pi / 2.0)
        assert camera.hsize == 160
        assert camera.vsize == 120
        assert camera.field_of_view == pytest.approx(math.pi / 2.0)
        np.testing.assert_array_equal(camera.transform, identity())

    def test_pixel_size_horizontal(self):
        """Pixel size for a landscape canvas."""
        camera = Camera(200, 125, math.pi / 2.0)
        assert camera.pixel_size == pytest.approx(0.01)

    def test_pixel_size_vertical(self):
        """Pixel size for a portrait canvas."""
        camera = Camera(125, 200, math.pi / 2.0)
        assert camera.pixel_size == pytest.approx(0.01)

    @pytest.mark.parametrize("hsize, vsize", [(0, 10), (10, -1)])
    def test_invalid_size(self, hsize, vsize):
        """Image dimensions must be positive."""
        with pytest.raises(ValueError, match="Image size"):
            Camera(hsize, vsize, math.pi / 2.0)

    def test_invalid_field_of_view(self):
        """The field of view is in radians and below pi."""
        with pytest.raises(ValueError, match="Field of view"):
            Camera(10, 10, 90.0)


class TestRayForPixel:
    """Tests for single primary rays."""

    def test_center_of_canvas(self):
        """The center ray looks straight down -z."""
        camera = Camera(201, 101, math.pi / 2.0)
        ray = camera.ray_for_pixel(100, 50)
        np.testing.assert_allclose(ray.origin, [0.0, 0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0, 0.0], atol=1e-12)

    def test_corner_of_canvas(self):
        """The top-left pixel ray."""
        camera = Camera(201, 101, math.pi / 2.0)
        ray = camera.ray_for_pixel(0, 0)
        np.testing.assert_allclose(ray.direction, [0.66519, 0.33259, -0.66851, 0.0], atol=1e-5)

    def test_transformed_camera(self):
        """The transform moves the eye and turns the rays."""
        camera = Camera(
            201, 101, math.pi / 2.0, rotation_y(45.0) @ translation(0.0, -2.0, 5.0)
        )
        ray = camera.ray_for_pixel(100, 50)
        np.testing.assert_allclose(ray.origin, [0.0, 2.0, -5.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(ray.direction, [HALF, 0.0, -HALF, 0.0], atol=1e-12)

    def test_origin_follows_transform(self):
        """Assigning a new transform moves the eye."""
        camera = Camera(11, 11, math.pi / 2.0)
        camera.transform = translation(0.0, 0.0, -8.0)
        np.testing.assert_allclose(camera.origin, [0.0, 0.0, 8.0, 1.0], atol=1e-12)


class TestGenerateRays:
    """Tests for the Taichi ray generation kernel."""

    def test_shape(self):
        """One unit direction per pixel."""
        camera = Camera(7, 5, math.pi / 3.0)
        directions = camera.generate_rays()
        assert directions.shape == (5, 7, 3)
        np.testing.assert_allclose(np.linalg.norm(directions, axis=2), 1.0, atol=1e-12)

    def test_kernel_accepts_float64_arrays(self):
        """The kernel compiles against plain float64 NumPy arrays."""
        directions = np.zeros((2, 3, 3), dtype=np.float64)
        _generate_directions(
            directions,
            np.ascontiguousarray(identity()),
            np.zeros(3, dtype=np.float64),
            1.0,
            2.0 / 3.0,
            2.0 / 3.0,
        )
        # Top-left pixel center sits at canvas (2/3, 1/3, -1)
        expected = np.array([2.0 / 3.0, 1.0 / 3.0, -1.0])
        np.testing.assert_allclose(directions[0, 0], expected / np.linalg.norm(expected))

    def test_matches_ray_for_pixel(self):
        """The kernel agrees with the per-pixel computation."""
        transform = view_transform(
            point(1.0, 2.0, -5.0), point(0.0, 0.5, 0.0), vector(0.0, 1.0, 0.0)
        )
        camera = Camera(9, 6, math.pi / 2.0, transform)
        directions = camera.generate_rays()
        for y in range(camera.vsize):
            for x in range(camera.hsize):
                expected = camera.ray_for_pixel(x, y).direction[:3]
                np.testing.assert_allclose(directions[y, x], expected, atol=1e-9)


class TestRender:
    """Tests for rendering a world."""

    @pytest.fixture
    def camera(self):
        transform = view_transform(
            point(0.0, 0.0, -5.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0)
        )
        return Camera(11, 11, math.pi / 2.0, transform)

    def test_render_default_world(self, world, camera):
        """The center pixel shows the regression color."""
        image = camera.render(world, workers=2)
        assert image.shape == (11, 11, 3)
        assert image.dtype == np.float64
        np.testing.assert_allclose(image[5, 5], [0.38066, 0.47583, 0.2855], atol=1e-4)

    def test_render_matches_color_at(self, world, camera):
        """Each pixel equals an independent color_at call."""
        image = camera.render(world, workers=3)
        for y, x in [(0, 0), (3, 7), (10, 10), (5, 2)]:
            expected = world.color_at(camera.ray_for_pixel(x, y), 0).as_tuple()
            np.testing.assert_allclose(image[y, x], expected, atol=1e-9)

    def test_single_worker_matches_many(self, world, camera):
        """Scheduling does not change the image."""
        a = camera.render(world, workers=1)
        b = camera.render(world, workers=4)
        np.testing.assert_array_equal(a, b)

    def test_progress_callback(self, world, camera):
        """The callback sees every row complete, ending at the total."""
        calls = []
        camera.render(world, workers=2, callback=lambda done, total: calls.append((done, total)))
        assert len(calls) == camera.vsize
        assert calls[-1] == (camera.vsize, camera.vsize)
        assert [done for done, _ in calls] == list(range(1, camera.vsize + 1))

    def test_invalid_workers(self, world, camera):
        """At least one worker is required."""
        with pytest.raises(ValueError, match="workers"):
            camera.render(world, workers=0)
