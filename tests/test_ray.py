"""Unit tests for homogeneous tuples and the Ray type.

Tests cover:
- Point/vector construction and the homogeneous coordinate
- Vector utilities (dot, cross, magnitude, normalize, reflect)
- Ray position and transformation
"""

import math

import numpy as np
import pytest

from whitted.core.ray import (
    EPSILON,
    ORIGIN,
    Ray,
    cross,
    dot,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)
from whitted.core.transforms import scaling, translation


class TestTuples:
    """Tests for point and vector helpers."""

    def test_point_has_w_one(self):
        """A point carries w = 1."""
        p = point(4.0, -4.0, 3.0)
        assert p.tolist() == [4.0, -4.0, 3.0, 1.0]

    def test_vector_has_w_zero(self):
        """A vector carries w = 0."""
        v = vector(4.0, -4.0, 3.0)
        assert v.tolist() == [4.0, -4.0, 3.0, 0.0]

    def test_point_minus_point_is_vector(self):
        """Subtracting two points yields a vector."""
        v = point(3.0, 2.0, 1.0) - point(5.0, 6.0, 7.0)
        assert v.tolist() == [-2.0, -4.0, -6.0, 0.0]

    def test_origin_is_read_only(self):
        """The shared origin constant cannot be mutated in place."""
        with pytest.raises(ValueError):
            ORIGIN[0] = 1.0

    def test_epsilon_value(self):
        """Offsets and parallel-ray tolerance use 0.001."""
        assert EPSILON == 0.001


class TestVectorUtilities:
    """Tests for dot, cross, magnitude, normalize and reflect."""

    def test_magnitude(self):
        """Magnitude of (1, 2, 3) is sqrt(14)."""
        assert magnitude(vector(1.0, 2.0, 3.0)) == pytest.approx(math.sqrt(14.0))

    def test_normalize(self):
        """Normalizing gives a unit vector in the same direction."""
        n = normalize(vector(1.0, 2.0, 3.0))
        assert magnitude(n) == pytest.approx(1.0)
        np.testing.assert_allclose(n[:3], [0.26726, 0.53452, 0.80178], atol=1e-5)

    def test_dot(self):
        """Dot product of two vectors."""
        assert dot(vector(1.0, 2.0, 3.0), vector(2.0, 3.0, 4.0)) == pytest.approx(20.0)

    def test_cross(self):
        """Cross product is anti-commutative and yields a vector."""
        a = vector(1.0, 2.0, 3.0)
        b = vector(2.0, 3.0, 4.0)
        assert cross(a, b).tolist() == [-1.0, 2.0, -1.0, 0.0]
        assert cross(b, a).tolist() == [1.0, -2.0, 1.0, 0.0]

    def test_reflect_at_45_degrees(self):
        """Reflecting (1, -1, 0) about +y gives (1, 1, 0)."""
        r = reflect(vector(1.0, -1.0, 0.0), vector(0.0, 1.0, 0.0))
        np.testing.assert_allclose(r, [1.0, 1.0, 0.0, 0.0], atol=1e-12)

    def test_reflect_off_slanted_surface(self):
        """Reflecting (0, -1, 0) about a 45 degree normal gives (1, 0, 0)."""
        half = math.sqrt(2.0) / 2.0
        r = reflect(vector(0.0, -1.0, 0.0), vector(half, half, 0.0))
        np.testing.assert_allclose(r, [1.0, 0.0, 0.0, 0.0], atol=1e-12)


class TestRay:
    """Tests for ray evaluation and transformation."""

    def test_position(self):
        """position(t) walks along the direction."""
        ray = Ray(point(2.0, 3.0, 4.0), vector(1.0, 0.0, 0.0))
        assert ray.position(0.0).tolist() == [2.0, 3.0, 4.0, 1.0]
        assert ray.position(1.0).tolist() == [3.0, 3.0, 4.0, 1.0]
        assert ray.position(-1.0).tolist() == [1.0, 3.0, 4.0, 1.0]
        assert ray.position(2.5).tolist() == [4.5, 3.0, 4.0, 1.0]

    def test_translate_ray(self):
        """Translation moves the origin but not the direction."""
        ray = Ray(point(1.0, 2.0, 3.0), vector(0.0, 1.0, 0.0))
        moved = ray.transform(translation(3.0, 4.0, 5.0))
        assert moved.origin.tolist() == [4.0, 6.0, 8.0, 1.0]
        assert moved.direction.tolist() == [0.0, 1.0, 0.0, 0.0]

    def test_scale_ray(self):
        """Scaling changes both origin and direction, without renormalizing."""
        ray = Ray(point(1.0, 2.0, 3.0), vector(0.0, 1.0, 0.0))
        scaled = ray.transform(scaling(2.0, 3.0, 4.0))
        assert scaled.origin.tolist() == [2.0, 6.0, 12.0, 1.0]
        assert scaled.direction.tolist() == [0.0, 3.0, 0.0, 0.0]

    def test_transform_returns_new_ray(self):
        """The original ray is left untouched."""
        ray = Ray(point(1.0, 2.0, 3.0), vector(0.0, 1.0, 0.0))
        ray.transform(translation(3.0, 4.0, 5.0))
        assert ray.origin.tolist() == [1.0, 2.0, 3.0, 1.0]
