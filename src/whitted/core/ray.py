"""Ray data structure and homogeneous tuple utilities.

This module provides the Ray dataclass and the point/vector helpers every
other module builds on. Points and vectors are 4-component float64 NumPy
arrays distinguished by their homogeneous coordinate:

    point(x, y, z)  -> [x, y, z, 1.0]
    vector(x, y, z) -> [x, y, z, 0.0]

so that a translation matrix moves points but leaves vectors untouched.

Example:
    >>> from whitted.core.ray import Ray, point, vector
    >>> ray = Ray(origin=point(0.0, 0.0, -5.0), direction=vector(0.0, 0.0, 1.0))
    >>> ray.position(5.0)  # Point 5 units along the ray
    array([0., 0., 0., 1.])
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for homogeneous (x, y, z, w) tuples
Tuple4 = npt.NDArray[np.float64]

# Offset used for over/under points and as the parallel-ray tolerance.
# Smaller values reintroduce shadow acne on float64 scenes.
EPSILON = 0.001


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


# Canonical origin point, shared read-only
ORIGIN = point(0.0, 0.0, 0.0)
ORIGIN.flags.writeable = False


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Tuple4, b: Tuple4) -> float:
    """Compute the dot product of two tuples over all four components.

    Args:
        a: First tuple.
        b: Second tuple.

    Returns:
        The dot product a . b.
    """
    return float(np.dot(a, b))


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Compute the 3-D cross product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The cross product a x b as a vector (w = 0).
    """
    return vector(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude(v: Tuple4) -> float:
    """Compute the Euclidean length of a tuple."""
    return float(np.sqrt(np.dot(v, v)))


def normalize(v: Tuple4) -> Tuple4:
    """Normalize a tuple to unit length.

    Args:
        v: The input tuple.

    Returns:
        A unit tuple in the same direction as v.
    """
    return v / magnitude(v)


def reflect(incident: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector, d - 2 (d . n) n.
    """
    return incident - normal * (2.0 * dot(incident, normal))


# =============================================================================
# Ray
# =============================================================================


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not normalized after a
            transform into object space; intersection routines rely on that
            so that t values stay valid in world space.
    """

    origin: Tuple4
    direction: Tuple4

    def position(self, t: float) -> Tuple4:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: npt.NDArray[np.float64]) -> Ray:
        """Return a new ray with origin and direction multiplied by matrix."""
        return Ray(origin=matrix @ self.origin, direction=matrix @ self.direction)
