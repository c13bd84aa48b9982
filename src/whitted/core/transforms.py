"""Affine 4x4 transformation matrices.

All matrices are float64 NumPy arrays of shape (4, 4). Multiplication uses
NumPy's ``@`` operator for both matrix-matrix and matrix-tuple products.
Rotation helpers take angles in degrees, matching the scene file format.

Example:
    >>> from whitted.core.transforms import scaling, translation
    >>> from whitted.core.ray import point
    >>> m = translation(5.0, -3.0, 2.0) @ scaling(2.0, 2.0, 2.0)
    >>> m @ point(1.0, 1.0, 1.0)
    array([ 7., -1.,  4.,  1.])
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Tuple4, cross, normalize

Matrix4 = npt.NDArray[np.float64]

# Determinants below this magnitude are treated as singular
SINGULAR_TOLERANCE = 1e-12


def identity() -> Matrix4:
    """Return a fresh 4x4 identity matrix."""
    return np.identity(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> Matrix4:
    """Translation matrix. Moves points, leaves vectors unchanged."""
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Scaling matrix along the three axes."""
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def rotation_x(degrees: float) -> Matrix4:
    """Rotation about the x axis by the given angle in degrees."""
    rad = math.radians(degrees)
    m = identity()
    m[1, 1] = math.cos(rad)
    m[1, 2] = -math.sin(rad)
    m[2, 1] = math.sin(rad)
    m[2, 2] = math.cos(rad)
    return m


def rotation_y(degrees: float) -> Matrix4:
    """Rotation about the y axis by the given angle in degrees."""
    rad = math.radians(degrees)
    m = identity()
    m[0, 0] = math.cos(rad)
    m[0, 2] = math.sin(rad)
    m[2, 0] = -math.sin(rad)
    m[2, 2] = math.cos(rad)
    return m


def rotation_z(degrees: float) -> Matrix4:
    """Rotation about the z axis by the given angle in degrees."""
    rad = math.radians(degrees)
    m = identity()
    m[0, 0] = math.cos(rad)
    m[0, 1] = -math.sin(rad)
    m[1, 0] = math.sin(rad)
    m[1, 1] = math.cos(rad)
    return m


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix4:
    """Shearing matrix; each component moves in proportion to another.

    Args:
        xy: x in proportion to y.
        xz: x in proportion to z.
        yx: y in proportion to x.
        yz: y in proportion to z.
        zx: z in proportion to x.
        zy: z in proportion to y.
    """
    m = identity()
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return m


def determinant(m: npt.NDArray[np.float64]) -> float:
    """Compute the determinant of a square matrix.

    Raises:
        ValueError: If the matrix is not square.
    """
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"Cannot compute the determinant of a non-square {m.shape} matrix")
    return float(np.linalg.det(m))


def inverse(m: Matrix4) -> Matrix4:
    """Invert a transformation matrix.

    A singular transform means the scene data is malformed; there is no
    meaningful fallback, so this raises rather than returning garbage.

    Raises:
        ValueError: If the matrix is singular.
    """
    det = determinant(m)
    if abs(det) < SINGULAR_TOLERANCE:
        raise ValueError(f"Matrix is not invertible (determinant {det})")
    return np.linalg.inv(m)


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix4:
    """Build the world-to-camera transform for an eye looking at a target.

    Args:
        from_point: Eye position.
        to_point: Point the eye looks at.
        up: Approximate up direction.

    Returns:
        The view matrix (orientation followed by the eye translation).
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)
    orientation = np.array(
        [
            [left[0], left[1], left[2], 0.0],
            [true_up[0], true_up[1], true_up[2], 0.0],
            [-forward[0], -forward[1], -forward[2], 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )
    return orientation @ translation(-from_point[0], -from_point[1], -from_point[2])
