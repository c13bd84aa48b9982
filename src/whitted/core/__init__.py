"""Core math module.

This module contains the building blocks every other subpackage uses:

Components:
    ray: Homogeneous point/vector tuples, vector utilities and the Ray type
    transforms: 4x4 affine transform construction, inversion and view setup
    color: Clamped RGB color
"""

from .color import Color
from .ray import (
    EPSILON,
    ORIGIN,
    Ray,
    Tuple4,
    cross,
    dot,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)
from .transforms import (
    Matrix4,
    determinant,
    identity,
    inverse,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)

__all__ = [
    # Ray module
    "EPSILON",
    "ORIGIN",
    "Ray",
    "Tuple4",
    "point",
    "vector",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "reflect",
    # Transforms module
    "Matrix4",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "determinant",
    "inverse",
    "view_transform",
    # Color module
    "Color",
]
