"""Geometry module for ray-primitive intersection.

Every primitive lives in a canonical object space and is placed in the
world by its transform:

Primitives:
    sphere: Unit sphere at the origin
    plane: The xz plane (y = 0)
    cube: Axis-aligned cube spanning [-1, 1] on each axis
    cylinder: Unit-radius cylinder around y, truncated and optionally capped
    triangle: Flat triangle given by three vertices
"""

from .cube import Cube, check_axis
from .cylinder import Cylinder
from .plane import Plane
from .shape import Shape, ShapeKind
from .sphere import Sphere
from .triangle import Triangle

__all__ = [
    "Shape",
    "ShapeKind",
    "Sphere",
    "Plane",
    "Cube",
    "check_axis",
    "Cylinder",
    "Triangle",
]
