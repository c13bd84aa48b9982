"""Shape base class shared by all geometric primitives.

The set of primitives is closed: sphere, plane, cube, cylinder and triangle,
tagged by ``ShapeKind``. Every primitive is defined in its own canonical
object space and placed in the world by an affine transform. The base class
owns that transform together with its cached inverse and inverse transpose,
which are always recomputed together when the transform is assigned.

Ray-object intersection follows the pattern:
    local_ray = ray.transform(shape.inverse)
    ts = shape.local_intersect(local_ray)
    -> [Intersection(t, object_index) for t in ts]

Normals are computed on demand: the world point is taken into object space,
the primitive supplies its object-space normal, and the result is carried
back with the transpose of the inverse transform (correct under non-uniform
scaling), with w forced to zero before renormalizing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

import numpy as np

from whitted.core.ray import Ray, Tuple4, normalize
from whitted.core.transforms import Matrix4, identity, inverse
from whitted.materials.material import Material
from whitted.scene.intersection import Intersection


class ShapeKind(IntEnum):
    """Enumeration of supported primitive types."""

    SPHERE = 0
    PLANE = 1
    CUBE = 2
    CYLINDER = 3
    TRIANGLE = 4


class Shape(ABC):
    """A transformed geometric primitive with a material.

    Attributes:
        kind: The primitive type tag.
        material: Surface properties used by the lighting model.
    """

    kind: ShapeKind

    def __init__(self, transform: Matrix4 | None = None, material: Material | None = None) -> None:
        self.material = material if material is not None else Material()
        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix4:
        """Object-to-world transform."""
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4) -> None:
        # Compute before assigning so a singular matrix leaves the shape intact
        inv = inverse(value)
        self._transform = np.array(value, dtype=np.float64)
        self._inverse = inv
        self._inverse_transpose = inv.T.copy()
        self._on_transform_changed()

    @property
    def inverse(self) -> Matrix4:
        """World-to-object transform (cached inverse of ``transform``)."""
        return self._inverse

    def _on_transform_changed(self) -> None:
        """Hook for primitives that cache world-space data."""

    def intersect(self, ray: Ray, index: int = 0) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Args:
            ray: The ray in world space.
            index: Position of this shape in the world's object list; stored
                in each returned record.

        Returns:
            Unsorted, un-enriched intersection records (may be empty).
        """
        local_ray = ray.transform(self._inverse)
        return [Intersection(t, index) for t in self.local_intersect(local_ray)]

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        """Compute the unit world-space surface normal at a point on the shape."""
        object_point = self._inverse @ world_point
        object_normal = self.local_normal_at(object_point)
        world_normal = self._inverse_transpose @ object_normal
        world_normal[3] = 0.0
        return normalize(world_normal)

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[float]:
        """Return the t values where an object-space ray meets the primitive."""

    @abstractmethod
    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        """Return the (not necessarily unit) object-space normal at a point."""

    @abstractmethod
    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        """Map a point to texture coordinates, returned as a point (u, v, w)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self._transform.tolist()!r})"
