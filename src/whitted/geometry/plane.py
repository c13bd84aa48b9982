"""Infinite plane primitive.

The canonical plane is the xz plane (y = 0) with normal +y. A ray whose
object-space direction has |dy| <= EPSILON is treated as parallel and never
hits, even when it lies in the plane.
"""

from __future__ import annotations

from whitted.core.ray import EPSILON, Ray, Tuple4, point, vector
from whitted.geometry.shape import Shape, ShapeKind


class Plane(Shape):
    """The xz plane, placed in the world by its transform."""

    kind = ShapeKind.PLANE

    def local_intersect(self, ray: Ray) -> list[float]:
        if abs(ray.direction[1]) <= EPSILON:
            return []
        return [-ray.origin[1] / ray.direction[1]]

    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        return vector(0.0, 1.0, 0.0)

    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        """Planar mapping: fractional x and z (tiles every unit square)."""
        return point(p[0] % 1.0, p[2] % 1.0, 0.0)
