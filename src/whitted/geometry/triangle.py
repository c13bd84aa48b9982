"""Flat triangle primitive.

Unlike the other primitives, a triangle caches its geometry in world space:
the three vertices are transformed once whenever the transform changes, and
the edge vectors and flat normal are derived from them. Intersection runs
Moller-Trumbore directly against the world-space ray.
"""

from __future__ import annotations

from whitted.core.ray import EPSILON, Ray, Tuple4, cross, dot, normalize, point
from whitted.core.transforms import Matrix4
from whitted.geometry.shape import Shape, ShapeKind
from whitted.materials.material import Material
from whitted.scene.intersection import Intersection


class Triangle(Shape):
    """A triangle given by three object-space vertices.

    Attributes:
        original_p1, original_p2, original_p3: Untransformed vertices.
        p1, p2, p3: Vertices in world space.
        e1: Edge p2 - p1.
        e2: Edge p3 - p1.
        normal: Unit flat normal, e2 x e1.
    """

    kind = ShapeKind.TRIANGLE

    def __init__(
        self,
        p1: Tuple4,
        p2: Tuple4,
        p3: Tuple4,
        transform: Matrix4 | None = None,
        material: Material | None = None,
    ) -> None:
        self.original_p1 = p1
        self.original_p2 = p2
        self.original_p3 = p3
        super().__init__(transform, material)

    def _on_transform_changed(self) -> None:
        self.p1 = self.transform @ self.original_p1
        self.p2 = self.transform @ self.original_p2
        self.p3 = self.transform @ self.original_p3
        self.e1 = self.p2 - self.p1
        self.e2 = self.p3 - self.p1
        self.normal = normalize(cross(self.e2, self.e1))

    def intersect(self, ray: Ray, index: int = 0) -> list[Intersection]:
        # Cached geometry is already in world space
        return [Intersection(t, index) for t in self.local_intersect(ray)]

    def local_intersect(self, ray: Ray) -> list[float]:
        dir_cross_e2 = cross(ray.direction, self.e2)
        det = dot(self.e1, dir_cross_e2)
        if abs(det) < EPSILON:
            return []

        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * dot(p1_to_origin, dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []

        origin_cross_e1 = cross(p1_to_origin, self.e1)
        v = f * dot(ray.direction, origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []

        return [f * dot(self.e2, origin_cross_e1)]

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        return self.normal.copy()

    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        return self.normal.copy()

    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        # Triangle texture mapping is not implemented; coordinates pass through
        return point(p[0], p[1], p[2])
