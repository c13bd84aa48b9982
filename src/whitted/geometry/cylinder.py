"""Unit-radius cylinder primitive around the y axis.

The cylinder body is truncated to min_y <= y <= max_y and is open unless
``closed`` is set, in which case the two end caps (unit disks at min_y and
max_y) are intersected as well.

Body intersection solves the infinite-cylinder quadratic in x and z:

    a = dx^2 + dz^2
    b = 2 (ox dx + oz dz)
    c = ox^2 + oz^2 - 1

When a is (nearly) zero the ray runs parallel to the axis and can only hit
the caps.
"""

from __future__ import annotations

import math

from whitted.core.ray import EPSILON, Ray, Tuple4, point, vector
from whitted.core.transforms import Matrix4
from whitted.geometry.shape import Shape, ShapeKind
from whitted.materials.material import Material


class Cylinder(Shape):
    """A truncated unit cylinder, optionally capped.

    Attributes:
        min_y: Lower bound of the body along y (inclusive).
        max_y: Upper bound of the body along y (inclusive).
        closed: Whether the end caps are solid.
    """

    kind = ShapeKind.CYLINDER

    def __init__(
        self,
        transform: Matrix4 | None = None,
        material: Material | None = None,
        min_y: float = 0.0,
        max_y: float = 1.0,
        closed: bool = False,
    ) -> None:
        super().__init__(transform, material)
        self.min_y = min_y
        self.max_y = max_y
        self.closed = closed

    def local_intersect(self, ray: Ray) -> list[float]:
        ts: list[float] = []
        ox, oy, oz = ray.origin[0], ray.origin[1], ray.origin[2]
        dx, dy, dz = ray.direction[0], ray.direction[1], ray.direction[2]

        a = dx * dx + dz * dz
        if abs(a) > EPSILON:
            b = 2.0 * ox * dx + 2.0 * oz * dz
            c = ox * ox + oz * oz - 1.0
            discriminant = b * b - 4.0 * a * c

            if discriminant >= 0.0:
                sqrt_d = math.sqrt(discriminant)
                for t in ((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a)):
                    y = oy + t * dy
                    if self.min_y <= y <= self.max_y:
                        ts.append(t)

        ts.extend(self._intersect_caps(ray))
        return ts

    def _intersect_caps(self, ray: Ray) -> list[float]:
        if not self.closed or abs(ray.direction[1]) <= EPSILON:
            return []

        ts = []
        for cap_y in (self.min_y, self.max_y):
            t = (cap_y - ray.origin[1]) / ray.direction[1]
            if _within_cap(ray, t):
                ts.append(t)
        return ts

    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        x, y, z = object_point[0], object_point[1], object_point[2]
        dist = x * x + z * z

        if dist < 1.0 and y >= self.max_y - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if dist < 1.0 and y <= self.min_y + EPSILON:
            return vector(0.0, -1.0, 0.0)
        return vector(x, 0.0, z)

    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        """Cylindrical mapping: azimuth around y to u, fractional height to v."""
        theta = math.atan2(p[0], p[2])
        raw_u = theta / (2.0 * math.pi)
        u = 1.0 - (raw_u + 0.5)
        v = p[1] % 1.0
        return point(u, v, 0.0)

    def __repr__(self) -> str:
        return (
            f"Cylinder(min_y={self.min_y}, max_y={self.max_y}, closed={self.closed}, "
            f"transform={self.transform.tolist()!r})"
        )


def _within_cap(ray: Ray, t: float) -> bool:
    """Check whether the ray at t lands inside the unit disk in x and z."""
    x = ray.origin[0] + t * ray.direction[0]
    z = ray.origin[2] + t * ray.direction[2]
    return x * x + z * z <= 1.0
