"""Axis-aligned unit cube primitive.

The canonical cube spans [-1, 1] on every axis. Intersection uses the slab
method: each axis yields an entry/exit pair of t values, the ray is inside
the cube between the largest entry and the smallest exit, and it misses when
that interval is empty.
"""

from __future__ import annotations

import math

from whitted.core.ray import EPSILON, Ray, Tuple4, point, vector
from whitted.geometry.shape import Shape, ShapeKind


def check_axis(origin: float, direction: float) -> tuple[float, float]:
    """Intersect one axis slab [-1, 1].

    Args:
        origin: Ray origin component along the axis.
        direction: Ray direction component along the axis.

    Returns:
        (tmin, tmax) for the slab, ordered. A direction of (nearly) zero
        yields signed infinities, so the slab either never constrains the
        ray or rejects it outright.
    """
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) > EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = math.copysign(math.inf, tmin_numerator)
        tmax = math.copysign(math.inf, tmax_numerator)

    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax


class Cube(Shape):
    """An axis-aligned cube from -1 to 1, placed in the world by its transform."""

    kind = ShapeKind.CUBE

    def local_intersect(self, ray: Ray) -> list[float]:
        xtmin, xtmax = check_axis(ray.origin[0], ray.direction[0])
        ytmin, ytmax = check_axis(ray.origin[1], ray.direction[1])
        ztmin, ztmax = check_axis(ray.origin[2], ray.direction[2])

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)

        if tmin > tmax:
            return []
        return [tmin, tmax]

    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        # The face is the axis with the largest absolute coordinate
        ax, ay, az = abs(object_point[0]), abs(object_point[1]), abs(object_point[2])
        maxc = max(ax, ay, az)

        if maxc == ax:
            return vector(object_point[0], 0.0, 0.0)
        if maxc == ay:
            return vector(0.0, object_point[1], 0.0)
        return vector(0.0, 0.0, object_point[2])

    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        # Cube texture mapping is not implemented; coordinates pass through
        return point(p[0], p[1], p[2])
