"""Unit sphere primitive.

The canonical sphere is centered at the origin with radius 1. Ray-sphere
intersection solves the quadratic

    |O + tD|^2 = 1

in object space, where O is the ray origin as a vector from the center:

    a = D . D
    b = 2 (D . O)
    c = O . O - 1

A negative discriminant means a miss; otherwise both roots are returned,
smaller first (a tangent ray yields the same t twice).

Example:
    >>> from whitted.geometry.sphere import Sphere
    >>> from whitted.core.ray import Ray, point, vector
    >>> ray = Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> [i.t for i in Sphere().intersect(ray)]
    [4.0, 6.0]
"""

from __future__ import annotations

import math

from whitted.core.ray import ORIGIN, Ray, Tuple4, dot, point
from whitted.geometry.shape import Shape, ShapeKind


class Sphere(Shape):
    """A unit sphere at the origin, placed in the world by its transform."""

    kind = ShapeKind.SPHERE

    def local_intersect(self, ray: Ray) -> list[float]:
        sphere_to_ray = ray.origin - ORIGIN
        a = dot(ray.direction, ray.direction)
        b = 2.0 * dot(ray.direction, sphere_to_ray)
        c = dot(sphere_to_ray, sphere_to_ray) - 1.0
        discriminant = b * b - 4.0 * a * c

        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [t1, t2]

    def local_normal_at(self, object_point: Tuple4) -> Tuple4:
        return object_point - ORIGIN

    def uv_coordinates(self, p: Tuple4) -> Tuple4:
        """Spherical mapping: azimuth around y to u, polar angle to v."""
        theta = math.atan2(p[0], p[2])
        radius = math.sqrt(p[0] * p[0] + p[1] * p[1] + p[2] * p[2])

        raw_u = theta / (2.0 * math.pi)
        u = 1.0 - (raw_u + 0.5)
        if radius == 0.0:
            # Polar angle is undefined at the center
            return point(u, 0.5, 0.0)
        phi = math.acos(p[1] / radius)
        v = 1.0 - phi / math.pi
        return point(u, v, 0.0)
