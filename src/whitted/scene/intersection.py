"""Intersection records and the per-ray shading preparation.

An Intersection is produced for exactly one ray query. It refers to the shape
it was produced against by index into the world's object list, so records
are plain copyable values with no lifetime tie to the world.

A ray query proceeds in three steps:
    1. collect every shape's raw (t, index) records and sort them by t
    2. prepare_computations(): fill in hit point, eye/normal/reflection
       vectors and the over/under points
    3. assign_refractive_indices(): walk the sorted list once with a stack of
       the transparent volumes the ray is currently inside, recording the
       index of the medium being exited (n1) and entered (n2)

Example:
    >>> from whitted.scene.intersection import hit, prepare_computations
    >>> xs = sorted(sphere.intersect(ray), key=lambda i: i.t)
    >>> prepare_computations(xs, ray, [sphere])
    >>> nearest = hit(xs)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.ray import EPSILON, Ray, Tuple4, dot, reflect

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


def _zero() -> Tuple4:
    return np.zeros(4, dtype=np.float64)


@dataclass
class Intersection:
    """Record of a ray-shape intersection.

    Attributes:
        t: Parametric distance along the ray. Negative values lie behind
            the ray origin.
        object_index: Index of the shape in the object list the ray was
            tested against.
        point: World-space hit point.
        over_point: Hit point nudged EPSILON along the normal; origin for
            shadow and reflection rays.
        under_point: Hit point nudged EPSILON against the normal; origin for
            refraction rays.
        eyev: Vector back toward the eye (negated ray direction).
        normalv: Unit surface normal, flipped to face the eye.
        reflectv: Ray direction reflected about the normal.
        inside: Whether the ray origin is inside the shape.
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.

    Every field after object_index is only valid once prepare_computations()
    (and, for n1/n2, assign_refractive_indices()) has run.
    """

    t: float
    object_index: int
    point: Tuple4 = field(default_factory=_zero, repr=False)
    over_point: Tuple4 = field(default_factory=_zero, repr=False)
    under_point: Tuple4 = field(default_factory=_zero, repr=False)
    eyev: Tuple4 = field(default_factory=_zero, repr=False)
    normalv: Tuple4 = field(default_factory=_zero, repr=False)
    reflectv: Tuple4 = field(default_factory=_zero, repr=False)
    inside: bool = False
    n1: float = 1.0
    n2: float = 1.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.object_index == other.object_index

    __hash__ = None  # type: ignore[assignment]


def hit(intersections: Sequence[Intersection]) -> Intersection | None:
    """Find the nearest visible intersection.

    Args:
        intersections: Records sorted by ascending t.

    Returns:
        The first record with t >= 0, or None if there is none.
    """
    for intersection in intersections:
        if intersection.t >= 0.0:
            return intersection
    return None


def prepare_computations(
    intersections: Sequence[Intersection], ray: Ray, objects: Sequence[Shape]
) -> None:
    """Populate the derived shading fields of every record in place.

    Args:
        intersections: Records produced for ray.
        ray: The ray that produced them.
        objects: The object list the records index into.
    """
    eyev = -ray.direction
    for intersection in intersections:
        shape = objects[intersection.object_index]
        intersection.point = ray.position(intersection.t)
        intersection.eyev = eyev
        normalv = shape.normal_at(intersection.point)
        intersection.inside = dot(normalv, eyev) < 0.0
        if intersection.inside:
            normalv = -normalv
        intersection.normalv = normalv
        intersection.over_point = intersection.point + normalv * EPSILON
        intersection.under_point = intersection.point - normalv * EPSILON
        intersection.reflectv = reflect(ray.direction, normalv)


def assign_refractive_indices(
    intersections: Sequence[Intersection], objects: Sequence[Shape]
) -> None:
    """Assign n1/n2 to every record of a t-sorted list.

    The containers stack holds the indices of the shapes the ray is inside.
    Each record toggles its shape's membership; the shape is removed from
    wherever it sits in the stack, since the entry and exit of overlapping
    volumes need not be adjacent.

    Args:
        intersections: Records sorted by ascending t.
        objects: The object list the records index into.
    """
    containers: list[int] = []
    for intersection in intersections:
        intersection.n1 = (
            objects[containers[-1]].material.refractive_index if containers else 1.0
        )

        if intersection.object_index in containers:
            containers.remove(intersection.object_index)
        else:
            containers.append(intersection.object_index)

        intersection.n2 = (
            objects[containers[-1]].material.refractive_index if containers else 1.0
        )


def schlick(comps: Intersection) -> float:
    """Approximate the Fresnel reflectance at a prepared intersection.

    Returns:
        The fraction of light reflected, in [0, 1]. Exactly 1.0 under total
        internal reflection.
    """
    cos = dot(comps.eyev, comps.normalv)
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
