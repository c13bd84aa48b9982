"""World container and the recursive Whitted shading pipeline.

The world owns the object list and the light list for the whole render and
is never mutated once built, which is what lets many threads call
``color_at`` concurrently without locking. Intersection records refer to
objects by their index in ``World.objects``.

Shading a ray:
    color_at(ray, depth)
      -> intersect(ray)                       sorted, prepared, n1/n2 assigned
      -> hit(...)                             nearest t >= 0, else black
      -> shade_hit(hit)                       Phong from every light
      -> reflected_color_at(hit, depth)       recurses with depth + 1
      -> refracted_color_at(hit, depth)       recurses with depth + 1
      -> Schlick blend when the surface is both reflective and transparent

Recursion bottoms out at MAX_RECURSION_DEPTH or when a ray escapes.

Example:
    >>> from whitted.scene.defaults import default_world
    >>> from whitted.core.ray import Ray, point, vector
    >>> world = default_world()
    >>> world.color_at(Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)))
    Color(r=0.38066..., g=0.47583..., b=0.2855...)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.color import Color
from whitted.core.ray import Ray, Tuple4, dot, magnitude, normalize
from whitted.scene.intersection import (
    Intersection,
    assign_refractive_indices,
    hit,
    prepare_computations,
    schlick,
)
from whitted.scene.light import PointLight

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape

# Maximum number of secondary-ray bounces below a primary ray
MAX_RECURSION_DEPTH = 10


@dataclass(frozen=True)
class World:
    """An immutable collection of shapes and point lights.

    Attributes:
        objects: Shapes in the scene; intersections refer to them by index.
        lights: Point lights illuminating the scene.
    """

    objects: tuple[Shape, ...] = field(default_factory=tuple)
    lights: tuple[PointLight, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "lights", tuple(self.lights))

    def with_objects(self, objects: Iterable[Shape]) -> World:
        """Return a copy of this world with a different object list."""
        return World(tuple(objects), self.lights)

    def with_lights(self, lights: Iterable[PointLight]) -> World:
        """Return a copy of this world with a different light list."""
        return World(self.objects, tuple(lights))

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every object in the world.

        Returns:
            All intersections sorted by ascending t, with shading fields
            prepared and refractive indices assigned.
        """
        intersections: list[Intersection] = []
        for index, shape in enumerate(self.objects):
            intersections.extend(shape.intersect(ray, index))
        intersections.sort(key=lambda i: i.t)

        prepare_computations(intersections, ray, self.objects)
        assign_refractive_indices(intersections, self.objects)
        return intersections

    def is_shadowed(self, world_point: Tuple4, light: PointLight) -> bool:
        """Check whether any object lies between a point and a light.

        Every object blocks light, whatever its transparency.
        """
        to_light = light.position - world_point
        distance = magnitude(to_light)
        intersections = self.intersect(Ray(world_point, normalize(to_light)))
        nearest = hit(intersections)
        return nearest is not None and nearest.t < distance

    def shade_hit(self, comps: Intersection) -> Color:
        """Sum the local illumination from every light at a prepared hit."""
        shape = self.objects[comps.object_index]
        color = Color.black()
        for light in self.lights:
            shadowed = self.is_shadowed(comps.over_point, light)
            color = color + light.lighting(
                shape, comps.point, comps.eyev, comps.normalv, shadowed
            )
        return color

    def color_at(self, ray: Ray, depth: int = 0) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace.
            depth: Number of bounces already taken; 0 for a primary ray.

        Returns:
            Black if nothing is hit, otherwise the local color plus the
            reflected and refracted contributions.
        """
        comps = hit(self.intersect(ray))
        if comps is None:
            return Color.black()

        surface = self.shade_hit(comps)
        reflected = self.reflected_color_at(comps, depth)
        refracted = self.refracted_color_at(comps, depth)

        material = self.objects[comps.object_index].material
        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def reflected_color_at(self, comps: Intersection, depth: int = 0) -> Color:
        """Color arriving along the reflection vector, scaled by reflectivity."""
        reflective = self.objects[comps.object_index].material.reflective
        if reflective <= 0.0 or depth >= MAX_RECURSION_DEPTH:
            return Color.black()

        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, depth + 1) * reflective

    def refracted_color_at(self, comps: Intersection, depth: int = 0) -> Color:
        """Color arriving through the surface, scaled by transparency.

        Snell's law in vector form, with n1 and n2 taken from the record.
        Total internal reflection contributes black.
        """
        transparency = self.objects[comps.object_index].material.transparency
        if transparency <= 0.0 or depth >= MAX_RECURSION_DEPTH:
            return Color.black()

        n_ratio = comps.n1 / comps.n2
        cos_i = dot(comps.eyev, comps.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t >= 1.0:
            return Color.black()

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, depth + 1) * transparency
