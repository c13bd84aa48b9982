"""Canonical scenes used as regression fixtures."""

from __future__ import annotations

from whitted.core.color import Color
from whitted.core.ray import point
from whitted.core.transforms import Matrix4, scaling
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material
from whitted.scene.light import PointLight
from whitted.scene.world import World


def default_world() -> World:
    """Two concentric spheres lit by a single white light.

    The outer unit sphere is greenish with diffuse 0.7 and specular 0.2; the
    inner sphere is scaled by 0.5 with the default material. The light sits at
    (-10, 10, -10).
    """
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    )
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), Color.white())
    return World((outer, inner), (light,))


def glass_sphere(transform: Matrix4 | None = None, refractive_index: float = 1.5) -> Sphere:
    """A fully transparent unit sphere of the given refractive index."""
    return Sphere(
        transform=transform,
        material=Material(transparency=1.0, refractive_index=refractive_index),
    )
