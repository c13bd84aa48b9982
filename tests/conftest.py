"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import math

import pytest
import taichi as ti

from whitted.core.color import Color
from whitted.core.ray import Ray, point, vector
from whitted.core.transforms import translation
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material
from whitted.scene.defaults import default_world


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Ray generation runs
    in float64.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture
def world():
    """The two-sphere default world."""
    return default_world()


@pytest.fixture
def front_ray():
    """Ray from (0, 0, -5) along +z, through the center of the default world."""
    return Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))


@pytest.fixture
def refraction_world():
    """Default world plus a translucent floor and a red ball beneath it.

    Objects: the two default spheres, the floor at index 2 and the ball at
    index 3. The floor is a plane at y = -1 with transparency 0.5 and
    refractive index 1.5.
    """
    base = default_world()
    floor = Plane(
        transform=translation(0.0, -1.0, 0.0),
        material=Material(transparency=0.5, refractive_index=1.5),
    )
    ball = Sphere(
        transform=translation(0.0, -3.5, -0.5),
        material=Material(color=Color(1.0, 0.0, 0.0), ambient=0.5),
    )
    return base.with_objects(base.objects + (floor, ball))


@pytest.fixture
def floor_ray():
    """Ray from (0, 0, -3) angled down 45 degrees toward the floor at y = -1."""
    half = math.sqrt(2.0) / 2.0
    return Ray(point(0.0, 0.0, -3.0), vector(0.0, -half, half))
