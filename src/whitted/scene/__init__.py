"""Scene module for intersection records, lighting and the world.

Components:
    intersection: Intersection records, hit selection, shading preparation,
        refractive-index assignment and the Schlick approximation
    light: Point light and Phong illumination
    world: Object/light container and recursive color computation
    defaults: Canonical fixture scenes
    loader: JSON scene files
"""

from .intersection import (
    Intersection,
    assign_refractive_indices,
    hit,
    prepare_computations,
    schlick,
)
from .light import PointLight, surface_color
from .world import MAX_RECURSION_DEPTH, World

# Note: defaults and loader are NOT imported here to avoid circular imports
# (geometry imports scene.intersection). Import them directly:
#   from whitted.scene.defaults import default_world
#   from whitted.scene.loader import load_scene

__all__ = [
    # Intersection module
    "Intersection",
    "hit",
    "prepare_computations",
    "assign_refractive_indices",
    "schlick",
    # Light module
    "PointLight",
    "surface_color",
    # World module
    "World",
    "MAX_RECURSION_DEPTH",
]
