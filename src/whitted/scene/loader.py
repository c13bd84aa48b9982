"""JSON scene files.

A scene file is a JSON object with these keys:

    camera           {width, height, field_of_view (radians), from, to, up}
    lights           [{position, intensity}, ...]
    transformations  optional {name: [step, ...]}
    patterns         optional {name: {pattern, a, b, transformations}}
    materials        optional {name: {color | pattern, ambient, diffuse, ...}}
    objects          optional {name: {shape, material, overrides..., transformations}}

A transformation step is either

    {"transformation": "translate" | "scale" | "rotate-x" | "rotate-y"
                       | "rotate-z" | "shear", "parameters": [...]}

or ``{"defined_transformation": name}``; steps are composed left to right by
matrix multiplication. Named transformations may refer to ones defined
before them. Rotation parameters are in degrees.

Objects keep the order they appear in the file, which is also their index
in the resulting world.

Example:
    >>> from whitted.scene.loader import load_scene
    >>> scene = load_scene("scenes/test.json")
    >>> image = scene.camera.render(scene.world)
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from whitted.camera.camera import Camera
from whitted.core.color import Color
from whitted.core.ray import Tuple4, point, vector
from whitted.core.transforms import (
    Matrix4,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from whitted.geometry.cube import Cube
from whitted.geometry.cylinder import Cylinder
from whitted.geometry.plane import Plane
from whitted.geometry.shape import Shape
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle
from whitted.materials.material import Material
from whitted.materials.patterns import PATTERN_TYPES, Pattern
from whitted.scene.light import PointLight
from whitted.scene.world import World

# Material keys that may be given on a material or overridden on an object
MATERIAL_SCALARS = (
    "ambient",
    "diffuse",
    "specular",
    "shininess",
    "reflective",
    "transparency",
    "refractive_index",
)


@dataclass(frozen=True)
class Scene:
    """A parsed scene, ready to render.

    Attributes:
        world: The objects and lights.
        camera: The configured camera.
    """

    world: World
    camera: Camera


# =============================================================================
# Transformations
# =============================================================================


def _expect_length(values: Sequence[float], length: int, what: str) -> None:
    if len(values) < length:
        raise ValueError(f"{what} needs {length} parameters, got {len(values)}")


def _transformation_step(name: str, p: Sequence[float]) -> Matrix4:
    if name == "translate":
        _expect_length(p, 3, name)
        return translation(p[0], p[1], p[2])
    if name == "scale":
        _expect_length(p, 3, name)
        return scaling(p[0], p[1], p[2])
    if name == "rotate-x":
        _expect_length(p, 1, name)
        return rotation_x(p[0])
    if name == "rotate-y":
        _expect_length(p, 1, name)
        return rotation_y(p[0])
    if name == "rotate-z":
        _expect_length(p, 1, name)
        return rotation_z(p[0])
    if name == "shear":
        _expect_length(p, 6, name)
        return shearing(p[0], p[1], p[2], p[3], p[4], p[5])
    raise ValueError(f"Undefined transformation: {name!r}")


def make_transformation(
    steps: Sequence[Mapping[str, Any]], defined: Mapping[str, Matrix4]
) -> Matrix4:
    """Compose a list of transformation steps into one matrix.

    Args:
        steps: Transformation steps, applied by left-to-right multiplication.
        defined: Previously built named transformations.

    Returns:
        The composed 4x4 matrix (identity for an empty list).

    Raises:
        ValueError: If a step names an unknown transformation.
    """
    result = identity()
    for step in steps:
        if "defined_transformation" in step:
            key = step["defined_transformation"]
            if key not in defined:
                raise ValueError(f"Undefined transformation: {key!r}")
            matrix = defined[key]
        else:
            if "transformation" not in step:
                raise ValueError(f"Transformation step has no type: {dict(step)!r}")
            matrix = _transformation_step(step["transformation"], step.get("parameters", []))
        result = result @ matrix
    return result


# =============================================================================
# Scene Sections
# =============================================================================


def _make_point(values: Sequence[float], what: str) -> Tuple4:
    _expect_length(values, 3, what)
    return point(values[0], values[1], values[2])


def make_camera(data: Mapping[str, Any]) -> Camera:
    """Build the camera from the ``camera`` section."""
    try:
        from_point = _make_point(data["from"], "camera from")
        to_point = _make_point(data["to"], "camera to")
        up = data["up"]
        _expect_length(up, 3, "camera up")
        transform = view_transform(from_point, to_point, vector(up[0], up[1], up[2]))
        return Camera(
            int(data["width"]), int(data["height"]), float(data["field_of_view"]), transform
        )
    except KeyError as e:
        raise ValueError(f"Camera is missing key {e}") from e


def make_pattern(data: Mapping[str, Any], defined: Mapping[str, Matrix4]) -> Pattern:
    """Build a pattern from its scene description."""
    kind = data.get("pattern")
    if kind not in PATTERN_TYPES:
        raise ValueError(f"Undefined pattern: {kind!r}")
    if "a" not in data or "b" not in data:
        raise ValueError(f"Pattern {kind!r} needs both colors 'a' and 'b'")

    transform = make_transformation(data.get("transformations", []), defined)
    return PATTERN_TYPES[kind](
        Color.from_sequence(data["a"]), Color.from_sequence(data["b"]), transform
    )


def _apply_material_fields(
    material: Material, data: Mapping[str, Any], patterns: Mapping[str, Pattern]
) -> Material:
    changes: dict[str, Any] = {}
    if "color" in data:
        changes["color"] = Color.from_sequence(data["color"])
    elif "pattern" in data:
        name = data["pattern"]
        if name not in patterns:
            raise ValueError(f"Undefined pattern: {name!r}")
        changes["color"] = None
        changes["pattern"] = patterns[name]

    for key in MATERIAL_SCALARS:
        if key in data:
            changes[key] = float(data[key])

    return replace(material, **changes)


def make_material(data: Mapping[str, Any], patterns: Mapping[str, Pattern]) -> Material:
    """Build a named material from its scene description."""
    material = _apply_material_fields(Material(), data, patterns)
    material.validate()
    return material


def make_shape(data: Mapping[str, Any]) -> Shape:
    """Build an untransformed shape with a default material."""
    kind = data.get("shape")
    if kind == "sphere":
        return Sphere()
    if kind == "plane":
        return Plane()
    if kind == "cube":
        return Cube()
    if kind == "cylinder":
        return Cylinder(
            min_y=float(data.get("min_y", 0.0)),
            max_y=float(data.get("max_y", 1.0)),
            closed=bool(data.get("closed", False)),
        )
    if kind == "triangle":
        try:
            return Triangle(
                _make_point(data["p1"], "triangle p1"),
                _make_point(data["p2"], "triangle p2"),
                _make_point(data["p3"], "triangle p3"),
            )
        except KeyError as e:
            raise ValueError(f"Triangle is missing vertex {e}") from e
    raise ValueError(f"Undefined shape: {kind!r}")


def make_object(
    data: Mapping[str, Any],
    materials: Mapping[str, Material],
    patterns: Mapping[str, Pattern],
    defined: Mapping[str, Matrix4],
) -> Shape:
    """Build a transformed shape with its resolved material."""
    if "material" in data:
        name = data["material"]
        if name not in materials:
            raise ValueError(f"Undefined material: {name!r}")
        base = materials[name]
    else:
        base = Material()

    material = _apply_material_fields(base, data, patterns)
    material.validate()

    shape = make_shape(data)
    shape.material = material
    shape.transform = make_transformation(data.get("transformations", []), defined)
    return shape


def make_world(data: Mapping[str, Any]) -> World:
    """Build the world from a parsed scene dictionary."""
    lights = []
    for light in data.get("lights", []):
        if "position" not in light:
            raise ValueError("Light is missing key 'position'")
        position = _make_point(light["position"], "light position")
        intensity = Color.from_sequence(light.get("intensity", [1.0, 1.0, 1.0]))
        lights.append(PointLight(position, intensity))

    defined: dict[str, Matrix4] = {}
    for name, steps in data.get("transformations", {}).items():
        defined[name] = make_transformation(steps, defined)

    patterns = {
        name: make_pattern(pattern, defined)
        for name, pattern in data.get("patterns", {}).items()
    }
    materials = {
        name: make_material(material, patterns)
        for name, material in data.get("materials", {}).items()
    }
    objects = [
        make_object(obj, materials, patterns, defined)
        for obj in data.get("objects", {}).values()
    ]
    return World(tuple(objects), tuple(lights))


# =============================================================================
# Entry Points
# =============================================================================


def parse_scene(data: Mapping[str, Any]) -> Scene:
    """Build a scene from an already-decoded JSON object.

    Raises:
        ValueError: If the description is incomplete or names anything
            undefined.
    """
    if "camera" not in data:
        raise ValueError("Scene has no camera")
    return Scene(world=make_world(data), camera=make_camera(data["camera"]))


def load_scene(path: str | Path) -> Scene:
    """Read and build a scene from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or is not a valid scene.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid scene file {path}: {e}") from e
    return parse_scene(data)
