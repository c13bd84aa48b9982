"""Phong surface material.

A material is either a flat color or a procedural pattern. When both are
set the color wins; when neither is set the surface renders black. The
remaining coefficients drive the Phong lighting model and the recursive
reflection/refraction in the world shading pipeline.

Common refractive indices: vacuum 1.0, air 1.00029, water 1.333,
glass 1.52, diamond 2.417.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.color import Color

if TYPE_CHECKING:
    from whitted.materials.patterns import Pattern


@dataclass
class Material:
    """Surface properties of a shape.

    Attributes:
        color: Flat surface color, or None when a pattern is used.
        pattern: Procedural color function, consulted when color is None.
        ambient: Ambient reflection coefficient in [0, 1].
        diffuse: Diffuse reflection coefficient in [0, 1].
        specular: Specular reflection coefficient in [0, 1].
        shininess: Phong exponent (> 0); larger values give tighter highlights.
        reflective: Mirror reflectance in [0, 1]; 0 disables reflection rays.
        transparency: Transmittance in [0, 1]; 0 disables refraction rays.
        refractive_index: Index of refraction (> 0, 1.0 = vacuum).
    """

    color: Color | None = field(default_factory=Color.white)
    pattern: Pattern | None = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0

    def validate(self) -> None:
        """Check that every coefficient is in its valid range.

        Raises:
            ValueError: If a coefficient is out of range.
        """
        for name in ("ambient", "diffuse", "specular", "reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Material {name} = {value} is outside [0, 1].")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Material refractive_index = {self.refractive_index} must be positive."
            )
