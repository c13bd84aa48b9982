"""Point light and the Phong local illumination model.

The lighting result at a surface point is the sum of three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * (light . normal)
    specular = intensity * specular * (reflect . eye) ^ shininess

where effective_color is the surface color modulated by the light
intensity. Diffuse and specular are only added when the light lies on the
visible side of the surface and the point is not in shadow. Colors sum with
clamped channel addition, so over-bright highlights saturate at white.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.color import Color
from whitted.core.ray import Tuple4, dot, normalize, reflect

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


def surface_color(shape: Shape, world_point: Tuple4) -> Color:
    """Resolve the base color of a shape at a point.

    A flat material color takes precedence over a pattern; a material with
    neither renders black.
    """
    material = shape.material
    if material.color is not None:
        return material.color
    if material.pattern is not None:
        return material.pattern.color_at(shape, world_point)
    return Color.black()


@dataclass(frozen=True, eq=False)
class PointLight:
    """A point light source with no size.

    Attributes:
        position: Light position in world space.
        intensity: Light color and brightness.
    """

    position: Tuple4
    intensity: Color = field(default_factory=Color.white)

    def lighting(
        self,
        shape: Shape,
        world_point: Tuple4,
        eyev: Tuple4,
        normalv: Tuple4,
        in_shadow: bool = False,
    ) -> Color:
        """Evaluate Phong illumination from this light at a surface point.

        Args:
            shape: The shape being lit; supplies the material and pattern.
            world_point: The surface point in world space.
            eyev: Unit vector toward the eye.
            normalv: Unit surface normal, facing the eye.
            in_shadow: Whether the point is occluded from this light.

        Returns:
            The clamped color contributed by this light.
        """
        material = shape.material
        effective_color = surface_color(shape, world_point) * self.intensity
        ambient = effective_color * material.ambient

        lightv = normalize(self.position - world_point)
        light_dot_normal = dot(lightv, normalv)
        if light_dot_normal < 0.0 or in_shadow:
            return ambient

        diffuse = effective_color * (material.diffuse * light_dot_normal)

        reflectv = reflect(-lightv, normalv)
        reflect_dot_eye = dot(reflectv, eyev)
        if reflect_dot_eye <= 0.0:
            specular = Color.black()
        else:
            factor = reflect_dot_eye**material.shininess
            specular = self.intensity * (material.specular * factor)

        return ambient + diffuse + specular
