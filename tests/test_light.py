"""Unit tests for materials and Phong lighting.

Tests cover:
- Material defaults and validation
- Base color resolution (color, pattern, neither)
- Ambient, diffuse and specular terms for eye/light placements
- Shadowed surfaces receiving ambient only
"""

import math

import pytest

from whitted.core.color import Color
from whitted.core.ray import point, vector
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material
from whitted.materials.patterns import StripePattern
from whitted.scene.light import PointLight, surface_color

HALF = math.sqrt(2.0) / 2.0


@pytest.fixture
def position():
    return point(0.0, 0.0, 0.0)


@pytest.fixture
def normalv():
    return vector(0.0, 0.0, -1.0)


class TestMaterial:
    """Tests for material defaults and validation."""

    def test_defaults(self):
        """Default Phong coefficients."""
        m = Material()
        assert m.color == Color.white()
        assert m.pattern is None
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == 1.0

    def test_validate_accepts_defaults(self):
        """The default material is valid."""
        Material().validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ambient": -0.1},
            {"diffuse": 1.5},
            {"reflective": 2.0},
            {"transparency": -1.0},
            {"shininess": 0.0},
            {"refractive_index": 0.0},
        ],
    )
    def test_validate_rejects_out_of_range(self, kwargs):
        """Coefficients outside their range raise."""
        with pytest.raises(ValueError):
            Material(**kwargs).validate()


class TestSurfaceColor:
    """Tests for base color resolution."""

    def test_color_wins_over_pattern(self):
        """A flat color takes precedence."""
        shape = Sphere(
            material=Material(color=Color(0.2, 0.4, 0.6), pattern=StripePattern(Color.white(), Color.black()))
        )
        assert surface_color(shape, point(1.5, 0.0, 0.0)) == Color(0.2, 0.4, 0.6)

    def test_pattern_used_without_color(self):
        """The pattern supplies the color when none is set."""
        shape = Sphere(material=Material(color=None, pattern=StripePattern(Color.white(), Color.black())))
        assert surface_color(shape, point(0.5, 0.0, 0.0)) == Color.white()
        assert surface_color(shape, point(1.5, 0.0, 0.0)) == Color.black()

    def test_neither_is_black(self):
        """No color and no pattern renders black."""
        shape = Sphere(material=Material(color=None))
        assert surface_color(shape, point(0.0, 0.0, 0.0)) == Color.black()


class TestLighting:
    """Tests for the Phong model with the default material."""

    def test_eye_between_light_and_surface(self, position, normalv):
        """Full ambient, diffuse and specular saturate at white."""
        light = PointLight(point(0.0, 0.0, -10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, 0.0, -1.0), normalv)
        assert c.as_tuple() == pytest.approx((1.0, 1.0, 1.0))

    def test_eye_offset_45_degrees(self, position, normalv):
        """The specular term vanishes off the reflection axis."""
        light = PointLight(point(0.0, 0.0, -10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, HALF, -HALF), normalv)
        assert c.as_tuple() == pytest.approx((1.0, 1.0, 1.0))

    def test_light_offset_45_degrees(self, position, normalv):
        """Diffuse falls off with the light angle."""
        light = PointLight(point(0.0, 10.0, -10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, 0.0, -1.0), normalv)
        assert c.as_tuple() == pytest.approx((0.7364, 0.7364, 0.7364), abs=1e-4)

    def test_eye_in_reflection_path(self, position, normalv):
        """Full specular with an angled light saturates."""
        light = PointLight(point(0.0, 10.0, -10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, -HALF, -HALF), normalv)
        assert c.as_tuple() == pytest.approx((1.0, 1.0, 1.0))

    def test_light_behind_surface(self, position, normalv):
        """Only ambient reaches a surface facing away from the light."""
        light = PointLight(point(0.0, 0.0, 10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, 0.0, -1.0), normalv)
        assert c.as_tuple() == pytest.approx((0.1, 0.1, 0.1))

    def test_surface_in_shadow(self, position, normalv):
        """A shadowed point receives ambient only."""
        light = PointLight(point(0.0, 0.0, -10.0), Color.white())
        c = light.lighting(Sphere(), position, vector(0.0, 0.0, -1.0), normalv, in_shadow=True)
        assert c.as_tuple() == pytest.approx((0.1, 0.1, 0.1))

    def test_light_intensity_tints(self, position, normalv):
        """The light color modulates the surface color."""
        light = PointLight(point(0.0, 0.0, 10.0), Color(1.0, 0.5, 0.0))
        c = light.lighting(Sphere(), position, vector(0.0, 0.0, -1.0), normalv)
        assert c.as_tuple() == pytest.approx((0.1, 0.05, 0.0))

    def test_pattern_drives_lighting(self, normalv):
        """With a pattern the lit color follows the stripes."""
        material = Material(
            color=None,
            pattern=StripePattern(Color.white(), Color.black()),
            ambient=1.0,
            diffuse=0.0,
            specular=0.0,
        )
        shape = Sphere(material=material)
        light = PointLight(point(0.0, 0.0, -10.0), Color.white())
        eyev = vector(0.0, 0.0, -1.0)
        c1 = light.lighting(shape, point(0.9, 0.0, 0.0), eyev, normalv)
        c2 = light.lighting(shape, point(1.1, 0.0, 0.0), eyev, normalv)
        assert c1 == Color.white()
        assert c2 == Color.black()
