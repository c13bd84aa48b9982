"""Procedural color patterns.

A pattern maps a world-space point on a shape to a color. Lookup always goes
world -> object space (through the shape's inverse transform) -> pattern
space (through the pattern's own inverse transform), and then applies a pure
function of the pattern-space coordinates. All patterns tile across integer
coordinate boundaries.

Example:
    >>> from whitted.core.color import Color
    >>> from whitted.core.transforms import scaling
    >>> from whitted.materials.patterns import StripePattern
    >>> stripes = StripePattern(Color.white(), Color.black(), scaling(0.5, 1.0, 1.0))
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.color import Color
from whitted.core.ray import Tuple4
from whitted.core.transforms import Matrix4, identity, inverse

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


class Pattern(ABC):
    """Base class for patterns; owns the pattern transform and its inverse."""

    def __init__(self, transform: Matrix4 | None = None) -> None:
        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4) -> None:
        inv = inverse(value)
        self._transform = np.array(value, dtype=np.float64)
        self._inverse = inv

    @property
    def inverse(self) -> Matrix4:
        return self._inverse

    def to_pattern_space(self, shape: Shape, world_point: Tuple4) -> Tuple4:
        """Convert a world-space point to this pattern's coordinate frame."""
        object_point = shape.inverse @ world_point
        return self._inverse @ object_point

    def color_at(self, shape: Shape, world_point: Tuple4) -> Color:
        """Color of the pattern at a world-space point on shape."""
        return self.pattern_color_at(self.to_pattern_space(shape, world_point), shape)

    @abstractmethod
    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        """Color at a pattern-space point."""


class TwoColorPattern(Pattern):
    """A pattern alternating or blending between two colors.

    Attributes:
        a: First color.
        b: Second color.
    """

    def __init__(self, a: Color, b: Color, transform: Matrix4 | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a!r}, b={self.b!r})"


class StripePattern(TwoColorPattern):
    """Alternating stripes of unit width along x."""

    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        return self.a if math.floor(p[0]) % 2 == 0 else self.b


class RingPattern(TwoColorPattern):
    """Concentric unit-width rings around the y axis."""

    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        n = math.floor(math.sqrt(p[0] * p[0] + p[2] * p[2]))
        return self.a if n % 2 == 0 else self.b


class CheckersPattern(TwoColorPattern):
    """Checkerboard in the shape's texture (uv) coordinates.

    Cells are half a unit wide, so a sphere or cylinder wraps with an even
    number of cells.
    """

    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        uv = shape.uv_coordinates(p)
        n = math.floor(2.0 * uv[0]) + math.floor(2.0 * uv[1]) + math.floor(2.0 * uv[2])
        return self.a if n % 2 == 0 else self.b


class GradientPattern(TwoColorPattern):
    """Linear blend from a to b along x, repeating every unit."""

    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        fraction = p[0] - math.floor(p[0])
        return Color(
            self.a.r + (self.b.r - self.a.r) * fraction,
            self.a.g + (self.b.g - self.a.g) * fraction,
            self.a.b + (self.b.b - self.a.b) * fraction,
        )


class CoordinatePattern(Pattern):
    """Diagnostic pattern returning the pattern-space coordinates as a color."""

    def pattern_color_at(self, p: Tuple4, shape: Shape) -> Color:
        return Color(p[0], p[1], p[2])


PATTERN_TYPES: dict[str, type[TwoColorPattern]] = {
    "stripe": StripePattern,
    "ring": RingPattern,
    "checkers": CheckersPattern,
    "gradient": GradientPattern,
}
