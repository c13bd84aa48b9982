"""Clamped RGB color.

Every Color is clamped channel-wise to [0, 1] on construction, so every
arithmetic result is clamped too. Over-bright highlights are silently capped
rather than tone-mapped; the shading code relies on this when it sums the
contributions of several lights and secondary rays.
"""

from __future__ import annotations

from dataclasses import dataclass


def _clamp(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


@dataclass(frozen=True)
class Color:
    """An RGB color with channels clamped to [0, 1].

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _clamp(self.r))
        object.__setattr__(self, "g", _clamp(self.g))
        object.__setattr__(self, "b", _clamp(self.b))

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def from_sequence(cls, values) -> Color:
        """Build a color from any 3-element sequence (list, tuple, array)."""
        if len(values) != 3:
            raise ValueError(f"Color needs exactly 3 components, got {len(values)}")
        return cls(values[0], values[1], values[2])

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:
        """Scale by a scalar, or multiply channel-wise by another Color."""
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_rgb8(self) -> tuple[int, int, int]:
        """Convert to 8-bit channels by truncating c * 255."""
        return (int(self.r * 255.0), int(self.g * 255.0), int(self.b * 255.0))
