"""Materials module for surface appearance.

Components:
    material: Phong material coefficients plus reflection and refraction
    patterns: Procedural color patterns (stripe, ring, checkers, gradient)
"""

from .material import Material
from .patterns import (
    PATTERN_TYPES,
    CheckersPattern,
    CoordinatePattern,
    GradientPattern,
    Pattern,
    RingPattern,
    StripePattern,
    TwoColorPattern,
)

__all__ = [
    "Material",
    "Pattern",
    "TwoColorPattern",
    "StripePattern",
    "RingPattern",
    "CheckersPattern",
    "GradientPattern",
    "CoordinatePattern",
    "PATTERN_TYPES",
]
