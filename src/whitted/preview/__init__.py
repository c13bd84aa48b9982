"""Preview module for rendered image output.

Components:
    export: PNG export, 8-bit conversion and image comparison
"""

from .export import compute_rmse, image_to_uint8, load_png, save_png

__all__ = [
    "save_png",
    "load_png",
    "image_to_uint8",
    "compute_rmse",
]
