"""Camera module for primary ray generation and rendering.

Components:
    camera: Pinhole camera with a Taichi ray-generation kernel and a
        thread-pool render loop
"""

from .camera import Camera, ProgressCallback

__all__ = [
    "Camera",
    "ProgressCallback",
]
