"""Whitted-style recursive ray tracer.

This package renders scenes of transformed primitives with Phong lighting,
hard shadows, mirror reflection and refraction through nested transparent
volumes, blended by the Schlick approximation.

Subpackages:
    core: Homogeneous tuples, rays, 4x4 transforms and clamped colors
    geometry: Shape primitives and their intersection/normal algorithms
    materials: Phong materials and procedural patterns
    scene: Intersection records, point lights, the world and scene files
    camera: Pinhole camera with Taichi ray generation and threaded rendering
    preview: Image export utilities
"""

__version__ = "0.1.0"
