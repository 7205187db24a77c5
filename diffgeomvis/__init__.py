"""Geometry for surface visualization: rays, noise, meshes, surface data and geodesics."""

__version__ = "0.1.0"
__all__ = [
    "geometry",
    "perlin",
    "mesh",
    "surface_data",
    "geodesics",
]