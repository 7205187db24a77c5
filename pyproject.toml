[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diffgeomvis"
version = "0.1.0"
description = "Geometry for visualizing surfaces: ray intersection, Perlin noise, instanced unit meshes, surface triangulation and geodesics"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "differential geometry",
    "surfaces",
    "geodesics",
    "curvature",
    "ray intersection",
    "mesh",
    "perlin noise",
    "runge-kutta",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["diffgeomvis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
