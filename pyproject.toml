[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jetflow"
version = "0.1.0"
description = "Grid, geometry, initial conditions, cooling and output for radial-track hydrodynamics of explosions and jets"
requires-python = ">=3.10"
dependencies = []
keywords = ["hydrodynamics", "astrophysics", "moving-mesh", "supernova", "jets", "initial-conditions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jetflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
