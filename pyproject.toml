[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "perseus"
version = "0.1.0"
description = "Colour histogram, posterior, image and matrix utilities for region-based 3D object pose tracking"
requires-python = ">=3.10"
keywords = ["pose tracking", "histogram", "segmentation", "computer vision", "posteriors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["perseus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
