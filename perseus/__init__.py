"""Colour histograms, posterior maps, image conversion, matrix and text-file helpers for region-based 3D pose tracking."""

__version__ = "0.1.0"

__all__ = [
    "defines",
    "params",
    "fileutils",
    "mathutils",
    "histogram",
    "imageutils",
    "render",
    "visualisation",
]