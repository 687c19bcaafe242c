"""Shared constants, enumerations and small helpers used across the library."""

from __future__ import annotations

from enum import IntEnum

PI = 3.1415926535897932384626433832795
DEGTORAD = 0.017453292519943295769236907684886

INF = 0xFFFF
INF_FLOAT = 0xFFFFFFFF
INF_INT = 0xFFFF
MAX_INT = 4294967295


class GetImageType(IntEnum):
    """Kinds of image that can be produced for display."""

    WIREFRAME = 0
    FILL = 1
    ORIGINAL = 2
    POSTERIORS = 3
    OBJECTS = 4
    SIHLUETTE = 5
    DT = 6
    PROXIMITY = 7


class IterationTarget(IntEnum):
    """Which part of the pose an optimisation iteration updates."""

    TRANSLATION = 0
    ROTATION = 1
    BOTH = 2


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack red, green and blue into one integer (red in the low byte)."""
    return (int(b) << 16) | (int(g) << 8) | int(r)


def int_to_rgb(value: int) -> tuple[int, int, int]:
    """Unpack an integer made by :func:`rgb_to_int` into ``(r, g, b)``."""
    value = int(value)
    return value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF


def clamp(x, low, high):
    """Limit ``x`` to the closed range ``[low, high]``."""
    return max(low, min(high, x))