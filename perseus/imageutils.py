"""Conversions between grey, float and four-channel images, and image file I/O.

Four-channel images are ``uint8`` arrays of shape ``(height, width, 4)``.
Images read from files come back in blue, green, red, alpha channel order,
and :func:`save_image` expects the same order. Grey images are ``uint8``
arrays of shape ``(height, width)``.
"""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
from PIL import Image

_LOWER_LIMIT = np.float32(100000.0)
_UPPER_LIMIT = np.float32(-100000.0)


def _rgba(image) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError("a four-channel image of shape (height, width, 4) is required")
    return array


def _grey(image) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("a single-channel image of shape (height, width) is required")
    return array


def scale_to_gray(source) -> np.ndarray:
    """Stretch a float image to the full grey range as a four-channel image.

    The smallest value maps to 0 and the largest to 255, with alpha 255.
    A constant image gives an all-zero result, alpha included.
    """
    values = _grey(source).astype(np.float32)
    out = np.zeros(values.shape + (4,), dtype=np.uint8)
    if values.size == 0:
        return out

    low = min(_LOWER_LIMIT, values.min())
    high = max(_UPPER_LIMIT, values.max())
    if low == high:
        return out

    scale = np.float32(1.0) / np.float32(high - low)
    scaled = (values - np.float32(low)) * scale
    grey = (scaled * np.float32(255.0)).astype(np.uint8)
    out[..., :3] = grey[..., None]
    out[..., 3] = 255
    return out


def overlay(src_grey, dest_rgba, dest_r: int = 255, dest_g: int = 0, dest_b: int = 0) -> np.ndarray:
    """Paint a grey mask over a four-channel image and return the result.

    Where the mask is non-zero, each colour channel becomes the given colour
    scaled by ``mask / 255`` and alpha becomes 255; elsewhere the image is
    kept. ``dest_r`` goes to channel 2 and ``dest_b`` to channel 0, matching
    the blue-green-red order of loaded images.
    """
    grey = _grey(src_grey)
    out = np.array(_rgba(dest_rgba), dtype=np.uint8, copy=True)
    if grey.shape != out.shape[:2]:
        raise ValueError("mask and image sizes differ")

    selected = grey > 0
    factor = grey.astype(np.float32)[selected] / np.float32(255.0)
    for channel, value in ((0, dest_b), (1, dest_g), (2, dest_r)):
        out[..., channel][selected] = (np.float32(value) * factor).astype(np.uint8)
    out[..., 3][selected] = 255
    return out


def flip_colours(image) -> np.ndarray:
    """Return a copy with the first and third channels swapped."""
    out = np.array(_rgba(image), copy=True)
    out[..., 0], out[..., 2] = out[..., 2].copy(), out[..., 0].copy()
    return out


def gray_to_rgba(src) -> np.ndarray:
    """Spread a grey image over three channels, with alpha 255."""
    grey = _grey(src).astype(np.uint8)
    out = np.empty(grey.shape + (4,), dtype=np.uint8)
    out[..., :3] = grey[..., None]
    out[..., 3] = 255
    return out


def rgba_to_gray(src, fixed_value: int = -1) -> np.ndarray:
    """Reduce a four-channel image to grey.

    With a positive ``fixed_value``, pixels whose first and second channels
    are not both zero get that value and all others 0. Otherwise the
    channels are weighted 0.2989, 0.5870 and 0.1140 and truncated.
    """
    pixels = _rgba(src)
    if fixed_value > 0:
        wide = pixels.astype(np.int64)
        lit = (wide[..., 0] + wide[..., 1] + wide[..., 0]) > 0
        return np.where(lit, int(fixed_value) & 0xFF, 0).astype(np.uint8)

    floats = pixels.astype(np.float32)
    grey = (
        np.float32(0.2989) * floats[..., 0]
        + np.float32(0.5870) * floats[..., 1]
        + np.float32(0.1140) * floats[..., 2]
    )
    return grey.astype(np.uint8)


def save_image(image, path: str | os.PathLike) -> None:
    """Write a blue-green-red-alpha image to a file, without its alpha.

    The format follows the file extension.
    """
    pixels = _rgba(image).astype(np.uint8)
    suffix = Path(path).suffix.lower()
    image_format = Image.registered_extensions().get(suffix)
    if image_format is None:
        raise ValueError(f"unknown image format for {os.fspath(path)!r}")
    rgb = np.ascontiguousarray(pixels[..., [2, 1, 0]])
    Image.fromarray(rgb).save(path, format=image_format)


def load_image(path: str | os.PathLike) -> np.ndarray:
    """Read an image file as a blue-green-red-alpha ``uint8`` array."""
    with Image.open(path) as img:
        rgba = np.asarray(img.convert("RGBA"))
    return np.ascontiguousarray(rgba[..., [2, 1, 0, 3]])


def load_gray_image(path: str | os.PathLike, fixed_value: int = -1) -> np.ndarray:
    """Read an image file as grey, as :func:`rgba_to_gray` would convert it."""
    return rgba_to_gray(load_image(path), fixed_value)