"""Buffers that a rendering pass writes into."""

from __future__ import annotations

import numpy as np

from perseus.defines import MAX_INT


class ImageRender:
    """Fill mask, object labels and near/far depth buffers of one render."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        shape = (height, width)
        self.image_fill = np.zeros(shape, dtype=np.uint8)
        self.image_zbuffer = np.zeros(shape, dtype=np.uint32)
        self.image_zbuffer_inverse = np.zeros(shape, dtype=np.uint32)
        self.image_objects = np.zeros(shape, dtype=np.uint8)

    def clear(self) -> None:
        """Zero the fill mask."""
        self.image_fill.fill(0)

    def clear_zbuffer(self) -> None:
        """Reset object labels and the far buffer, and fill the depth buffer with the maximum."""
        self.image_objects.fill(0)
        self.image_zbuffer.fill(MAX_INT)
        self.image_zbuffer_inverse.fill(0)