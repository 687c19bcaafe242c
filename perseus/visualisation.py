"""Images derived from colour histograms for display."""

from __future__ import annotations

import numpy as np

from perseus.histogram import HistogramVarBin
from perseus.imageutils import scale_to_gray

_EPSILON = np.float32(0.0000001)


def compute_posteriors(histogram: HistogramVarBin, image) -> np.ndarray:
    """Return the foreground minus background posterior of every pixel.

    ``image`` has at least three channels; channels 0, 1 and 2 are looked up
    as red, green and blue. The result is a ``float32`` array of the image's
    height and width.
    """
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError("image must have shape (height, width, channels>=3)")
    wide = pixels.astype(np.int64)
    p_yf, p_yb = histogram.get_value(wide[..., 0], wide[..., 1], wide[..., 2])
    p_yf = np.asarray(p_yf, dtype=np.float32) + _EPSILON
    p_yb = np.asarray(p_yb, dtype=np.float32) + _EPSILON
    eta_f = np.float32(histogram.eta_f)
    eta_b = np.float32(histogram.eta_b)
    denominator = eta_f * p_yf + eta_b * p_yb
    p_f = p_yf / denominator
    p_b = p_yb / denominator
    return (p_f - p_b).astype(np.float32)


def posterior_image(histogram: HistogramVarBin, image) -> np.ndarray:
    """Return the posteriors stretched to a grey four-channel image."""
    return scale_to_gray(compute_posteriors(histogram, image))