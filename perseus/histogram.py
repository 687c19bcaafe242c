"""Colour histograms with a variable number of bins per brightness band.

A :class:`HistogramVarBin` holds several RGB histograms of different
resolution. Every sample is added to all of them. A lookup picks one by the
brightness of the colour: dark colours use the last histogram and bright
colours the first. Each bin stores a foreground and a background value.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

_NOT_ALLOCATED = "histogram is not allocated; call set() first"


class HistogramVarBin:
    """A set of foreground/background RGB histograms of varying resolution."""

    FACTORS = (5, 4, 3, 2)

    def __init__(
        self,
        no_bins: Sequence[int] | None = None,
        merge_alpha_foreground: float = 0.0,
        merge_alpha_background: float = 0.0,
    ) -> None:
        self.merge_alpha_foreground = merge_alpha_foreground
        self.merge_alpha_background = merge_alpha_background
        self.no_bins: tuple[int, ...] = ()
        self.offsets: tuple[int, ...] = ()
        self.full_hist_size = 0
        self.normalised = np.zeros((0, 2), dtype=np.float32)
        self.not_normalised = np.zeros((0, 2), dtype=np.float32)
        self.total_foreground_pixels = 0.0
        self.total_background_pixels = 0.0
        self.eta_f = 0.0
        self.eta_b = 0.0
        self.already_initialised = False
        self.is_allocated = False
        if no_bins is not None:
            self.set(no_bins)

    @property
    def no_histograms(self) -> int:
        """Number of histograms held."""
        return len(self.no_bins)

    def set(self, no_bins: Sequence[int]) -> None:
        """Allocate one histogram per entry of ``no_bins`` and clear everything.

        If the histogram is already allocated, it is only cleared.
        """
        bins = tuple(int(b) for b in no_bins)
        if not bins:
            raise ValueError("at least one histogram is required")
        if len(bins) > len(self.FACTORS):
            raise ValueError(f"at most {len(self.FACTORS)} histograms are supported")
        for b in bins:
            if b <= 0 or b & (b - 1):
                raise ValueError(f"bin count {b} is not a positive power of two")

        if not self.is_allocated:
            offsets = []
            size = 0
            for b in bins:
                offsets.append(size)
                size += b * b * b
            self.no_bins = bins
            self.offsets = tuple(offsets)
            self.full_hist_size = size
            self.normalised = np.zeros((size, 2), dtype=np.float32)
            self.not_normalised = np.zeros((size, 2), dtype=np.float32)
            self.is_allocated = True
        self.clear()

    def _require(self) -> None:
        if not self.is_allocated:
            raise RuntimeError(_NOT_ALLOCATED)

    def _bin_index(self, hist: int, r, g, b):
        factor = self.FACTORS[hist]
        nb = self.no_bins[hist]
        ru = (r >> factor) & (nb - 1)
        gu = (g >> factor) & (nb - 1)
        bu = (b >> factor) & (nb - 1)
        return self.offsets[hist] + (ru + gu * nb) * nb + bu

    def _accumulate(self, r, g, b, foreground, background) -> None:
        r = np.asarray(r, dtype=np.int64)
        g = np.asarray(g, dtype=np.int64)
        b = np.asarray(b, dtype=np.int64)
        fg = np.broadcast_to(np.asarray(foreground, dtype=np.float32), r.shape)
        bg = np.broadcast_to(np.asarray(background, dtype=np.float32), r.shape)
        fg_column = self.not_normalised[:, 0]
        bg_column = self.not_normalised[:, 1]
        for hist in range(self.no_histograms):
            index = self._bin_index(hist, r, g, b)
            np.add.at(fg_column, index, fg)
            np.add.at(bg_column, index, bg)

        fg_sum = float(np.sum(fg, dtype=np.float64))
        bg_sum = float(np.sum(bg, dtype=np.float64))
        self.total_foreground_pixels += fg_sum
        self.total_background_pixels += bg_sum
        if not self.already_initialised:
            self.eta_f += fg_sum
            self.eta_b += bg_sum

    def get_value(self, r, g, b):
        """Return the normalised ``(foreground, background)`` values of a colour.

        Accepts scalars, giving floats, or equally shaped arrays, giving arrays.
        """
        self._require()
        rr = np.asarray(r, dtype=np.int64)
        gg = np.asarray(g, dtype=np.int64)
        bb = np.asarray(b, dtype=np.int64)
        grey = (
            rr.astype(np.float32) * np.float32(0.3)
            + gg.astype(np.float32) * np.float32(0.59)
            + bb.astype(np.float32) * np.float32(0.11)
        ).astype(np.int64)
        hist = np.where(grey < 128, 3, np.where(grey < 192, 2, np.where(grey < 224, 1, 0)))
        if np.any(hist >= self.no_histograms):
            raise LookupError("no histogram is allocated for this brightness")

        factors = np.asarray(self.FACTORS, dtype=np.int64)[hist]
        bins = np.asarray(self.no_bins, dtype=np.int64)[hist]
        offsets = np.asarray(self.offsets, dtype=np.int64)[hist]
        ru = (rr >> factors) & (bins - 1)
        gu = (gg >> factors) & (bins - 1)
        bu = (bb >> factors) & (bins - 1)
        index = offsets + (ru + gu * bins) * bins + bu

        foreground = self.normalised[index, 0]
        background = self.normalised[index, 1]
        if np.ndim(index) == 0:
            return float(foreground), float(background)
        return foreground, background

    def add_point(self, foreground: float, background: float, r: int, g: int, b: int) -> None:
        """Add one weighted sample of colour ``(r, g, b)`` to every histogram."""
        self._require()
        self._accumulate(r, g, b, foreground, background)

    def clear(self) -> None:
        """Zero both tables, the totals and the eta sums."""
        self._require()
        self.total_foreground_pixels = 0.0
        self.total_background_pixels = 0.0
        self.eta_f = 0.0
        self.eta_b = 0.0
        self.normalised.fill(0)
        self.not_normalised.fill(0)
        self.already_initialised = False

    def clear_normalised(self) -> None:
        """Zero the normalised table, the totals and the eta sums."""
        self._require()
        self.normalised.fill(0)
        self.already_initialised = False
        self.total_foreground_pixels = 0.0
        self.total_background_pixels = 0.0
        self.eta_f = 0.0
        self.eta_b = 0.0

    def clear_not_normalised(self) -> None:
        """Zero the raw counts, the totals and the eta sums."""
        self._require()
        self.not_normalised.fill(0)
        self.total_foreground_pixels = 0.0
        self.total_background_pixels = 0.0
        self.eta_f = 0.0
        self.eta_b = 0.0

    def clear_not_normalised_partial(self) -> None:
        """Zero the raw counts and the totals, keeping the eta sums."""
        self._require()
        self.not_normalised.fill(0)
        self.total_foreground_pixels = 0.0
        self.total_background_pixels = 0.0

    def normalise(self) -> None:
        """Turn raw counts into probabilities.

        The first time the counts replace the table; afterwards they are
        blended in with the merge alphas.
        """
        self._require()
        inv_f = 1.0 / self.total_foreground_pixels if self.total_foreground_pixels != 0 else 0.0
        inv_b = 1.0 / self.total_background_pixels if self.total_background_pixels != 0 else 0.0
        raw_f = self.not_normalised[:, 0] * np.float32(inv_f)
        raw_b = self.not_normalised[:, 1] * np.float32(inv_b)
        if self.already_initialised:
            alpha_f = np.float32(self.merge_alpha_foreground)
            alpha_b = np.float32(self.merge_alpha_background)
            self.normalised[:, 0] = self.normalised[:, 0] * (1 - alpha_f) + raw_f * alpha_f
            self.normalised[:, 1] = self.normalised[:, 1] * (1 - alpha_b) + raw_b * alpha_b
        else:
            self.normalised[:, 0] = raw_f
            self.normalised[:, 1] = raw_b
        self.already_initialised = True

    def set_normalised(self, values) -> None:
        """Replace the normalised table with ``values`` of shape ``(size, 2)``."""
        self._require()
        array = np.asarray(values, dtype=np.float32)
        if array.shape != self.normalised.shape:
            raise ValueError(
                f"expected shape {self.normalised.shape}, got {array.shape}"
            )
        self.normalised[:] = array


def _check_shapes(mask: np.ndarray, image: np.ndarray) -> None:
    if image.ndim != 3 or image.shape[2] < 3:
        raise ValueError("image must have shape (height, width, channels>=3)")
    if mask.shape != image.shape[:2]:
        raise ValueError("mask and image sizes differ")


def _add_selected(histogram, image, foreground, background) -> None:
    selected = foreground | background
    pixels = image[selected].astype(np.int64)
    histogram._accumulate(
        pixels[:, 0],
        pixels[:, 1],
        pixels[:, 2],
        foreground[selected].astype(np.float32),
        background[selected].astype(np.float32),
    )


def build_histogram(histogram: HistogramVarBin, mask, image, object_id: int) -> None:
    """Add an image to a histogram using an object-label mask.

    Pixels labelled ``object_id + 1`` count as foreground, pixels labelled
    zero as background; other objects' pixels are skipped.
    """
    histogram._require()
    labels = np.asarray(mask).astype(np.int64)
    pixels = np.asarray(image)
    _check_shapes(labels, pixels)
    foreground = (labels != 0) & (labels - 1 == object_id)
    background = labels == 0
    _add_selected(histogram, pixels, foreground, background)


def build_histogram_masked(
    histogram: HistogramVarBin, mask, video_mask, image, object_id: int
) -> None:
    """Add an image to a histogram, only where ``video_mask`` exceeds 128.

    Inside that region, pixels labelled ``object_id + 1`` count as
    foreground and all others as background.
    """
    histogram._require()
    labels = np.asarray(mask).astype(np.int64)
    video = np.asarray(video_mask).astype(np.int64)
    pixels = np.asarray(image)
    _check_shapes(labels, pixels)
    if video.shape != labels.shape:
        raise ValueError("video mask and mask sizes differ")
    inside = video > 128
    foreground = inside & (labels != 0) & (labels - 1 == object_id)
    background = inside & ~foreground
    _add_selected(histogram, pixels, foreground, background)


def update_histogram(
    histogram: HistogramVarBin, image, mask, object_id: int, video_mask=None
) -> HistogramVarBin:
    """Build from ``image`` and ``mask`` (and ``video_mask`` if given), then normalise."""
    if video_mask is None:
        build_histogram(histogram, mask, image, object_id)
    else:
        build_histogram_masked(histogram, mask, video_mask, image, object_id)
    histogram.normalise()
    return histogram