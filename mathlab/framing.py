"""
Viewport framing for the statistics and geometry plots.

A viewport is the rectangle a plot is drawn in. Statistical plots derive it
from their data; shapes and function graphs use one fixed symmetric box.
Empty datasets fall back to that default rather than leaking +/-inf into the
axes limits.

The quartile helpers use the same indexing the box plot is drawn with:
Q1 = sorted[floor(n*0.25)], Q3 = sorted[floor(n*0.75)], and the usual
odd/even median.
"""
import logging
import math
from typing import NamedTuple, Optional

import numpy as np

from .config import DEFAULT_BOUNDING_BOX, HISTOGRAM_BAR_HEIGHT, HISTOGRAM_BINS
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


class Viewport(NamedTuple):
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def from_bounding_box(cls, box):
        xmin, ymax, xmax, ymin = box
        return cls(float(xmin), float(xmax), float(ymin), float(ymax))

    @property
    def bounding_box(self):
        """(xmin, ymax, xmax, ymin): top-left corner first, as graphing boards expect."""
        return (self.x_min, self.y_max, self.x_max, self.y_min)

    @property
    def xlim(self):
        return (self.x_min, self.x_max)

    @property
    def ylim(self):
        return (self.y_min, self.y_max)


DEFAULT_VIEWPORT = Viewport.from_bounding_box(DEFAULT_BOUNDING_BOX)


class HistogramBins(NamedTuple):
    edges: np.ndarray
    frequencies: np.ndarray
    heights: np.ndarray
    bin_width: float


class BoxPlotSummary(NamedTuple):
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
    count: int


def _as_values(data):
    values = np.asarray(data if data is not None else [], dtype=float).ravel()
    if not np.all(np.isfinite(values)):
        raise InvalidParameterError("Dataset contains NaN or infinite values")
    return values


def _as_pairs(pairs):
    arr = np.asarray(pairs if pairs is not None else [], dtype=float)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidParameterError("Scatter data must be a sequence of (x, y) pairs")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("Scatter data contains NaN or infinite values")
    return arr


def histogram_bins(data, bins=HISTOGRAM_BINS, bar_height=HISTOGRAM_BAR_HEIGHT):
    """Split ``data`` into ``bins`` equal-width bins between its min and max.

    Value v goes to bin floor((v - min) / width), with the maximum clamped
    into the last bin. If every value is equal the width is 0 and all values
    land in bin 0. Heights are scaled so the fullest bin is ``bar_height``
    tall.
    """
    if bins < 1:
        raise InvalidParameterError(f"Histogram needs at least one bin, got {bins}")
    values = _as_values(data)
    if values.size == 0:
        raise InvalidParameterError("Cannot bin an empty dataset")

    lo, hi = float(values.min()), float(values.max())
    bin_width = (hi - lo) / bins
    if bin_width > 0:
        index = np.minimum(np.floor((values - lo) / bin_width).astype(int), bins - 1)
    else:
        index = np.zeros(values.size, dtype=int)

    frequencies = np.bincount(index, minlength=bins)
    heights = frequencies / frequencies.max() * bar_height
    edges = lo + bin_width * np.arange(bins + 1)
    return HistogramBins(edges, frequencies, heights, bin_width)


def median(data):
    ordered = np.sort(_as_values(data))
    n = ordered.size
    if n == 0:
        raise InvalidParameterError("Median of an empty dataset")
    if n % 2 == 0:
        return float((ordered[n // 2 - 1] + ordered[n // 2]) / 2)
    return float(ordered[n // 2])


def quartiles(data):
    """(Q1, median, Q3) with the box plot's index rule."""
    ordered = np.sort(_as_values(data))
    n = ordered.size
    if n == 0:
        raise InvalidParameterError("Quartiles of an empty dataset")
    q1 = float(ordered[math.floor(n * 0.25)])
    q3 = float(ordered[math.floor(n * 0.75)])
    return q1, median(ordered), q3


def box_plot_summary(data):
    values = _as_values(data)
    if values.size == 0:
        raise InvalidParameterError("Box plot of an empty dataset")
    q1, med, q3 = quartiles(values)
    return BoxPlotSummary(float(values.min()), q1, med, q3, float(values.max()), int(values.size))


def correlation(pairs) -> Optional[float]:
    """Pearson correlation shown next to a scatter plot.

    None when there are fewer than two pairs or one variable is constant.
    """
    arr = _as_pairs(pairs)
    n = arr.shape[0]
    if n < 2:
        return None
    xs, ys = arr[:, 0], arr[:, 1]
    sx, sy = xs.sum(), ys.sum()
    var_x = n * (xs * xs).sum() - sx * sx
    var_y = n * (ys * ys).sum() - sy * sy
    if var_x <= 0 or var_y <= 0:
        return None
    return float((n * (xs * ys).sum() - sx * sy) / math.sqrt(var_x * var_y))


def histogram_viewport(data, bins=HISTOGRAM_BINS) -> Viewport:
    values = _as_values(data)
    if values.size == 0:
        return DEFAULT_VIEWPORT
    result = histogram_bins(values, bins)
    top = float(result.heights.max())
    return Viewport(float(values.min()) - 1, float(values.max()) + 1, -2.0, top + 2)


def scatter_viewport(pairs) -> Viewport:
    arr = _as_pairs(pairs)
    if arr.shape[0] == 0:
        return DEFAULT_VIEWPORT
    (x_lo, y_lo), (x_hi, y_hi) = arr.min(axis=0), arr.max(axis=0)
    return Viewport(float(x_lo) - 1, float(x_hi) + 1, float(y_lo) - 1, float(y_hi) + 1)


def box_plot_viewport(data) -> Viewport:
    # drawn as one horizontal strip along y = 0
    values = _as_values(data)
    if values.size == 0:
        return DEFAULT_VIEWPORT
    return Viewport(float(values.min()) - 2, float(values.max()) + 2, -3.0, 3.0)


def frame(kind, data=None, pairs=None, bins=HISTOGRAM_BINS) -> Viewport:
    """Viewport for a plot of type ``kind``.

    Only "histogram", "scatter" and "boxplot" look at their data; triangles,
    circles, the triangle centers and every function family share the
    default box.
    """
    if kind == "histogram":
        viewport = histogram_viewport(data, bins)
    elif kind == "scatter":
        viewport = scatter_viewport(pairs)
    elif kind == "boxplot":
        viewport = box_plot_viewport(data)
    else:
        viewport = DEFAULT_VIEWPORT
    logger.debug("Framed %s plot -> %s", kind, viewport)
    return viewport

