"""Histogram renderer — draws three 256-bucket histograms as an RGB bar chart.

Each output column is linearly interpolated between its two neighbouring
buckets so the chart stays smooth when the output width is not 256. Channels
are drawn independently: where the red, green and blue bars overlap the
pixel becomes white.
"""

import numpy as np

from engine.canvas import Canvas
from engine.errors import InvalidDimensions
from scopes.counter import BUCKETS, ChannelHistogram
from scopes.normalize import linear, round_half_up


def _lerp(from_: np.ndarray, to: np.ndarray, howfar: np.ndarray) -> np.ndarray:
    return from_ + (to - from_) * howfar


def column_values(values, width: int) -> np.ndarray:
    """Interpolate 256 bucket values onto ``width`` output columns.

    Column ``x`` sits at ``pos = x * 255 / width``: it takes bucket
    ``floor(pos)`` blended toward the next bucket by the fractional part.
    """
    values = np.asarray(values, dtype=np.float64)
    pos = np.arange(width, dtype=np.float64) * (BUCKETS - 1) / width
    col = np.floor(pos).astype(np.int64)
    percent = pos - col
    return _lerp(values[col], values[col + 1], percent)


def bar_heights(values, max_value: float, width: int, height: int) -> np.ndarray:
    """Per-column bar height in pixels, 0 everywhere when ``max_value == 0``."""
    ratios = linear(column_values(values, width), max_value)
    return np.clip(round_half_up(ratios * height), 0, height).astype(np.int64)


def render_histogram(
    max_value: float,
    reds,
    greens,
    blues,
    width: int,
    height: int,
) -> Canvas:
    """Render the three histograms into a ``width x height`` canvas.

    Bars grow from the bottom row; a bar of height ``h`` lights rows
    ``height - h`` to ``height - 1`` in its channel.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(
            f"Histogram image needs a positive size, got {width}x{height}"
        )

    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    rows = np.arange(height, dtype=np.int64)[:, np.newaxis]

    for ch, values in enumerate((reds, greens, blues)):
        heights = bar_heights(values, max_value, width, height)
        lit = rows >= (height - heights)[np.newaxis, :]
        pixels[:, :, ch][lit] = 255

    return Canvas(pixels)


def render_histogram_from(hist: ChannelHistogram, width: int, height: int) -> Canvas:
    return render_histogram(hist.max, hist.reds, hist.greens, hist.blues, width, height)
