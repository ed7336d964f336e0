"""Waveform scope — one per-channel histogram per source column.

Every source column gets its own 256-bucket histogram, normalized against
that column's local max (not the global one). Output row ``y`` of the scope
shows bucket ``round(y_inverse / height * 255)`` with low intensities at the
bottom, the way colour-grading waveform monitors read.
"""

import numpy as np

from engine.canvas import Canvas
from engine.errors import InvalidDimensions
from scopes.counter import BUCKETS, count_columns
from scopes.normalize import Normalization, normalize, round_half_up, to_brightness

DEFAULT_HEIGHT_DIVISOR = 4
LARGE_SCOPE_HEIGHT = 2048


def default_height(source: Canvas) -> int:
    return max(1, source.height // DEFAULT_HEIGHT_DIVISOR)


def bucket_rows(height: int) -> np.ndarray:
    """Bucket index shown on each output row, bottom row first."""
    y_inverse = np.arange(height, dtype=np.float64)
    return round_half_up(y_inverse / height * (BUCKETS - 1)).astype(np.int64)


def render_waveform(
    source: Canvas,
    height: int | None = None,
    normalization: Normalization = Normalization.LOG,
) -> Canvas:
    """Render the waveform scope of ``source``.

    Args:
        source: Image to analyse.
        height: Output height in pixels. Defaults to a quarter of the source
            height (at least 1); ``LARGE_SCOPE_HEIGHT`` gives a fine-grained
            scope.
        normalization: LOG (default) maps ``log(v) / log(column_max)`` to
            brightness; LINEAR uses ``v / column_max``.

    Returns:
        Canvas of ``source.width x height``.
    """
    if height is None:
        height = default_height(source)
    if source.width <= 0 or height <= 0:
        raise InvalidDimensions(
            f"Waveform needs a positive size, got {source.width}x{height}"
        )

    columns = count_columns(source)
    indices = bucket_rows(height)

    width = source.width
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for x in range(width):
        max_value = float(columns.maxima[x])
        # (3, height): each channel sampled at the row's bucket
        sampled = columns.counts[x][:, indices]
        brightness = to_brightness(normalize(sampled, max_value, normalization))
        # row y_inverse lands at height - 1 - y_inverse
        pixels[::-1, x, :] = brightness.T

    return Canvas(pixels)
