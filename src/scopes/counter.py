"""Channel counter — per-channel value frequencies for R, G, B.

Counts are float64 so renderers can interpolate between buckets without a
conversion step.
"""

from dataclasses import dataclass

import numpy as np

from engine.canvas import Canvas

BUCKETS = 256


@dataclass(frozen=True)
class ChannelHistogram:
    """Three 256-bucket histograms plus the largest single bucket value."""

    max: float
    reds: np.ndarray
    greens: np.ndarray
    blues: np.ndarray

    def __iter__(self):
        return iter((self.max, self.reds, self.greens, self.blues))

    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.reds, self.greens, self.blues

    def total(self) -> float:
        return float(self.reds.sum() + self.greens.sum() + self.blues.sum())


@dataclass(frozen=True)
class ColumnHistograms:
    """Per-column histograms for the waveform scope.

    counts: (width, 3, 256) float64
    maxima: (width,) float64, the local max of each column
    """

    counts: np.ndarray
    maxima: np.ndarray

    def column(self, x: int) -> ChannelHistogram:
        reds, greens, blues = self.counts[x]
        return _freeze(float(self.maxima[x]), reds, greens, blues)


def _freeze(max_value: float, reds, greens, blues) -> ChannelHistogram:
    arrays = []
    for values in (reds, greens, blues):
        values = np.array(values, dtype=np.float64)
        values.flags.writeable = False
        arrays.append(values)
    return ChannelHistogram(max_value, *arrays)


def _as_bytes(byte_buffer) -> np.ndarray:
    if isinstance(byte_buffer, np.ndarray):
        data = byte_buffer.astype(np.uint8, copy=False).ravel()
    else:
        data = np.frombuffer(byte_buffer, dtype=np.uint8)
    if data.size % 3 != 0:
        raise ValueError(
            f"RGB buffer length must be a multiple of 3, got {data.size}"
        )
    return data


def count(byte_buffer) -> ChannelHistogram:
    """Tally interleaved R,G,B bytes into three 256-bucket histograms.

    Byte ``i`` goes to reds when ``i % 3 == 0``, greens when ``i % 3 == 1``
    and blues otherwise. An empty buffer yields ``max == 0`` and all-zero
    histograms.
    """
    data = _as_bytes(byte_buffer)

    reds = np.bincount(data[0::3], minlength=BUCKETS).astype(np.float64)
    greens = np.bincount(data[1::3], minlength=BUCKETS).astype(np.float64)
    blues = np.bincount(data[2::3], minlength=BUCKETS).astype(np.float64)

    max_value = float(max(reds.max(), greens.max(), blues.max()))
    return _freeze(max_value, reds, greens, blues)


def count_canvas(canvas: Canvas) -> ChannelHistogram:
    return count(canvas.pixels)


def count_column(canvas: Canvas, x: int) -> ChannelHistogram:
    """Histogram of a single source column, with that column's own max."""
    return count(canvas.pixels[:, x])


def count_columns(canvas: Canvas) -> ColumnHistograms:
    """Histograms for every column at once.

    Each column's values are offset by ``column * 256`` so one bincount per
    channel covers the whole image.
    """
    width = canvas.width
    counts = np.zeros((width, 3, BUCKETS), dtype=np.float64)
    if width == 0:
        return ColumnHistograms(counts, np.zeros(0, dtype=np.float64))

    offsets = (np.arange(width, dtype=np.int64) * BUCKETS)[np.newaxis, :]
    pixels = canvas.pixels
    for ch in range(3):
        indices = pixels[:, :, ch].astype(np.int64) + offsets
        tallies = np.bincount(indices.ravel(), minlength=width * BUCKETS)
        counts[:, ch, :] = tallies.reshape(width, BUCKETS)

    return ColumnHistograms(counts, counts.max(axis=(1, 2)))
