"""Normalization modes for scope rendering.

LINEAR is the ratio against the max, used for histogram bars. LOG is the
log-base-max ratio used by the waveform scope, which lifts sparse values so
faint traces stay visible.
"""

from enum import Enum

import numpy as np


class Normalization(Enum):
    LINEAR = "linear"
    LOG = "log"


def linear(values, max_value: float) -> np.ndarray:
    """``values / max_value``; all zeros when ``max_value <= 0``."""
    values = np.asarray(values, dtype=np.float64)
    if max_value <= 0:
        return np.zeros_like(values)
    return values / max_value


def logarithmic(values, max_value: float) -> np.ndarray:
    """``log(v) / log(max_value)``.

    Zero where ``v <= 0``, and everywhere when ``max_value <= 1`` (degenerate
    log base).
    """
    values = np.asarray(values, dtype=np.float64)
    out = np.zeros_like(values)
    if max_value <= 1:
        return out
    positive = values > 0
    out[positive] = np.log(values[positive]) / np.log(max_value)
    return out


def normalize(values, max_value: float, mode: Normalization) -> np.ndarray:
    if mode is Normalization.LOG:
        return logarithmic(values, max_value)
    return linear(values, max_value)


def round_half_up(values) -> np.ndarray:
    """Round to the nearest integer, .5 going up (not to even like ``np.rint``)."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def to_brightness(ratios) -> np.ndarray:
    """Map ratios to 8-bit brightness: ``floor(ratio * 255)`` clamped to 0-255."""
    scaled = np.floor(np.asarray(ratios, dtype=np.float64) * 255.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)
