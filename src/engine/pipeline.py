"""Render pipeline — count, render and composite one decoded image.

Two modes share the same shape:
- histogram: one global histogram, linear bars, source-width output
- waveform: per-column histograms, local max, log brightness by default
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum

from engine.canvas import Canvas
from engine.compositor import stack
from scopes.counter import count_canvas
from scopes.histogram import render_histogram_from
from scopes.normalize import Normalization
from scopes.waveform import default_height, render_waveform

logger = logging.getLogger(__name__)


class ScopeMode(Enum):
    HISTOGRAM = "histogram"
    WAVEFORM = "waveform"


@dataclass(frozen=True)
class RenderConfig:
    """How to render the scope under each image.

    height: rendered scope height in pixels; ``None`` means a quarter of the
        source height (at least 1).
    normalization: brightness mapping for the waveform scope. Histogram bars
        are always linear.
    """

    mode: ScopeMode = ScopeMode.HISTOGRAM
    height: int | None = None
    normalization: Normalization = Normalization.LOG

    def scope_height(self, source: Canvas) -> int:
        if self.height is not None:
            return self.height
        return default_height(source)


def make_histogram(source: Canvas, width: int, height: int) -> Canvas:
    hist = count_canvas(source)
    return render_histogram_from(hist, width, height)


def make_waveform(
    source: Canvas,
    height: int,
    normalization: Normalization = Normalization.LOG,
) -> Canvas:
    return render_waveform(source, height=height, normalization=normalization)


def render_scope(source: Canvas, config: RenderConfig) -> Canvas:
    """Render the configured scope for ``source`` (without compositing)."""
    height = config.scope_height(source)
    if config.mode is ScopeMode.WAVEFORM:
        return make_waveform(source, height, config.normalization)
    return make_histogram(source, source.width, height)


def render(source: Canvas, config: RenderConfig | None = None) -> Canvas:
    """Render the scope and stack it under ``source``."""
    config = config or RenderConfig()
    t0 = time.perf_counter()
    scope = render_scope(source, config)
    output = stack(source, scope)
    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.debug(
        "Rendered %s for %r in %.1f ms", config.mode.value, source, elapsed_ms
    )
    return output
