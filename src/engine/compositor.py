"""Compositor — stacks a rendered scope beneath its source image."""

import logging

from engine.canvas import Canvas, Dimensions

logger = logging.getLogger(__name__)


def stack(source: Canvas, rendered: Canvas) -> Canvas:
    """Place ``rendered`` directly below ``source`` on one canvas.

    The result is as wide as the wider input and as tall as both combined.
    Neither input is modified.
    """
    combined = Dimensions(
        max(source.width, rendered.width),
        source.height + rendered.height,
    )
    output = source.copy()
    old = output.resize(combined)
    output.blit(rendered, (0, old.height))
    logger.debug("Stacked %r under %r -> %r", rendered, source, output)
    return output
