"""Tests for stacking a rendered scope beneath its source."""

import numpy as np
import pytest

from engine.canvas import Canvas, Color, Dimensions
from engine.compositor import stack

pytestmark = pytest.mark.smoke


def _solid(width, height, rgb):
    return Canvas(np.full((height, width, 3), rgb, dtype=np.uint8))


def test_stacked_dimensions():
    out = stack(_solid(10, 6, (1, 1, 1)), _solid(10, 3, (2, 2, 2)))
    assert out.dimensions == Dimensions(10, 9)


def test_source_on_top_rendered_below():
    out = stack(_solid(4, 2, (10, 20, 30)), _solid(4, 3, (200, 0, 0)))
    np.testing.assert_array_equal(out.pixels[:2], np.full((2, 4, 3), [10, 20, 30]))
    np.testing.assert_array_equal(out.pixels[2:], np.full((3, 4, 3), [200, 0, 0]))


def test_wider_rendered_extends_canvas():
    out = stack(_solid(3, 2, (5, 5, 5)), _solid(6, 1, (9, 9, 9)))
    assert out.dimensions == Dimensions(6, 3)
    # area right of the source stays black
    assert out.get_pixel(4, 0) == Color(0, 0, 0)
    assert out.get_pixel(5, 2) == Color(9, 9, 9)


def test_narrower_rendered_leaves_black_margin():
    out = stack(_solid(6, 2, (5, 5, 5)), _solid(2, 2, (9, 9, 9)))
    assert out.dimensions == Dimensions(6, 4)
    assert out.get_pixel(1, 3) == Color(9, 9, 9)
    assert out.get_pixel(2, 3) == Color(0, 0, 0)


def test_inputs_not_modified():
    source = _solid(4, 4, (1, 2, 3))
    rendered = _solid(4, 1, (4, 5, 6))
    before = source.copy()
    stack(source, rendered)
    assert source == before
    assert source.dimensions == Dimensions(4, 4)


def test_empty_rendered():
    source = _solid(3, 3, (7, 7, 7))
    out = stack(source, Canvas.create(0, 0))
    assert out == source
