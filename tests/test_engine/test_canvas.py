"""Tests for engine.canvas — create, resize, blit, byte serialization."""

import numpy as np
import pytest

from engine.canvas import Canvas, Color, Dimensions
from engine.errors import InvalidDimensions

pytestmark = pytest.mark.smoke


def _canvas(width, height, seed=7):
    rng = np.random.default_rng(seed)
    return Canvas(rng.integers(0, 256, (height, width, 3), dtype=np.uint8))


class TestDimensions:
    def test_xytoi_row_major(self):
        dims = Dimensions(10, 4)
        assert dims.xytoi(0, 0) == 0
        assert dims.xytoi(3, 2) == 23
        assert dims.maxi() == 40

    def test_add(self):
        assert Dimensions(3, 4) + Dimensions(1, 2) == Dimensions(4, 6)
        assert Dimensions(3, 4) + (0, 5) == Dimensions(3, 9)

    def test_of_tuple(self):
        assert Dimensions.of((5, 6)) == Dimensions(5, 6)

    def test_negative_rejected(self):
        with pytest.raises(InvalidDimensions):
            Dimensions(-1, 3)


class TestCreate:
    def test_default_is_black(self):
        canvas = Canvas.create(5, 3)
        assert canvas.dimensions == Dimensions(5, 3)
        assert canvas.pixels.shape == (3, 5, 3)
        assert np.all(canvas.pixels == 0)

    def test_fill_color(self):
        canvas = Canvas.create(2, 2, Color(1, 2, 3))
        assert canvas.get_pixel(1, 1) == Color(1, 2, 3)

    def test_zero_size_is_empty(self):
        canvas = Canvas.create(0, 0)
        assert canvas.to_byte_buffer() == b""
        canvas = Canvas.create(4, 0)
        assert canvas.width == 4
        assert canvas.height == 0

    def test_from_buffer(self):
        canvas = Canvas.from_buffer(bytes([10, 20, 30, 40, 50, 60]), 2, 1)
        assert canvas.get_pixel(0, 0) == Color(10, 20, 30)
        assert canvas.get_pixel(1, 0) == Color(40, 50, 60)

    def test_from_buffer_length_mismatch(self):
        with pytest.raises(InvalidDimensions):
            Canvas.from_buffer(bytes(7), 2, 1)

    def test_from_array_copies(self):
        arr = np.zeros((2, 2, 3), dtype=np.uint8)
        canvas = Canvas.from_array(arr)
        arr[0, 0] = 255
        assert canvas.get_pixel(0, 0) == Color(0, 0, 0)

    def test_from_array_clips_floats(self):
        arr = np.full((1, 1, 3), 300.0)
        assert Canvas.from_array(arr).get_pixel(0, 0) == Color(255, 255, 255)

    def test_wrong_shape_rejected(self):
        with pytest.raises(InvalidDimensions):
            Canvas(np.zeros((4, 4, 4), dtype=np.uint8))

    def test_pixels_view_is_read_only(self):
        canvas = Canvas.create(2, 2)
        with pytest.raises(ValueError):
            canvas.pixels[0, 0, 0] = 1


class TestResize:
    def test_same_size_is_noop(self):
        canvas = _canvas(17, 9)
        before = canvas.to_byte_buffer()
        old = canvas.resize((17, 9))
        assert old == Dimensions(17, 9)
        assert canvas.to_byte_buffer() == before

    def test_grow_keeps_content_and_blacks_new_area(self):
        canvas = _canvas(4, 3)
        original = canvas.pixels.copy()
        old = canvas.resize(Dimensions(6, 5))
        assert old == Dimensions(4, 3)
        assert canvas.dimensions == Dimensions(6, 5)
        np.testing.assert_array_equal(canvas.pixels[:3, :4], original)
        assert np.all(canvas.pixels[3:, :] == 0)
        assert np.all(canvas.pixels[:, 4:] == 0)

    def test_shrink_keeps_top_left(self):
        canvas = _canvas(8, 8)
        original = canvas.pixels.copy()
        canvas.resize((3, 5))
        np.testing.assert_array_equal(canvas.pixels, original[:5, :3])

    @pytest.mark.parametrize(
        "new_size", [(10, 2), (2, 10), (0, 4), (4, 0), (0, 0), (12, 12)]
    )
    def test_independent_axes(self, new_size):
        canvas = _canvas(6, 6)
        canvas.resize(new_size)
        assert (canvas.width, canvas.height) == new_size
        assert len(canvas.to_byte_buffer()) == 3 * new_size[0] * new_size[1]

    def test_round_trip_preserves_overlap(self):
        canvas = _canvas(9, 7)
        original = canvas.pixels.copy()
        canvas.resize((4, 11))
        canvas.resize((9, 7))
        np.testing.assert_array_equal(canvas.pixels[:7, :4], original[:7, :4])


class TestBlit:
    def test_blit_at_offset(self):
        dest = Canvas.create(5, 5)
        src = Canvas.create(2, 2, Color(9, 8, 7))
        dest.blit(src, (1, 3))
        assert dest.get_pixel(1, 3) == Color(9, 8, 7)
        assert dest.get_pixel(2, 4) == Color(9, 8, 7)
        assert dest.get_pixel(0, 3) == Color(0, 0, 0)
        assert dest.get_pixel(3, 3) == Color(0, 0, 0)

    def test_clips_right_edge_without_wrapping(self):
        dest = Canvas.create(4, 3)
        src = Canvas.create(3, 1, Color(255, 0, 0))
        dest.blit(src, (2, 0))
        assert dest.get_pixel(2, 0) == Color(255, 0, 0)
        assert dest.get_pixel(3, 0) == Color(255, 0, 0)
        # the clipped third pixel must not land on the next row
        assert dest.get_pixel(0, 1) == Color(0, 0, 0)

    def test_clips_bottom_edge(self):
        dest = Canvas.create(3, 3)
        src = Canvas.create(3, 3, Color(1, 1, 1))
        dest.blit(src, Dimensions(0, 2))
        assert np.all(dest.pixels[2] == 1)
        assert np.all(dest.pixels[:2] == 0)

    def test_fully_outside_is_ignored(self):
        dest = Canvas.create(3, 3)
        dest.blit(Canvas.create(2, 2, Color(5, 5, 5)), (10, 10))
        assert np.all(dest.pixels == 0)

    def test_negative_offset_rejected(self):
        with pytest.raises(InvalidDimensions):
            Canvas.create(3, 3).blit(Canvas.create(1, 1), (-1, 0))


class TestByteBuffer:
    def test_layout_rgb_row_major(self):
        canvas = Canvas.create(2, 2)
        canvas.set_pixel(1, 0, Color(1, 2, 3))
        canvas.set_pixel(0, 1, Color(4, 5, 6))
        assert canvas.to_byte_buffer() == bytes([0, 0, 0, 1, 2, 3, 4, 5, 6, 0, 0, 0])

    def test_length(self):
        assert len(_canvas(13, 5).to_byte_buffer()) == 3 * 13 * 5

    def test_from_buffer_round_trip(self):
        canvas = _canvas(6, 4)
        assert Canvas.from_buffer(canvas.to_byte_buffer(), 6, 4) == canvas
