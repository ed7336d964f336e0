"""Canvas — an owned RGB pixel buffer with content-preserving resize and blit.

Pixels live in a single (H, W, 3) uint8 array, row-major, so
``Dimensions.xytoi(x, y)`` indexes the flattened buffer directly.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from engine.errors import InvalidDimensions


class Color(NamedTuple):
    r: int = 0
    g: int = 0
    b: int = 0


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidDimensions(
                f"Dimensions must be non-negative, got {self.width}x{self.height}"
            )

    @classmethod
    def of(cls, value: "Dimensions | tuple[int, int]") -> "Dimensions":
        if isinstance(value, Dimensions):
            return value
        width, height = value
        return cls(int(width), int(height))

    def xytoi(self, x: int, y: int) -> int:
        return y * self.width + x

    def maxi(self) -> int:
        return self.width * self.height

    def __add__(self, other: "Dimensions") -> "Dimensions":
        other = Dimensions.of(other)
        return Dimensions(self.width + other.width, self.height + other.height)


class Canvas:
    """Rectangular RGB image buffer.

    The pixel count always equals ``width * height``; ``resize`` reallocates
    and copies the overlapping region only.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
            raise InvalidDimensions(
                f"Canvas needs an (H, W, 3) uint8 array, got {pixels.shape} {pixels.dtype}"
            )
        self._pixels = np.ascontiguousarray(pixels)

    @classmethod
    def create(cls, width: int, height: int, fill: Color = Color()) -> "Canvas":
        dims = Dimensions(width, height)
        pixels = np.empty((dims.height, dims.width, 3), dtype=np.uint8)
        pixels[:, :] = tuple(fill)
        return cls(pixels)

    @classmethod
    def from_buffer(cls, buf: bytes, width: int, height: int) -> "Canvas":
        """Build a canvas from tightly packed R,G,B bytes."""
        dims = Dimensions(width, height)
        data = np.frombuffer(buf, dtype=np.uint8)
        if data.size != 3 * dims.maxi():
            raise InvalidDimensions(
                f"Buffer of {data.size} bytes does not match {width}x{height} RGB"
            )
        return cls(data.reshape(dims.height, dims.width, 3).copy())

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Canvas":
        """Copy an (H, W, 3) array. Non-uint8 input is clipped to 0-255."""
        array = np.asarray(array)
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)
        else:
            array = array.copy()
        return cls(array)

    @property
    def dimensions(self) -> Dimensions:
        height, width = self._pixels.shape[:2]
        return Dimensions(width, height)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the (H, W, 3) pixel array."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b = self._pixels[y, x]
        return Color(int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._pixels[y, x] = tuple(color)

    def copy(self) -> "Canvas":
        return Canvas(self._pixels.copy())

    def resize(self, dimensions: "Dimensions | tuple[int, int]") -> Dimensions:
        """Reallocate to ``dimensions``, keeping the overlapping top-left region.

        Newly exposed pixels are black. Returns the previous dimensions.
        """
        old = self.dimensions
        new = Dimensions.of(dimensions)
        resized = np.zeros((new.height, new.width, 3), dtype=np.uint8)

        keep_w = min(old.width, new.width)
        keep_h = min(old.height, new.height)
        resized[:keep_h, :keep_w] = self._pixels[:keep_h, :keep_w]

        self._pixels = resized
        return old

    def blit(self, source: "Canvas", offset: "Dimensions | tuple[int, int]") -> None:
        """Copy ``source`` into this canvas at ``offset`` (x, y).

        Destination pixels falling outside this canvas are skipped.
        """
        x0, y0 = (offset.width, offset.height) if isinstance(offset, Dimensions) else offset
        if x0 < 0 or y0 < 0:
            raise InvalidDimensions(f"Blit offset must be non-negative, got ({x0}, {y0})")

        w = max(0, min(source.width, self.width - x0))
        h = max(0, min(source.height, self.height - y0))
        if w == 0 or h == 0:
            return
        self._pixels[y0 : y0 + h, x0 : x0 + w] = source._pixels[:h, :w]

    def to_byte_buffer(self) -> bytes:
        """Packed R,G,B bytes, row-major, ``3 * width * height`` long."""
        return self._pixels.tobytes(order="C")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
