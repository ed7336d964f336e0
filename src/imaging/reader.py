"""Image decoding via Pillow."""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from engine.canvas import Canvas
from engine.errors import DecodeError

logger = logging.getLogger(__name__)


def read_image(path: str | Path) -> Canvas:
    """Decode any Pillow-supported image into an 8-bit RGB canvas.

    Alpha and palette images are converted to RGB.

    Raises:
        DecodeError: file missing, unreadable, too large or not a
            decodable image.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgb = img.convert("RGB")
    except FileNotFoundError:
        raise DecodeError(str(path), "not_found", f"File '{path}' not found")
    except UnidentifiedImageError:
        raise DecodeError(str(path), "corrupt", f"Failed to decode image '{path}'")
    except (PermissionError, IsADirectoryError) as e:
        raise DecodeError(str(path), "unreadable", f"Failed to read image '{path}'") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(str(path), "too_large", f"Image '{path}' is too large") from e
    except OSError as e:
        # truncated pixel data only surfaces once convert() loads the image
        raise DecodeError(str(path), "corrupt", f"Failed to decode image '{path}'") from e

    canvas = Canvas(np.asarray(rgb, dtype=np.uint8).copy())
    logger.debug("Decoded %s as %r", path.name, canvas)
    return canvas


def decode(path: str | Path) -> tuple[int, int, bytes]:
    """Decode ``path`` into ``(width, height, rgb_bytes)``."""
    canvas = read_image(path)
    return canvas.width, canvas.height, canvas.to_byte_buffer()
