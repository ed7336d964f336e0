"""Image encoding via Pillow."""

import logging
from pathlib import Path

from PIL import Image

from engine.canvas import Canvas
from engine.errors import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "PNG"


def format_for_path(path: str | Path) -> str:
    """Pillow format name for ``path``'s extension.

    Paths without an extension get ``DEFAULT_FORMAT``.

    Raises:
        EncodeError: the extension is not a format Pillow can write.
    """
    path = Path(path)
    ext = path.suffix.lower()
    if not ext:
        return DEFAULT_FORMAT

    fmt = Image.registered_extensions().get(ext)
    if fmt is None or fmt not in Image.SAVE:
        raise EncodeError(str(path), f"Unsupported output format '{ext}'")
    return fmt


def save_image(canvas: Canvas, path: str | Path, format: str | None = None) -> None:
    """Encode ``canvas`` to ``path``.

    Raises:
        EncodeError: unsupported format or the destination is not writable.
    """
    path = Path(path)
    fmt = format or format_for_path(path)
    try:
        img = Image.frombytes(
            "RGB", (canvas.width, canvas.height), canvas.to_byte_buffer()
        )
        img.save(path, format=fmt)
    except (OSError, ValueError, KeyError, SystemError) as e:
        raise EncodeError(str(path), f"Failed to write '{path}': {e}") from e
    logger.debug("Encoded %r to %s (%s)", canvas, path.name, fmt)


def encode(path: str | Path, width: int, height: int, rgb_bytes: bytes) -> None:
    """Write packed RGB bytes to ``path``."""
    save_image(Canvas.from_buffer(rgb_bytes, width, height), path)
