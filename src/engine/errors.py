"""Error types raised across the render pipeline and the codec boundary."""


class ColorogramError(Exception):
    """Base class for all colorogram errors."""


class InvalidDimensions(ColorogramError, ValueError):
    """Dimensions that cannot back a canvas or a rendered scope."""


class DecodeError(ColorogramError):
    """Input image missing, unreadable or corrupt.

    ``reason`` is one of ``"not_found"``, ``"unreadable"``, ``"corrupt"``.
    """

    def __init__(self, path: str, reason: str, message: str):
        super().__init__(message)
        self.path = path
        self.reason = reason


class EncodeError(ColorogramError):
    """Output could not be written (bad destination or unsupported format)."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path
