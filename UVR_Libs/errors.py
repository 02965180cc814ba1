"""
Exception types for UV Remap.

Classes:
    RemapError: Base class for all UV Remap errors
    InputRejected: A file was offered that is not an accepted raster type
    DecodeError: Image bytes could not be decoded into a raster buffer
    EncodeError: A raster buffer could not be encoded
    OutOfBounds: A coordinate lies outside a raster's extent
    CompositorInputMissing: The map or texture raster is not loaded
"""


class RemapError(Exception):
    """Base class for all UV Remap errors."""


class InputRejected(RemapError, ValueError):
    """Raised when an input file is not of the accepted raster type."""


class DecodeError(RemapError, ValueError):
    """Raised when image bytes are malformed or not a supported image."""


# Name used by the session and the GUI when reporting a failed load
DecodeFailed = DecodeError


class EncodeError(RemapError):
    """Raised when a raster buffer cannot be encoded."""


class OutOfBounds(RemapError, IndexError):
    """Raised when a coordinate is dereferenced outside a raster."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Coordinate ({x}, {y}) outside {width}x{height} raster")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class CompositorInputMissing(RemapError):
    """Raised when compositing is requested without both rasters."""
