"""
Raster data models for UV Remap.

This module defines the core data structures shared by the remapping engine
and the viewers.

Classes:
    ImageCoordinate: Integer (x, y) pixel coordinate
    PixelSample: A sampled pixel with its color and selection flag
    RasterBuffer: Row-major RGBA8 pixel store with fixed dimensions

Type Aliases:
    RgbaQuad: A tuple of 4 integers representing RGBA channel values (0-255)
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Tuple

import numpy as np

from UVR_Libs.constants import CHANNEL_MAX, CHANNEL_MIN
from UVR_Libs.errors import OutOfBounds

RgbaQuad = Tuple[int, int, int, int]


class ImageCoordinate(NamedTuple):
    x: int
    y: int


def validate_quad(quad: Any) -> RgbaQuad:
    """
    Normalize a color into an RGBA quad of plain ints.

    Args:
        quad: Any sequence of four integer channel values

    Returns:
        The quad as a tuple of ints

    Raises:
        ValueError: If the quad does not have four channels in 0-255
    """
    values = tuple(int(channel) for channel in quad)
    if len(values) != 4:
        raise ValueError(f"RGBA quad must have 4 channels, got {len(values)}")
    for channel in values:
        if not (CHANNEL_MIN <= channel <= CHANNEL_MAX):
            raise ValueError(f"Channel values must be 0-255, got {values}")
    return values


@dataclass(frozen=True)
class PixelSample:
    """A pixel read from a raster under the pointer.

    Attributes:
        coord: Image-space coordinate of the pixel
        color: RGBA quad read from the raster
        selected: True when the sample is the armed selection of its viewer
    """
    coord: ImageCoordinate
    color: RgbaQuad
    selected: bool = False

    @property
    def x(self) -> int:
        return self.coord.x

    @property
    def y(self) -> int:
        return self.coord.y


@dataclass(eq=False)
class RasterBuffer:
    """Fixed-size RGBA8 raster.

    Pixels are stored as a ``uint8`` array of shape ``(height, width, 4)``,
    which is the row-major flat layout ``(y * width + x) * 4`` viewed in
    three dimensions.

    Attributes:
        width: Raster width in pixels (> 0)
        height: Raster height in pixels (> 0)
        pixels: RGBA pixel array; zero-filled when omitted
    """
    width: int
    height: int
    pixels: Any = field(default=None)

    def __post_init__(self):
        """Validate dimensions and pixel storage."""
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(f"Raster dimensions must be positive, got {self.width}x{self.height}")
        self.width = int(self.width)
        self.height = int(self.height)

        if self.pixels is None:
            self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)
            return

        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"Expected numpy array for pixels, got {type(self.pixels)}")

        expected = (self.height, self.width, 4)
        if self.pixels.shape != expected:
            if self.pixels.size != self.width * self.height * 4:
                raise ValueError(
                    f"Pixel data has {self.pixels.size} values, "
                    f"expected {self.width * self.height * 4}"
                )
            self.pixels = self.pixels.reshape(expected)
        if self.pixels.dtype != np.uint8:
            raise TypeError(f"Pixel data must be uint8, got {self.pixels.dtype}")

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "RasterBuffer":
        """Create a raster from a flat RGBA8 byte sequence."""
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).copy()
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def filled(cls, width: int, height: int, color: RgbaQuad) -> "RasterBuffer":
        """Create a raster with every pixel set to ``color``."""
        raster = cls(width=width, height=height)
        raster.pixels[:, :] = validate_quad(color)
        return raster

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        """Return True if (x, y) lies inside [0, width) x [0, height)."""
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_at(self, x: int, y: int) -> RgbaQuad:
        """
        Read the RGBA quad at (x, y).

        Raises:
            OutOfBounds: If the coordinate lies outside the raster
        """
        if not self.contains(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, quad: RgbaQuad) -> None:
        """
        Replace the RGBA quad at (x, y) in place.

        Raises:
            OutOfBounds: If the coordinate lies outside the raster
            ValueError: If the quad is not a valid RGBA quad
        """
        if not self.contains(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        self.pixels[y, x] = validate_quad(quad)

    def copy(self) -> "RasterBuffer":
        return RasterBuffer(width=self.width, height=self.height, pixels=self.pixels.copy())

    def flat_pixels(self) -> np.ndarray:
        """Flat row-major view of the RGBA bytes (length width*height*4)."""
        return self.pixels.reshape(-1)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def equals(self, other: "RasterBuffer") -> bool:
        """Byte-identical comparison of dimensions and pixels."""
        return (
            self.size == other.size
            and bool(np.array_equal(self.pixels, other.pixels))
        )
