"""
Viewport transform between screen and image coordinates.

An image point ``(ix, iy)`` is drawn at
``(ix * scale + offset_x, iy * scale + offset_y)``. Each viewer owns one
transform, created at identity and updated by pan and zoom input.

Example:
    >>> view = ViewportTransform()
    >>> view.zoom_at(100.0, 50.0, 1.0)
    >>> view.to_image_space(100.0, 50.0)
    (100, 50)
"""

import math
from dataclasses import dataclass
from typing import Tuple

from UVR_Libs.constants import DEFAULT_SCALE, MIN_SCALE, ZOOM_INTENSITY


def wheel_delta_to_scale(angle_delta: float, intensity: float = ZOOM_INTENSITY) -> float:
    """Convert a wheel delta (positive = away from the user) to a scale delta."""
    return float(angle_delta) * intensity


@dataclass
class ViewportTransform:
    """Uniform scale plus translation.

    Attributes:
        scale: Screen pixels per image pixel (always >= MIN_SCALE)
        offset_x: Screen x of the image origin
        offset_y: Screen y of the image origin
    """
    scale: float = DEFAULT_SCALE
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self):
        """Validate the scale."""
        if not (self.scale > 0):
            raise ValueError(f"scale must be > 0, got {self.scale}")

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def zoom_at(self, screen_x: float, screen_y: float, delta_scale: float) -> None:
        """
        Change the scale while keeping the point under the cursor fixed.

        Args:
            screen_x: Cursor x in screen space
            screen_y: Cursor y in screen space
            delta_scale: Amount added to the current scale; the result is
                         floored at MIN_SCALE
        """
        world_x, world_y = self.to_image_point(screen_x, screen_y)
        new_scale = max(MIN_SCALE, self.scale + delta_scale)

        self.offset_x = screen_x - world_x * new_scale
        self.offset_y = screen_y - world_y * new_scale
        self.scale = new_scale

    def to_image_point(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """Inverse mapping without rounding."""
        return (
            (screen_x - self.offset_x) / self.scale,
            (screen_y - self.offset_y) / self.scale,
        )

    def to_image_space(self, screen_x: float, screen_y: float) -> Tuple[int, int]:
        """Inverse mapping floored to the integer pixel under the point."""
        image_x, image_y = self.to_image_point(screen_x, screen_y)
        return math.floor(image_x), math.floor(image_y)

    def to_screen_space(self, image_x: float, image_y: float) -> Tuple[float, float]:
        return (
            image_x * self.scale + self.offset_x,
            image_y * self.scale + self.offset_y,
        )

    def reset(self) -> None:
        self.scale = DEFAULT_SCALE
        self.offset_x = 0.0
        self.offset_y = 0.0
