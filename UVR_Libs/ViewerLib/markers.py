"""
Marker geometry and colors drawn over raster viewers.

All rectangles are in image space; the canvas applies the viewport
transform when painting them.
"""

from typing import Optional, Tuple

from UVR_Libs.constants import (
    CURSOR_ARMED_COLOR,
    CURSOR_IDLE_COLOR,
    CURSOR_TARGET_FROZEN_COLOR,
    CURSOR_TARGET_HOVER_COLOR,
    MARKER_LINE_WIDTH,
    MARKER_PADDING,
)
from UVR_Libs.RasterLib.raster_models import ImageCoordinate, PixelSample
from UVR_Libs.RasterLib.uv_encoding import decode_uv

MarkerRect = Tuple[float, float, float, float]


def cursor_color(companion_armed: bool, own_armed: bool) -> str:
    """
    Color of a viewer's hover box.

    Args:
        companion_armed: The texture viewer has published an armed selection
                         to this viewer
        own_armed: This viewer's hover is frozen on its own selection
    """
    if companion_armed:
        return CURSOR_TARGET_FROZEN_COLOR if own_armed else CURSOR_TARGET_HOVER_COLOR
    return CURSOR_ARMED_COLOR if own_armed else CURSOR_IDLE_COLOR


def marker_rect(x: float, y: float, padding: float = MARKER_PADDING) -> MarkerRect:
    """Box around pixel (x, y) as (left, top, width, height)."""
    return (x - padding / 2, y - padding / 2, 1.0 + padding, 1.0 + padding)


def marker_line_width(scale: float) -> float:
    """Line width in image units so the stroke stays constant on screen."""
    return MARKER_LINE_WIDTH / scale


def uv_marker_coord(map_sample: Optional[PixelSample]) -> Optional[ImageCoordinate]:
    """Texture pixel addressed by the hovered map pixel."""
    if map_sample is None:
        return None
    return ImageCoordinate(*decode_uv(map_sample.color))
