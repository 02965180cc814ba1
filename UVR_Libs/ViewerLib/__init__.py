"""
ViewerLib - Viewer state and interaction

This module provides the viewport transform, pixel picking, marker
geometry and the selection handshake between the texture and map viewers.
The Qt canvas widget lives in ``canvas_viewer`` and is imported on demand.
"""

from UVR_Libs.ViewerLib.viewport_transform import ViewportTransform, wheel_delta_to_scale
from UVR_Libs.ViewerLib.pixel_picker import PixelPicker, SelectionState, format_hover_info
from UVR_Libs.ViewerLib.markers import cursor_color, marker_line_width, marker_rect, uv_marker_coord
from UVR_Libs.ViewerLib.viewer_model import RasterViewer
from UVR_Libs.ViewerLib.selection_handshake import EditCommit, SelectionHandshake

__all__ = [
    "ViewportTransform",
    "wheel_delta_to_scale",
    "PixelPicker",
    "SelectionState",
    "format_hover_info",
    "cursor_color",
    "marker_line_width",
    "marker_rect",
    "uv_marker_coord",
    "RasterViewer",
    "EditCommit",
    "SelectionHandshake",
]
