"""
Constants and configuration values for UV Remap.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Channel encoding
CHANNEL_MIN = 0
CHANNEL_MAX = 255
EDIT_BLUE_CHANNEL = 0
EDIT_ALPHA_CHANNEL = 255

# Viewport constants
DEFAULT_SCALE = 1.0
MIN_SCALE = 0.1
ZOOM_INTENSITY = 0.001

# File input / export
ACCEPTED_MIME_TYPE = "image/png"
INPUT_REJECTED_MESSAGE = "Please select a PNG file"
PNG_FILE_FILTER = "PNG Images (*.png)"
EXPORT_FILE_NAME = "edited-map.png"
DEFAULT_OUTPUT_FORMAT = "PNG"

# Image slot names
SLOT_MAP = "map"
SLOT_TEXTURE = "texture"

# Hover info labels
LABEL_MAP = "MAP"
LABEL_TEXTURE = "TEXTURE"

# Marker drawing (image-space units, line width in screen pixels)
MARKER_PADDING = 0.2
MARKER_LINE_WIDTH = 4.0

# Cursor colors (Qt color strings)
CURSOR_IDLE_COLOR = "yellow"
CURSOR_ARMED_COLOR = "green"
CURSOR_TARGET_HOVER_COLOR = "orange"
CURSOR_TARGET_FROZEN_COLOR = "red"
UV_MARKER_COLOR = "blue"
CANVAS_BACKGROUND_COLOR = "#f0f0f0"

# UI constants
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 850
MIN_PANEL_WIDTH = 50
DECODE_WORKERS = 2
