"""
RasterLib - RGBA raster storage, UV encoding and the image codec

This module provides the raster data models shared by every other
sub-package of UV Remap.
"""

from UVR_Libs.RasterLib.raster_models import (
    ImageCoordinate,
    PixelSample,
    RasterBuffer,
    RgbaQuad,
    validate_quad,
)
from UVR_Libs.RasterLib.uv_encoding import (
    decode_uv,
    decode_uv_arrays,
    encode_edit_quad,
)
from UVR_Libs.RasterLib.image_codec import (
    check_input_type,
    decode_image,
    encode_image,
    guess_mime_type,
)

__all__ = [
    "ImageCoordinate",
    "PixelSample",
    "RasterBuffer",
    "RgbaQuad",
    "validate_quad",
    "decode_uv",
    "decode_uv_arrays",
    "encode_edit_quad",
    "check_input_type",
    "decode_image",
    "encode_image",
    "guess_mime_type",
]
