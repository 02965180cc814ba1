"""
PNG codec and file-type checks for UV Remap.

Decodes compressed image bytes into RasterBuffers and encodes RasterBuffers
back into lossless PNG bytes using Pillow. No color management is applied:
channels are carried through as raw bytes.

Functions:
    decode_image: Decode image bytes into an RGBA RasterBuffer
    encode_image: Encode a RasterBuffer as PNG bytes
    guess_mime_type: Guess a file's MIME type from its name
    check_input_type: Reject files that are not PNG images
"""

import io
import logging
import mimetypes
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from UVR_Libs.constants import ACCEPTED_MIME_TYPE, DEFAULT_OUTPUT_FORMAT, INPUT_REJECTED_MESSAGE
from UVR_Libs.errors import DecodeError, EncodeError, InputRejected
from UVR_Libs.RasterLib.raster_models import RasterBuffer

logger = logging.getLogger(__name__)


def guess_mime_type(file_name: str) -> Optional[str]:
    mime_type, _ = mimetypes.guess_type(str(file_name))
    return mime_type


def check_input_type(file_name: str, mime_type: Optional[str] = None) -> str:
    """
    Ensure an offered file is a PNG image.

    Args:
        file_name: Name (or path) of the offered file
        mime_type: MIME type reported by the caller; guessed from the
                   file name when omitted

    Returns:
        The accepted MIME type

    Raises:
        InputRejected: If the file is not ``image/png``
    """
    resolved = mime_type if mime_type else guess_mime_type(file_name)
    if resolved != ACCEPTED_MIME_TYPE:
        logger.warning(f"Rejected input '{file_name}' with type {resolved!r}")
        raise InputRejected(INPUT_REJECTED_MESSAGE)
    return resolved


def decode_image(data: bytes) -> RasterBuffer:
    """
    Decode compressed image bytes into an RGBA8 RasterBuffer.

    Palette, grayscale and RGB images are expanded to RGBA the same way
    Pillow's ``convert("RGBA")`` does.

    Args:
        data: Encoded image bytes

    Returns:
        A new RasterBuffer owning the decoded pixels

    Raises:
        DecodeError: If the bytes are empty, malformed or not an image
    """
    if not data:
        raise DecodeError("No image data to decode")

    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    pixels = np.array(rgba, dtype=np.uint8)
    return RasterBuffer(width=rgba.width, height=rgba.height, pixels=pixels)


def encode_image(raster: RasterBuffer, save_format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """
    Encode a RasterBuffer losslessly.

    Args:
        raster: Raster to encode
        save_format: Pillow format name (default: PNG)

    Returns:
        Encoded image bytes

    Raises:
        EncodeError: If the raster is not encodable in the requested format
    """
    if not isinstance(raster, RasterBuffer):
        raise EncodeError(f"Expected RasterBuffer, got {type(raster)}")

    buffer = io.BytesIO()
    try:
        image = Image.fromarray(np.ascontiguousarray(raster.pixels))
        image.save(buffer, format=save_format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {raster.width}x{raster.height} raster: {e}") from e
    return buffer.getvalue()
