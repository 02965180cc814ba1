"""
UV coordinate encoding in RGBA channels.

A map pixel addresses a texture pixel through its color channels:
``u = r`` and ``v = max(g, b)``. Alpha is not part of the encoding.
Two channels compete for ``v``; the rule is kept bit-exact because exported
maps must decode to the same coordinates they were edited with.

Functions:
    decode_uv: Recover (u, v) from an RGBA quad
    decode_uv_arrays: Vectorized decode over an (H, W, 4) pixel array
    encode_edit_quad: Build the quad written when an edit is committed
"""

import logging
from typing import Tuple

import numpy as np

from UVR_Libs.constants import CHANNEL_MAX, EDIT_ALPHA_CHANNEL, EDIT_BLUE_CHANNEL
from UVR_Libs.RasterLib.raster_models import RgbaQuad

logger = logging.getLogger(__name__)


def decode_uv(quad: RgbaQuad) -> Tuple[int, int]:
    """
    Decode the texture coordinate carried by an RGBA quad.

    Args:
        quad: (r, g, b, a) channel values

    Returns:
        Tuple of (u, v)
    """
    r, g, b = int(quad[0]), int(quad[1]), int(quad[2])
    return r, max(g, b)


def decode_uv_arrays(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Decode every pixel of an (H, W, 4) array at once.

    Returns:
        Tuple of (u, v) integer index arrays, each of shape (H, W)
    """
    u = pixels[..., 0].astype(np.intp)
    v = np.maximum(pixels[..., 1], pixels[..., 2]).astype(np.intp)
    return u, v


def encode_edit_quad(tex_x: int, tex_y: int) -> RgbaQuad:
    """
    Build the override quad pointing at texture pixel (tex_x, tex_y).

    The coordinate goes into the red and green channels, blue is zeroed so it
    cannot win the ``max(g, b)`` comparison, and alpha is opaque. Channels
    hold one byte, so coordinates above 255 are clamped.
    """
    if tex_x > CHANNEL_MAX or tex_y > CHANNEL_MAX:
        logger.warning(
            f"Texture coordinate ({tex_x}, {tex_y}) exceeds channel range, "
            f"clamping to {CHANNEL_MAX}"
        )
    r = min(max(int(tex_x), 0), CHANNEL_MAX)
    g = min(max(int(tex_y), 0), CHANNEL_MAX)
    return r, g, EDIT_BLUE_CHANNEL, EDIT_ALPHA_CHANNEL
