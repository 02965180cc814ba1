"""
Compositor: resolves (map, edit ledger, texture) into the output raster.

For every map pixel the texture coordinate is decoded from the ledger
override if one exists, otherwise from the map pixel itself. The coordinate
is clamped to the texture extent and all four texture channels are copied.

Example:
    >>> output = composite(map_raster, ledger, texture_raster)
    >>> output.size == map_raster.size
    True

The pass is full and synchronous: every call produces a brand-new output
raster and callers re-run it whenever any input changes.
"""

import logging
from typing import Optional

import numpy as np

from UVR_Libs.errors import CompositorInputMissing
from UVR_Libs.RasterLib.raster_models import RasterBuffer
from UVR_Libs.RasterLib.uv_encoding import decode_uv, decode_uv_arrays
from UVR_Libs.RemapLib.edit_ledger import EditLedger

logger = logging.getLogger(__name__)


def resolve_texture_coordinates(map_raster: RasterBuffer, ledger: Optional[EditLedger], texture: RasterBuffer):
    """
    Compute the clamped texture index of every map pixel.

    Args:
        map_raster: Map raster whose channels encode UVs
        ledger: Optional overrides; entries outside the map are ignored
        texture: Texture raster that bounds the coordinates

    Returns:
        Tuple of (tex_x, tex_y) index arrays of shape (map.height, map.width)
    """
    u, v = decode_uv_arrays(map_raster.pixels)

    if ledger is not None:
        for coord, quad in ledger.items():
            if not map_raster.contains(coord.x, coord.y):
                continue
            u[coord.y, coord.x], v[coord.y, coord.x] = decode_uv(quad)

    # u and v are fresh arrays from the decode, so clamp them in place
    np.minimum(u, texture.width - 1, out=u)
    np.minimum(v, texture.height - 1, out=v)
    return u, v


def composite(
    map_raster: Optional[RasterBuffer],
    ledger: Optional[EditLedger],
    texture: Optional[RasterBuffer],
) -> RasterBuffer:
    """
    Produce the remapped output raster.

    Args:
        map_raster: Map raster (output has its dimensions)
        ledger: Edit ledger overriding map entries (None behaves as empty)
        texture: Texture raster sampled by the decoded coordinates

    Returns:
        A new RasterBuffer with the sampled texture colors

    Raises:
        CompositorInputMissing: If the map or texture raster is absent
    """
    if map_raster is None or texture is None:
        missing = "map" if map_raster is None else "texture"
        raise CompositorInputMissing(f"Cannot composite without a {missing} raster")

    tex_x, tex_y = resolve_texture_coordinates(map_raster, ledger, texture)
    pixels = texture.pixels[tex_y, tex_x]

    logger.debug(
        f"Composited {map_raster.width}x{map_raster.height} map against "
        f"{texture.width}x{texture.height} texture with "
        f"{len(ledger) if ledger is not None else 0} edits"
    )
    return RasterBuffer(width=map_raster.width, height=map_raster.height, pixels=pixels)
