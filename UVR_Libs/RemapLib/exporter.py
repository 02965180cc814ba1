"""
Exporter: bakes ledger edits into the map raster and writes it out.

Export bakes the encoding, not the textured result: the downloaded file is a
new map whose own channels carry the edits.

Functions:
    bake: Copy of the map raster with every ledger quad written in
    export_map_bytes: Bake and encode as PNG bytes
    export_map: Bake, encode and write ``edited-map.png`` to a directory
"""

import logging
from pathlib import Path

from UVR_Libs.constants import EXPORT_FILE_NAME
from UVR_Libs.RasterLib.image_codec import encode_image
from UVR_Libs.RasterLib.raster_models import RasterBuffer
from UVR_Libs.RemapLib.edit_ledger import EditLedger

logger = logging.getLogger(__name__)


def bake(map_raster: RasterBuffer, ledger: EditLedger) -> RasterBuffer:
    """
    Write every ledger override verbatim into a copy of the map.

    Entries outside the map extent are skipped.

    Args:
        map_raster: Source map raster (left untouched)
        ledger: Edits to bake

    Returns:
        A new RasterBuffer
    """
    baked = map_raster.copy()
    skipped = 0
    for coord, quad in ledger.items():
        if not baked.contains(coord.x, coord.y):
            skipped += 1
            continue
        baked.set_pixel(coord.x, coord.y, quad)

    if skipped:
        logger.warning(f"Skipped {skipped} edits outside the {baked.width}x{baked.height} map")
    return baked


def export_map_bytes(map_raster: RasterBuffer, ledger: EditLedger) -> bytes:
    """Bake the ledger into the map and encode it as PNG bytes."""
    return encode_image(bake(map_raster, ledger))


def export_map(map_raster: RasterBuffer, ledger: EditLedger, output_dir: Path) -> Path:
    """
    Bake, encode and save the edited map.

    Args:
        map_raster: Map raster to export
        ledger: Edits to bake
        output_dir: Existing directory to write into

    Returns:
        Path of the written file (always ``edited-map.png``)

    Raises:
        OSError: If the directory is missing or the file cannot be written
        EncodeError: If encoding fails
    """
    output_dir = Path(output_dir)
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    data = export_map_bytes(map_raster, ledger)
    save_path = output_dir / EXPORT_FILE_NAME
    save_path.write_bytes(data)
    logger.info(f"Exported edited map ({len(ledger)} edits) to {save_path}")
    return save_path
