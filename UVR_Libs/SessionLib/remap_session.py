"""
Remap session: the single owner of all editing state.

The session holds the map and texture slots, the edit ledger, the latest
composited output and three viewers (map, texture, result). Viewers read
rasters through accessors into the session, so the compositor and the
viewers always see the same, latest buffers.

Example:
    >>> session = RemapSession()
    >>> session.load_image_bytes("map", map_png, "map.png")
    >>> session.load_image_bytes("texture", texture_png, "texture.png")
    >>> session.hover_texture(12.0, 4.0)
    >>> session.click_texture()          # arm texture pixel
    >>> session.hover_map(0.0, 0.0)
    >>> session.click_map()              # commit edit, recomposite
    >>> session.export_map(Path("out"))  # writes out/edited-map.png
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from UVR_Libs.constants import LABEL_MAP, LABEL_TEXTURE, SLOT_MAP, SLOT_TEXTURE
from UVR_Libs.errors import CompositorInputMissing, DecodeError
from UVR_Libs.RasterLib.image_codec import check_input_type, decode_image
from UVR_Libs.RasterLib.raster_models import PixelSample, RasterBuffer
from UVR_Libs.RemapLib.compositor import composite
from UVR_Libs.RemapLib.edit_ledger import EditLedger
from UVR_Libs.RemapLib.exporter import export_map
from UVR_Libs.SessionLib.image_slots import ImageSlot
from UVR_Libs.ViewerLib.pixel_picker import SelectionState, format_hover_info
from UVR_Libs.ViewerLib.selection_handshake import EditCommit, SelectionHandshake
from UVR_Libs.ViewerLib.viewer_model import RasterViewer

logger = logging.getLogger(__name__)

RESULT_VIEWER_NAME = "result"


class RemapSession:
    """Session-owned store of rasters, edits and viewers."""

    def __init__(self) -> None:
        self.map_slot = ImageSlot(SLOT_MAP)
        self.texture_slot = ImageSlot(SLOT_TEXTURE)
        self._slots: Dict[str, ImageSlot] = {
            SLOT_MAP: self.map_slot,
            SLOT_TEXTURE: self.texture_slot,
        }
        self.ledger = EditLedger()
        self.output: Optional[RasterBuffer] = None

        self.map_viewer = RasterViewer(SLOT_MAP, lambda: self.map_slot.raster)
        self.texture_viewer = RasterViewer(SLOT_TEXTURE, lambda: self.texture_slot.raster)
        self.result_viewer = RasterViewer(RESULT_VIEWER_NAME, lambda: self.output)

        self.handshake = SelectionHandshake(
            source=self.texture_viewer.picker,
            target=self.map_viewer.picker,
            ledger=self.ledger,
            target_raster=lambda: self.map_slot.raster,
            on_commit=self._on_commit,
            source_raster=lambda: self.texture_slot.raster,
        )
        self._listeners: List[Callable[[], None]] = []

    # ---------- Change notification ----------
    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback run after rasters, edits or output change."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # ---------- Loading ----------
    def slot(self, slot_name: str) -> ImageSlot:
        try:
            return self._slots[slot_name]
        except KeyError:
            raise ValueError(f"Unknown image slot: {slot_name}") from None

    def begin_load(self, slot_name: str, file_name: str, mime_type: Optional[str] = None) -> int:
        """
        Validate an offered file and open a load request for it.

        Raises:
            InputRejected: If the file is not a PNG; no state changes
            ValueError: If the slot name is unknown
        """
        slot = self.slot(slot_name)
        check_input_type(file_name, mime_type)
        return slot.begin_request(file_name)

    def deliver_load(self, slot_name: str, request_id: int, raster: RasterBuffer) -> bool:
        """
        Install a decoded raster if its request is still the latest.

        Returns:
            True if installed (the viewer's hover sample re-checked against
            the new raster and the output recomposited)
        """
        if not self.slot(slot_name).deliver(request_id, raster):
            return False
        self._viewer_for(slot_name).picker.revalidate(raster)
        self.recomposite()
        return True

    def _viewer_for(self, slot_name: str) -> RasterViewer:
        return self.map_viewer if slot_name == SLOT_MAP else self.texture_viewer

    def fail_load(self, slot_name: str, request_id: int, error: Exception) -> None:
        self.slot(slot_name).fail(request_id, error)

    def load_image_bytes(
        self,
        slot_name: str,
        data: bytes,
        file_name: str,
        mime_type: Optional[str] = None,
    ) -> bool:
        """
        Validate, decode and install image bytes in one step.

        Raises:
            InputRejected: If the file is not a PNG
            DecodeError: If the bytes cannot be decoded; the slot keeps its
                         previous raster
        """
        request_id = self.begin_load(slot_name, file_name, mime_type)
        try:
            raster = decode_image(data)
        except DecodeError as e:
            self.fail_load(slot_name, request_id, e)
            raise
        return self.deliver_load(slot_name, request_id, raster)

    def load_image_file(self, slot_name: str, path: Path) -> bool:
        path = Path(path)
        return self.load_image_bytes(slot_name, path.read_bytes(), path.name)

    # ---------- Hover ----------
    def hover_map(self, screen_x: float, screen_y: float) -> Optional[PixelSample]:
        sample = self.map_viewer.hover(screen_x, screen_y)
        self._notify()
        return sample

    def hover_texture(self, screen_x: float, screen_y: float) -> Optional[PixelSample]:
        sample = self.texture_viewer.hover(screen_x, screen_y)
        self._notify()
        return sample

    def hover_result(self, screen_x: float, screen_y: float) -> Optional[PixelSample]:
        return self.result_viewer.hover(screen_x, screen_y)

    def hover_info(self) -> Tuple[Optional[str], Optional[str]]:
        """Status text for the map and texture hover samples (None when absent)."""
        return (
            format_hover_info(LABEL_MAP, self.map_viewer.current_sample),
            format_hover_info(LABEL_TEXTURE, self.texture_viewer.current_sample),
        )

    # ---------- Selection handshake ----------
    @property
    def armed_selection(self) -> Optional[PixelSample]:
        return self.handshake.armed_selection

    def click_texture(self) -> SelectionState:
        state = self.handshake.click_source()
        self._notify()
        return state

    def click_map(self) -> Optional[EditCommit]:
        return self.handshake.click_target()

    def _on_commit(self, commit: EditCommit) -> None:
        self.recomposite()

    # ---------- Compositing / export ----------
    def recomposite(self) -> Optional[RasterBuffer]:
        """
        Re-run the compositor over the current inputs.

        When the map or texture is missing the pass is skipped and the
        previous output (if any) stays in place.
        """
        try:
            output = composite(self.map_slot.raster, self.ledger, self.texture_slot.raster)
        except CompositorInputMissing as e:
            logger.debug(f"Skipping composite: {e}")
            self._notify()
            return None

        self.output = output
        self._notify()
        return output

    def export_map(self, output_dir: Path) -> Optional[Path]:
        """
        Write the edited map into ``output_dir``.

        Returns:
            Path of the written file, or None when no map is loaded
        """
        if self.map_slot.raster is None:
            logger.warning("No map loaded, nothing to export")
            return None
        return export_map(self.map_slot.raster, self.ledger, output_dir)
