"""
Selection handshake between the texture (source) and map (target) viewers.

State machine per source viewer::

    IDLE  --click source with hover sample-->  ARMED
    ARMED --click source------------------->   IDLE
    ARMED --click target with hover sample-->  ARMED  (commits one edit)

A commit writes ``(src.x, src.y, 0, 255)`` into the edit ledger at the
target coordinate and into the map raster's own pixel, keeping both in
sync. Every other click is a no-op.

Classes:
    EditCommit: Record of one committed edit
    SelectionHandshake: Owner of the transitions above
"""

import logging
from typing import Callable, NamedTuple, Optional, Tuple

from UVR_Libs.RasterLib.raster_models import ImageCoordinate, PixelSample, RasterBuffer, RgbaQuad
from UVR_Libs.RasterLib.uv_encoding import encode_edit_quad
from UVR_Libs.RemapLib.edit_ledger import EditLedger
from UVR_Libs.ViewerLib.pixel_picker import PixelPicker, SelectionState

logger = logging.getLogger(__name__)


class EditCommit(NamedTuple):
    coord: ImageCoordinate
    quad: RgbaQuad
    source: ImageCoordinate


class SelectionHandshake:
    """
    Coordinates a source pick with a target pick to produce ledger edits.

    Args:
        source: Picker of the texture viewer
        target: Picker of the map viewer
        ledger: Ledger receiving committed edits
        target_raster: Accessor for the map raster updated on commit
        on_commit: Called after each commit (e.g. to recomposite)
        source_raster: Accessor for the texture raster; when given, a
                       selection outside it can be neither armed nor committed
    """

    def __init__(
        self,
        source: PixelPicker,
        target: PixelPicker,
        ledger: EditLedger,
        target_raster: Callable[[], Optional[RasterBuffer]],
        on_commit: Optional[Callable[[EditCommit], None]] = None,
        source_raster: Optional[Callable[[], Optional[RasterBuffer]]] = None,
    ) -> None:
        self.source = source
        self.target = target
        self.ledger = ledger
        self._target_raster = target_raster
        self._source_raster = source_raster
        self.on_commit = on_commit

    @property
    def state(self) -> SelectionState:
        return self.source.state

    @property
    def armed_selection(self) -> Optional[PixelSample]:
        """Source sample published to the target viewer, if armed."""
        if not self.source.armed:
            return None
        return self.source.current_sample

    def _in_source(self, sample: PixelSample) -> bool:
        if self._source_raster is None:
            return True
        raster = self._source_raster()
        return raster is not None and raster.contains(sample.x, sample.y)

    def arm_selection(self, coord: Optional[Tuple[int, int]] = None) -> Optional[PixelSample]:
        """
        IDLE -> ARMED on a source pixel.

        Args:
            coord: Texture pixel to select; defaults to the source's
                   current hover sample

        Returns:
            The armed sample, or None if there is no valid pixel to arm
        """
        if self.source.armed:
            return self.source.current_sample

        if coord is not None:
            if self._source_raster is None:
                raise ValueError("Arming by coordinate needs a source raster accessor")
            self.source.sample(self._source_raster(), *coord)

        sample = self.source.current_sample
        if sample is None or not self._in_source(sample):
            return None

        selection = self.source.arm()
        logger.debug(f"Armed texture selection at {selection.coord}")
        return selection

    def release_selection(self) -> None:
        """ARMED -> IDLE, resuming live hover on the source."""
        if self.source.armed:
            self.source.release()
            logger.debug("Released texture selection")

    def click_source(self) -> SelectionState:
        """Primary click on the source viewer toggles the selection."""
        if self.source.armed:
            self.release_selection()
        else:
            self.arm_selection()
        return self.source.state

    def commit_edit(self, coord: Tuple[int, int]) -> Optional[EditCommit]:
        """
        Point map pixel ``coord`` at the armed texture pixel.

        Returns:
            The committed edit, or None when nothing valid is armed or the
            coordinate is outside the map raster
        """
        selection = self.armed_selection
        if selection is None or not self._in_source(selection):
            return None

        raster = self._target_raster()
        target = ImageCoordinate(*coord)
        if raster is None or not raster.contains(target.x, target.y):
            return None

        quad = encode_edit_quad(selection.x, selection.y)
        self.ledger.put(target, quad)
        raster.set_pixel(target.x, target.y, quad)
        self.target.refresh(raster)

        commit = EditCommit(coord=target, quad=quad, source=selection.coord)
        logger.debug(f"Committed edit {target} -> texture {selection.coord}")
        if self.on_commit is not None:
            self.on_commit(commit)
        return commit

    def click_target(self) -> Optional[EditCommit]:
        """Primary click on the target viewer commits at its hover sample."""
        sample = self.target.current_sample
        if sample is None or not self.source.armed:
            return None
        return self.commit_edit(sample.coord)
