"""
Session-owned image slots with last-requested-wins loading.

Loading is split into a request (which hands out an id) and a delivery of
the decoded raster. Only the newest request may fill the slot; a decode
that finishes after a newer request was made is discarded, and a failed
decode leaves the previous raster in place.

Classes:
    ImageSlot: A named, replaceable raster reference
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from UVR_Libs.RasterLib.raster_models import RasterBuffer

logger = logging.getLogger(__name__)


@dataclass
class ImageSlot:
    """One raster slot of the session (map or texture).

    Attributes:
        name: Slot name used in log messages
        raster: Current raster, None until the first successful load
        source_name: File name of the current raster
    """
    name: str
    raster: Optional[RasterBuffer] = None
    source_name: Optional[str] = None
    _latest_request: int = field(default=0, init=False, repr=False)
    _pending_name: Optional[str] = field(default=None, init=False, repr=False)

    @property
    def latest_request(self) -> int:
        return self._latest_request

    @property
    def loaded(self) -> bool:
        return self.raster is not None

    def begin_request(self, source_name: Optional[str] = None) -> int:
        """Start a load and return its request id, superseding older ones."""
        self._latest_request += 1
        self._pending_name = source_name
        logger.debug(f"Slot '{self.name}' load request {self._latest_request} for {source_name}")
        return self._latest_request

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request

    def deliver(self, request_id: int, raster: RasterBuffer) -> bool:
        """
        Replace the slot's raster with a decoded result.

        Args:
            request_id: Id returned by begin_request
            raster: Decoded raster

        Returns:
            True if the raster was installed, False if the request was
            superseded and the result discarded
        """
        if not self.is_current(request_id):
            logger.warning(
                f"Discarding superseded load {request_id} for slot '{self.name}' "
                f"(latest is {self._latest_request})"
            )
            return False

        self.raster = raster
        self.source_name = self._pending_name
        logger.info(f"Loaded {raster.width}x{raster.height} {self.name} from {self.source_name}")
        return True

    def fail(self, request_id: int, error: Exception) -> None:
        """Record a failed decode; the current raster stays untouched."""
        logger.warning(f"Load {request_id} for slot '{self.name}' failed: {error}")
