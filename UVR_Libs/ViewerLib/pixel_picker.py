"""
Pixel picking for raster viewers.

A PixelPicker belongs to one viewer. It turns pointer positions into image
pixels, keeps the last hovered coordinate for drawing the cursor box, and
holds the viewer's selection state. While armed, hover sampling is frozen on
the selected pixel.

Classes:
    SelectionState: IDLE or ARMED
    PixelPicker: Per-viewer hover/selection state

Functions:
    format_hover_info: Status text for a hover sample
"""

from enum import Enum
from typing import Optional

from UVR_Libs.RasterLib.raster_models import ImageCoordinate, PixelSample, RasterBuffer
from UVR_Libs.ViewerLib.viewport_transform import ViewportTransform


class SelectionState(Enum):
    IDLE = "idle"
    ARMED = "armed"


def format_hover_info(label: str, sample: Optional[PixelSample]) -> Optional[str]:
    """
    Build the status text for a hover sample.

    Example:
        >>> format_hover_info("MAP", PixelSample(ImageCoordinate(1, 2), (3, 4, 5, 255)))
        'MAP: (1, 2) RGBA(3, 4, 5, 255) False'
    """
    if sample is None:
        return None
    r, g, b, a = sample.color
    return f"{label}: ({sample.x}, {sample.y}) RGBA({r}, {g}, {b}, {a}) {sample.selected}"


class PixelPicker:
    """Hover sampling and selection state of a single viewer."""

    def __init__(self) -> None:
        self.hover_coord: Optional[ImageCoordinate] = None
        self.current_sample: Optional[PixelSample] = None
        self.state = SelectionState.IDLE

    @property
    def armed(self) -> bool:
        return self.state is SelectionState.ARMED

    def sample(self, raster: Optional[RasterBuffer], ix: int, iy: int) -> Optional[PixelSample]:
        """
        Sample the pixel at image coordinate (ix, iy).

        The hovered coordinate is recorded even when it lies outside the
        raster. Coordinates outside ``[0, width) x [0, height)`` and a missing
        raster yield no sample. While armed, nothing changes and the frozen
        selection is returned.

        Returns:
            The new PixelSample, or None
        """
        if self.armed:
            return self.current_sample

        self.hover_coord = ImageCoordinate(int(ix), int(iy))
        if raster is None or not raster.contains(ix, iy):
            self.current_sample = None
            return None

        self.current_sample = PixelSample(
            coord=self.hover_coord,
            color=raster.pixel_at(ix, iy),
        )
        return self.current_sample

    def sample_at_screen(
        self,
        raster: Optional[RasterBuffer],
        transform: ViewportTransform,
        screen_x: float,
        screen_y: float,
    ) -> Optional[PixelSample]:
        """Resolve a screen position through ``transform`` and sample it."""
        ix, iy = transform.to_image_space(screen_x, screen_y)
        return self.sample(raster, ix, iy)

    def clear(self) -> None:
        """Forget the hover (pointer left the viewer). Ignored while armed."""
        if self.armed:
            return
        self.hover_coord = None
        self.current_sample = None

    def arm(self) -> Optional[PixelSample]:
        """
        Freeze the current sample as this viewer's selection.

        Returns:
            The selected sample, or None if there is nothing to select
        """
        if self.current_sample is None:
            return None
        self.current_sample = PixelSample(
            coord=self.current_sample.coord,
            color=self.current_sample.color,
            selected=True,
        )
        self.state = SelectionState.ARMED
        return self.current_sample

    def release(self) -> None:
        """Return to IDLE and resume live hover sampling."""
        self.state = SelectionState.IDLE
        if self.current_sample is not None:
            self.current_sample = PixelSample(
                coord=self.current_sample.coord,
                color=self.current_sample.color,
            )

    def refresh(self, raster: Optional[RasterBuffer]) -> Optional[PixelSample]:
        """Re-read the color of the current sample after its pixel changed."""
        sample = self.current_sample
        if sample is None or raster is None or not raster.contains(sample.x, sample.y):
            return sample
        self.current_sample = PixelSample(
            coord=sample.coord,
            color=raster.pixel_at(sample.x, sample.y),
            selected=sample.selected,
        )
        return self.current_sample

    def revalidate(self, raster: Optional[RasterBuffer]) -> Optional[PixelSample]:
        """
        Re-check the current sample against a newly installed raster.

        A sample that falls outside ``raster`` is dropped, releasing the
        selection if it was armed. A sample inside it is re-read.
        """
        sample = self.current_sample
        if sample is None:
            return None
        if raster is None or not raster.contains(sample.x, sample.y):
            self.state = SelectionState.IDLE
            self.current_sample = None
            return None
        return self.refresh(raster)
