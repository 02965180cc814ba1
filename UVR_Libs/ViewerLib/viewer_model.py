"""
Viewer model: one raster-displaying surface.

A RasterViewer pairs a ViewportTransform with a PixelPicker and reads its
raster through an accessor into the session store, so it always shows the
latest buffer without owning a copy.
"""

from typing import Callable, Optional

from UVR_Libs.RasterLib.raster_models import PixelSample, RasterBuffer
from UVR_Libs.ViewerLib.pixel_picker import PixelPicker
from UVR_Libs.ViewerLib.viewport_transform import ViewportTransform

RasterSource = Callable[[], Optional[RasterBuffer]]


class RasterViewer:
    """Transform, picker and raster accessor of one viewer."""

    def __init__(self, name: str, raster_source: RasterSource) -> None:
        self.name = name
        self._raster_source = raster_source
        self.transform = ViewportTransform()
        self.picker = PixelPicker()

    @property
    def raster(self) -> Optional[RasterBuffer]:
        return self._raster_source()

    @property
    def current_sample(self) -> Optional[PixelSample]:
        return self.picker.current_sample

    def hover(self, screen_x: float, screen_y: float) -> Optional[PixelSample]:
        return self.picker.sample_at_screen(self.raster, self.transform, screen_x, screen_y)

    def leave(self) -> None:
        self.picker.clear()

    def pan(self, dx: float, dy: float) -> None:
        self.transform.pan(dx, dy)

    def zoom_at(self, screen_x: float, screen_y: float, delta_scale: float) -> None:
        self.transform.zoom_at(screen_x, screen_y, delta_scale)

    def __repr__(self) -> str:
        return f"RasterViewer({self.name!r}, {self.picker.state.value})"
