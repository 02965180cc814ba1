from typing import Callable, Iterable, Optional

from PyQt5.QtCore import QRectF, Qt
from PyQt5.QtGui import QColor, QImage, QPainter, QPen
from PyQt5.QtWidgets import QWidget

from UVR_Libs.constants import CANVAS_BACKGROUND_COLOR, CURSOR_IDLE_COLOR, MIN_PANEL_WIDTH, UV_MARKER_COLOR
from UVR_Libs.RasterLib.raster_models import ImageCoordinate, RasterBuffer
from UVR_Libs.ViewerLib.markers import marker_line_width, marker_rect
from UVR_Libs.ViewerLib.viewer_model import RasterViewer
from UVR_Libs.ViewerLib.viewport_transform import wheel_delta_to_scale


def raster_to_qimage(raster: RasterBuffer) -> QImage:
    data = raster.to_bytes()
    image = QImage(data, raster.width, raster.height, raster.width * 4, QImage.Format_RGBA8888)
    # QImage does not own `data`; detach before it goes out of scope
    return image.copy()


class RasterCanvas(QWidget):
    def __init__(
        self,
        viewer: RasterViewer,
        pan_buttons: Iterable[int] = (Qt.MiddleButton,),
        show_hover_cursor: bool = True,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.viewer = viewer
        self.pan_buttons = tuple(pan_buttons)
        self.show_hover_cursor = show_hover_cursor

        self._is_panning = False
        self._pan_start = None
        self._on_hover: Optional[Callable[[float, float], None]] = None
        self._on_leave: Optional[Callable[[], None]] = None
        self._on_primary_click: Optional[Callable[[], None]] = None
        self._cursor_color: Callable[[], str] = lambda: CURSOR_IDLE_COLOR
        self._uv_marker: Callable[[], Optional[ImageCoordinate]] = lambda: None

        self.setMouseTracking(True)
        self.setMinimumSize(MIN_PANEL_WIDTH, MIN_PANEL_WIDTH)

    def set_hover_handlers(
        self,
        on_hover: Optional[Callable[[float, float], None]],
        on_leave: Optional[Callable[[], None]],
    ) -> None:
        self._on_hover = on_hover
        self._on_leave = on_leave

    def set_click_handler(self, on_primary_click: Optional[Callable[[], None]]) -> None:
        self._on_primary_click = on_primary_click

    def set_marker_sources(
        self,
        cursor_color: Optional[Callable[[], str]] = None,
        uv_marker: Optional[Callable[[], Optional[ImageCoordinate]]] = None,
    ) -> None:
        if cursor_color is not None:
            self._cursor_color = cursor_color
        if uv_marker is not None:
            self._uv_marker = uv_marker

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(CANVAS_BACKGROUND_COLOR))

        transform = self.viewer.transform
        painter.translate(transform.offset_x, transform.offset_y)
        painter.scale(transform.scale, transform.scale)

        raster = self.viewer.raster
        if raster is not None:
            painter.drawImage(0, 0, raster_to_qimage(raster))

        hover = self.viewer.picker.hover_coord
        if self.show_hover_cursor and hover is not None:
            self._draw_marker(painter, hover, self._cursor_color())

        uv_coord = self._uv_marker()
        if uv_coord is not None:
            self._draw_marker(painter, uv_coord, UV_MARKER_COLOR)

        painter.end()

    def _draw_marker(self, painter: QPainter, coord: ImageCoordinate, color: str) -> None:
        pen = QPen(QColor(color))
        pen.setWidthF(marker_line_width(self.viewer.transform.scale))
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(*marker_rect(coord.x, coord.y)))

    def mousePressEvent(self, event) -> None:
        if event.button() in self.pan_buttons:
            self._is_panning = True
            self._pan_start = event.pos()
            self.setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._is_panning and self._pan_start is not None:
            delta = event.pos() - self._pan_start
            self._pan_start = event.pos()
            self.viewer.pan(delta.x(), delta.y())

        if self._on_hover is not None:
            self._on_hover(float(event.x()), float(event.y()))
        self.update()
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() in self.pan_buttons and self._is_panning:
            self._is_panning = False
            self._pan_start = None
            self.setCursor(Qt.ArrowCursor)
            event.accept()
            return

        if event.button() == Qt.LeftButton and self._on_primary_click is not None:
            self._on_primary_click()
            self.update()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event) -> None:
        position = event.position()
        delta_scale = wheel_delta_to_scale(event.angleDelta().y())
        if delta_scale:
            self.viewer.zoom_at(position.x(), position.y(), delta_scale)
            self.update()
        event.accept()

    def leaveEvent(self, event) -> None:
        if self._on_leave is not None:
            self._on_leave()
        self.update()
        super().leaveEvent(event)
