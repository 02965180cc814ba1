import logging
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QObject, Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from UVR_Libs.constants import (
    DECODE_WORKERS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MIN_PANEL_WIDTH,
    PNG_FILE_FILTER,
    SLOT_MAP,
    SLOT_TEXTURE,
)
from UVR_Libs.errors import DecodeFailed, EncodeError, InputRejected
from UVR_Libs.RasterLib.image_codec import decode_image
from UVR_Libs.SessionLib.remap_session import RemapSession
from UVR_Libs.ViewerLib.canvas_viewer import RasterCanvas
from UVR_Libs.ViewerLib.markers import cursor_color, uv_marker_coord


class DecodeSignals(QObject):
    # Emitted from decode worker threads, received on the GUI thread
    decoded = pyqtSignal(str, int, object)
    failed = pyqtSignal(str, int, object)


class RemapEditorWindow(QMainWindow):
    def __init__(self, session: Optional[RemapSession] = None) -> None:
        super().__init__()
        self.setWindowTitle("UV Remap")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = session if session is not None else RemapSession()
        self._executor = ThreadPoolExecutor(max_workers=DECODE_WORKERS)
        self._decode_signals = DecodeSignals()

        self._build_ui()
        self._connect_signals()
        self.session.add_listener(self.refresh_views)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)
        toolbar = QHBoxLayout()
        info_col = QVBoxLayout()

        self.btn_upload_map = QPushButton("Upload Map PNG")
        self.btn_upload_texture = QPushButton("Upload Texture PNG")
        self.btn_download_map = QPushButton("Download Map")

        self.label_map_info = QLabel("")
        self.label_texture_info = QLabel("")
        self.label_map_info.setStyleSheet("font-family: monospace;")
        self.label_texture_info.setStyleSheet("font-family: monospace;")

        session = self.session
        self.map_canvas = RasterCanvas(session.map_viewer)
        self.texture_canvas = RasterCanvas(session.texture_viewer)
        self.result_canvas = RasterCanvas(
            session.result_viewer,
            pan_buttons=(Qt.LeftButton, Qt.MiddleButton, Qt.RightButton),
            show_hover_cursor=False,
        )

        self.map_canvas.set_marker_sources(
            cursor_color=lambda: cursor_color(
                companion_armed=session.armed_selection is not None,
                own_armed=session.map_viewer.picker.armed,
            ),
        )
        self.texture_canvas.set_marker_sources(
            cursor_color=lambda: cursor_color(
                companion_armed=False,
                own_armed=session.texture_viewer.picker.armed,
            ),
            uv_marker=lambda: uv_marker_coord(session.map_viewer.current_sample),
        )
        self.result_canvas.set_marker_sources(
            uv_marker=lambda: (
                session.map_viewer.current_sample.coord
                if session.map_viewer.current_sample is not None
                else None
            ),
        )

        splitter = QSplitter(Qt.Horizontal)
        for canvas in (self.map_canvas, self.texture_canvas, self.result_canvas):
            canvas.setMinimumWidth(MIN_PANEL_WIDTH)
            splitter.addWidget(canvas)
        splitter.setSizes([1, 1, 1])

        toolbar.addWidget(self.btn_upload_map)
        toolbar.addWidget(self.btn_upload_texture)
        toolbar.addWidget(self.btn_download_map)
        toolbar.addStretch(1)
        info_col.addWidget(self.label_map_info)
        info_col.addWidget(self.label_texture_info)
        toolbar.addLayout(info_col)

        root.addLayout(toolbar)
        root.addWidget(splitter, stretch=1)

    def _connect_signals(self) -> None:
        self.btn_upload_map.clicked.connect(lambda: self.upload_image(SLOT_MAP, "Upload Map PNG"))
        self.btn_upload_texture.clicked.connect(lambda: self.upload_image(SLOT_TEXTURE, "Upload Texture PNG"))
        self.btn_download_map.clicked.connect(self.download_map)

        self._decode_signals.decoded.connect(self._on_decoded)
        self._decode_signals.failed.connect(self._on_decode_failed)

        session = self.session
        self.map_canvas.set_hover_handlers(session.hover_map, session.map_viewer.leave)
        self.map_canvas.set_click_handler(session.click_map)
        self.texture_canvas.set_hover_handlers(session.hover_texture, session.texture_viewer.leave)
        self.texture_canvas.set_click_handler(session.click_texture)
        self.result_canvas.set_hover_handlers(session.hover_result, session.result_viewer.leave)

    def upload_image(self, slot_name: str, title: str) -> None:
        path_str, _ = QFileDialog.getOpenFileName(self, title, "", PNG_FILE_FILTER)
        if not path_str:
            return

        image_path = Path(path_str)
        try:
            request_id = self.session.begin_load(slot_name, image_path.name)
        except InputRejected as e:
            QMessageBox.warning(self, "Invalid File", str(e))
            return

        try:
            data = image_path.read_bytes()
        except OSError as e:
            self.session.fail_load(slot_name, request_id, e)
            QMessageBox.warning(self, "Load Failed", f"Could not read {image_path.name}: {e}")
            return

        future = self._executor.submit(decode_image, data)
        future.add_done_callback(lambda done: self._forward_decode(slot_name, request_id, done))

    def _forward_decode(self, slot_name: str, request_id: int, future: Future) -> None:
        error = future.exception()
        if error is not None:
            self._decode_signals.failed.emit(slot_name, request_id, error)
        else:
            self._decode_signals.decoded.emit(slot_name, request_id, future.result())

    def _on_decoded(self, slot_name: str, request_id: int, raster) -> None:
        self.session.deliver_load(slot_name, request_id, raster)

    def _on_decode_failed(self, slot_name: str, request_id: int, error) -> None:
        self.session.fail_load(slot_name, request_id, error)
        if not self.session.slot(slot_name).is_current(request_id):
            return
        if isinstance(error, DecodeFailed):
            QMessageBox.warning(self, "Decode Failed", str(error))
        else:
            QMessageBox.critical(self, "Load Failed", f"Unexpected error: {error}")

    def download_map(self) -> None:
        if not self.session.map_slot.loaded:
            self._show_info("Nothing to Export", "Upload a map PNG first.")
            return

        directory = QFileDialog.getExistingDirectory(self, "Select Output Directory")
        if not directory:
            return

        try:
            saved_path = self.session.export_map(Path(directory))
        except (OSError, EncodeError) as e:
            QMessageBox.critical(self, "Export Failed", str(e))
            return

        self._show_info("Export Complete", f"Saved {saved_path}")

    def refresh_views(self) -> None:
        map_info, texture_info = self.session.hover_info()
        self.label_map_info.setText(map_info or "")
        self.label_texture_info.setText(texture_info or "")

        self.map_canvas.update()
        self.texture_canvas.update()
        self.result_canvas.update()

    def closeEvent(self, event) -> None:
        self._executor.shutdown(wait=False)
        super().closeEvent(event)

    def _show_info(self, title: str, message: str) -> None:
        QMessageBox.information(self, title, message)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = RemapEditorWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
