"""
Main Window - Timeline editor with a toolbar for tracks, placeholders and zoom
"""
import logging
import sys

from PyQt6.QtWidgets import QApplication, QMainWindow, QToolBar, QLabel, QComboBox
from PyQt6.QtGui import QAction, QKeySequence

from core.edit_session import EditSession
from core.media_library import MediaLibrary, MediaLibraryItem
from models.timeline import MediaType
from ui.media_library_dialog import MediaLibraryDialog
from ui.timeline_widget import TimelineCanvas, format_time

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window hosting a single TimelineCanvas"""

    def __init__(self, session: EditSession = None):
        super().__init__()
        self.setWindowTitle("TrackSlot")
        self.resize(1200, 400)

        self.session = session or EditSession()
        self.media_library = MediaLibrary()
        if not self.session.timeline.tracks:
            self.session.add_track()
            self.session.add_track()

        self.canvas = TimelineCanvas(self.session)
        self.setCentralWidget(self.canvas)

        self._setup_toolbar()

        self.canvas.playhead_moved.connect(self._on_playhead_moved)
        self.canvas.item_selected.connect(self._on_item_selected)
        self.canvas.timeline_changed.connect(self._refresh_track_choices)
        self._refresh_track_choices()
        self._on_playhead_moved(self.session.timeline.playhead_position)

    def _setup_toolbar(self):
        toolbar = QToolBar("Timeline")
        self.addToolBar(toolbar)

        add_track = QAction("Add Track", self)
        add_track.triggered.connect(self.add_track)
        toolbar.addAction(add_track)

        remove_track = QAction("Remove Track", self)
        remove_track.triggered.connect(self.remove_current_track)
        toolbar.addAction(remove_track)

        self.track_combo = QComboBox()
        toolbar.addWidget(self.track_combo)

        for media_type in MediaType:
            action = QAction(f"+ {media_type.value.title()}", self)
            action.triggered.connect(lambda _checked=False, t=media_type.value: self.insert_item(t))
            toolbar.addAction(action)

        library = QAction("Media Library...", self)
        library.triggered.connect(self.open_media_library)
        toolbar.addAction(library)

        toolbar.addSeparator()

        remove = QAction("Remove Item", self)
        remove.setShortcut(QKeySequence.StandardKey.Delete)
        remove.triggered.connect(self.remove_selected_item)
        toolbar.addAction(remove)

        toolbar.addSeparator()

        for label, handler in (("Zoom In", self.session.zoom_in), ("Zoom Out", self.session.zoom_out),
                               ("<< 5s", self.session.skip_backward), ("5s >>", self.session.skip_forward)):
            action = QAction(label, self)
            action.triggered.connect(lambda _checked=False, h=handler: self._run_and_refresh(h))
            toolbar.addAction(action)

        self.time_label = QLabel()
        toolbar.addWidget(self.time_label)

    def _run_and_refresh(self, handler):
        handler()
        self._on_playhead_moved(self.session.timeline.playhead_position)
        self.canvas.refresh()

    def _refresh_track_choices(self):
        current = self.track_combo.currentData()
        self.track_combo.blockSignals(True)
        self.track_combo.clear()
        for track in self.session.timeline.tracks:
            self.track_combo.addItem(track.name, track.uuid)
        index = self.track_combo.findData(current)
        self.track_combo.setCurrentIndex(index if index >= 0 else 0)
        self.track_combo.blockSignals(False)

    def add_track(self):
        track = self.session.add_track()
        logger.info("Added %s", track.name)
        self.canvas.refresh()

    def remove_current_track(self):
        track_uuid = self.track_combo.currentData()
        if track_uuid is None:
            return
        if not self.session.remove_track(track_uuid):
            self.statusBar().showMessage("The last track cannot be removed", 3000)
            return
        self.canvas.refresh()

    def insert_item(self, item_type: str):
        track_uuid = self.track_combo.currentData()
        if track_uuid is None:
            return
        item = self.session.insert_item(item_type, track_uuid)
        if item is not None:
            self.statusBar().showMessage(f"Inserted {item.name} at {format_time(item.start_time)}", 3000)
        self.canvas.refresh()

    def open_media_library(self):
        dialog = MediaLibraryDialog(self, self.media_library)
        dialog.media_selected.connect(self.insert_media)
        dialog.exec()

    def insert_media(self, media: MediaLibraryItem):
        track_uuid = self.track_combo.currentData()
        if track_uuid is None:
            return
        item = self.session.insert_media(media, track_uuid)
        if item is not None:
            logger.info("Added %s at %s", media.name, format_time(item.start_time))
            self.statusBar().showMessage(f"Inserted {item.name} at {format_time(item.start_time)}", 3000)
        self.canvas.refresh()

    def remove_selected_item(self):
        selected = self.session.timeline.selected_item_uuid
        if selected is None:
            return
        self.session.remove_item(selected)
        self.canvas.refresh()

    def _on_playhead_moved(self, position: float):
        self.time_label.setText(f"  {format_time(position)} / {format_time(self.session.timeline.total_duration)}")

    def _on_item_selected(self, item_uuid: str):
        track = self.session.timeline.find_item_track(item_uuid)
        if track is not None:
            index = self.track_combo.findData(track.uuid)
            if index >= 0:
                self.track_combo.setCurrentIndex(index)


def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
