"""
Media Library Dialog - pick a library entry to add to the current track
"""
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QComboBox, QListWidget, QListWidgetItem,
    QPushButton, QLabel
)
from PyQt6.QtCore import Qt, pyqtSignal

from core.media_library import FILTER_ALL, MediaLibrary, MediaLibraryItem, format_duration
from models.timeline import MediaType


class MediaLibraryDialog(QDialog):
    """
    Lists the media library with a type filter.
    Double-clicking an entry or pressing "Add" emits media_selected and closes.
    """

    media_selected = pyqtSignal(object)  # Emits MediaLibraryItem

    def __init__(self, parent=None, library: Optional[MediaLibrary] = None):
        super().__init__(parent)
        self.setWindowTitle("Media Library")
        self.setMinimumSize(360, 420)
        self.setModal(True)

        self.library = library or MediaLibrary()

        self._setup_ui()
        self._populate()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        filter_layout = QHBoxLayout()
        filter_layout.addWidget(QLabel("Show:"))
        self.filter_combo = QComboBox()
        self.filter_combo.addItem("All", FILTER_ALL)
        for media_type in MediaType:
            self.filter_combo.addItem(media_type.value.title(), media_type.value)
        self.filter_combo.setCurrentIndex(self.filter_combo.findData(self.library.selected_filter))
        self.filter_combo.currentIndexChanged.connect(self._on_filter_changed)
        filter_layout.addWidget(self.filter_combo)
        filter_layout.addStretch()
        layout.addLayout(filter_layout)

        self.media_list = QListWidget()
        self.media_list.itemDoubleClicked.connect(self._on_item_activated)
        layout.addWidget(self.media_list)

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        self.btn_add = QPushButton("Add")
        self.btn_add.clicked.connect(self.add_current)
        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.reject)
        button_layout.addWidget(self.btn_add)
        button_layout.addWidget(btn_close)
        layout.addLayout(button_layout)

    def _populate(self):
        self.media_list.clear()
        for media in self.library.filtered_items:
            entry = QListWidgetItem(f"{media.name}  ({media.item_type}, {format_duration(media.duration)})")
            entry.setData(Qt.ItemDataRole.UserRole, media.id)
            self.media_list.addItem(entry)
        if self.media_list.count():
            self.media_list.setCurrentRow(0)

    def _on_filter_changed(self, _index: int):
        self.library.set_filter(self.filter_combo.currentData())
        self._populate()

    def _on_item_activated(self, entry: QListWidgetItem):
        self.media_list.setCurrentItem(entry)
        self.add_current()

    def current_media(self) -> Optional[MediaLibraryItem]:
        entry = self.media_list.currentItem()
        if entry is None:
            return None
        return self.library.get(entry.data(Qt.ItemDataRole.UserRole))

    def add_current(self):
        media = self.current_media()
        if media is None:
            return
        self.media_selected.emit(media)
        self.accept()
