"""
Timeline Widget - Visual timeline editor with tracks, items and playhead
"""
from typing import Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, pyqtSignal
from PyQt6.QtGui import (
    QPainter, QColor, QPen, QBrush, QFont,
    QMouseEvent, QWheelEvent, QPaintEvent, QCursor
)

from config import (
    EDGE_THRESHOLD_PX, MARKER_INTERVALS_MS, MIN_MARKER_SPACING_PX,
    RULER_HEIGHT, TRACK_HEADER_WIDTH, TRACK_HEIGHT, TRACK_PADDING,
)
from core.coordinates import LinearTimeMapper
from core.edit_session import EditSession
from models.timeline import Timeline, TimelineItem, Track


def format_time(milliseconds: float) -> str:
    """Format ms as m:ss.mmm"""
    milliseconds = int(milliseconds)
    seconds = milliseconds // 1000
    minutes = seconds // 60
    return f"{minutes}:{seconds % 60:02d}.{milliseconds % 1000:03d}"


def marker_interval(pixels_per_ms: float) -> int:
    """Smallest ruler step (ms) whose markers are at least
    MIN_MARKER_SPACING_PX apart."""
    min_time_spacing = MIN_MARKER_SPACING_PX / pixels_per_ms
    for interval in MARKER_INTERVALS_MS:
        if interval >= min_time_spacing:
            return interval
    # Coarser than a minute: round up to whole minutes
    return int(-(-min_time_spacing // 60000) * 60000)


class TimelineCanvas(QWidget):
    """Canvas widget for drawing the tracks and driving an EditSession"""

    item_selected = pyqtSignal(str)  # Emits item uuid
    item_moved = pyqtSignal(str, float)  # Emits item uuid and new start time
    item_resized = pyqtSignal(str)  # Emits item uuid when an edge drag ends
    playhead_moved = pyqtSignal(float)  # Emits time in ms
    timeline_changed = pyqtSignal()

    def __init__(self, session: Optional[EditSession] = None):
        super().__init__()
        self.setMinimumHeight(150)
        self.setMouseTracking(True)

        self.session = session or EditSession()
        self.scroll_offset = 0.0
        self.dragging_playhead = False
        self._drag_origin_start: Optional[float] = None

        # Colors
        self.type_colors = {
            "video": QColor("#2196F3"),
            "audio": QColor("#4CAF50"),
            "image": QColor("#FF9800"),
        }
        self.bg_color = QColor("#1E1E1E")
        self.header_color = QColor("#252525")
        self.grid_color = QColor("#333333")
        self.text_color = QColor("#CCCCCC")
        self.playhead_color = QColor("#FF4444")
        self.selection_color = QColor("#FFFFFF")

    # -- State -------------------------------------------------------------

    @property
    def timeline(self) -> Timeline:
        return self.session.timeline

    @property
    def mapper(self) -> LinearTimeMapper:
        return LinearTimeMapper(self.timeline.zoom_level, self.scroll_offset, TRACK_HEADER_WIDTH)

    def set_timeline(self, timeline: Timeline):
        self.session.set_timeline(timeline)
        self.update()

    def refresh(self):
        self.timeline_changed.emit()
        self.update()

    # -- Geometry ----------------------------------------------------------

    def time_to_x(self, time: float) -> float:
        """Convert time (ms) to x position"""
        return self.mapper.time_to_x(time)

    def x_to_time(self, x: float) -> float:
        """Convert x position to time (ms)"""
        return self.mapper.x_to_time(x)

    def get_track_y(self, index: int) -> int:
        """Get y position for a track"""
        return RULER_HEIGHT + index * (TRACK_HEIGHT + TRACK_PADDING)

    def get_track_at(self, y: float) -> Optional[Track]:
        for index, track in enumerate(self.timeline.tracks):
            track_y = self.get_track_y(index)
            if track_y <= y <= track_y + TRACK_HEIGHT:
                return track
        return None

    def item_rect(self, index: int, item: TimelineItem) -> QRectF:
        return QRectF(
            self.time_to_x(item.start_time),
            self.get_track_y(index),
            self.mapper.duration_to_width(item.duration),
            TRACK_HEIGHT,
        )

    def get_item_at(self, x: float, y: float) -> Optional[TimelineItem]:
        """Get the item at a given position"""
        if x < TRACK_HEADER_WIDTH:
            return None
        for index, track in enumerate(self.timeline.tracks):
            for item in track.items:
                rect = self.item_rect(index, item)
                if rect.left() <= x <= rect.right() and rect.top() <= y <= rect.bottom():
                    return item
        return None

    def get_item_edge_at(self, x: float, y: float) -> tuple[Optional[TimelineItem], str]:
        """Check if mouse is near an item edge

        Returns:
            Tuple of (item, edge) where edge is "left", "right", or ""
        """
        # Items scrolled under the header column cannot be grabbed
        if x < TRACK_HEADER_WIDTH:
            return None, ""
        for index, track in enumerate(self.timeline.tracks):
            for item in track.items:
                rect = self.item_rect(index, item)
                if not (rect.top() <= y <= rect.bottom()):
                    break
                if abs(x - rect.left()) <= EDGE_THRESHOLD_PX:
                    return item, "left"
                if abs(x - rect.right()) <= EDGE_THRESHOLD_PX:
                    return item, "right"
        return None, ""

    # -- Painting ----------------------------------------------------------

    def paintEvent(self, event: QPaintEvent):
        """Paint the timeline"""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), self.bg_color)
        self._draw_ruler(painter)

        for index, track in enumerate(self.timeline.tracks):
            self._draw_track(painter, index, track)

        self._draw_playhead(painter)

        # Draw snap indicator
        if self.session.active_snap_time is not None:
            snap_x = int(self.time_to_x(self.session.active_snap_time))
            if TRACK_HEADER_WIDTH <= snap_x <= self.width():
                painter.setPen(QPen(QColor(255, 255, 255, 100), 1, Qt.PenStyle.DashLine))
                painter.drawLine(snap_x, 0, snap_x, self.height())

        painter.end()

    def _draw_ruler(self, painter: QPainter):
        """Draw time markers along the top"""
        painter.fillRect(0, 0, self.width(), RULER_HEIGHT, QColor("#2D2D2D"))
        painter.setFont(QFont("Arial", 8))

        step = marker_interval(self.mapper.pixels_per_ms)
        time = 0
        while time <= self.timeline.total_duration:
            x = self.time_to_x(time)
            if x > self.width():
                break
            if x >= TRACK_HEADER_WIDTH:
                painter.setPen(QPen(self.grid_color))
                painter.drawLine(int(x), RULER_HEIGHT, int(x), self.height())
                painter.setPen(QPen(self.text_color))
                painter.drawText(int(x) + 3, 15, format_time(time))
            time += step

    def _draw_track(self, painter: QPainter, index: int, track: Track):
        y = self.get_track_y(index)
        painter.fillRect(0, y, TRACK_HEADER_WIDTH, TRACK_HEIGHT, self.header_color)
        painter.setPen(QPen(self.text_color))
        painter.drawText(8, y + TRACK_HEIGHT // 2 + 4, track.name)

        # Items must not paint over the header column
        painter.save()
        painter.setClipRect(TRACK_HEADER_WIDTH, y, self.width() - TRACK_HEADER_WIDTH, TRACK_HEIGHT)
        for item in track.items:
            self._draw_item(painter, index, item)
        painter.restore()

    def _draw_item(self, painter: QPainter, index: int, item: TimelineItem):
        rect = self.item_rect(index, item)
        color = self.type_colors.get(item.item_type, QColor("#9C27B0"))
        painter.setBrush(QBrush(color))
        if item.uuid == self.timeline.selected_item_uuid:
            painter.setPen(QPen(self.selection_color, 2))
        else:
            painter.setPen(QPen(color.darker(150), 1))
        painter.drawRoundedRect(rect, 4, 4)

        painter.setPen(QPen(QColor("#FFFFFF")))
        painter.drawText(rect.adjusted(6, 0, -6, 0),
                         Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                         item.name or item.item_type)

    def _draw_playhead(self, painter: QPainter):
        """Draw the playhead (current time indicator)"""
        x = self.time_to_x(self.timeline.playhead_position)
        if x < TRACK_HEADER_WIDTH:
            return
        painter.setPen(QPen(self.playhead_color, 2))
        painter.drawLine(int(x), 0, int(x), self.height())

    # -- Mouse -------------------------------------------------------------

    def _move_playhead(self, x: float):
        self.session.set_playhead(self.x_to_time(x))
        self.playhead_moved.emit(self.timeline.playhead_position)
        self.update()

    def mousePressEvent(self, event: QMouseEvent):
        """Handle mouse press"""
        if event.button() != Qt.MouseButton.LeftButton:
            return
        x = event.position().x()
        y = event.position().y()

        # Ruler click moves the playhead
        if y < RULER_HEIGHT:
            self.dragging_playhead = True
            self._move_playhead(x)
            return

        # Check for edge resize first
        edge_item, edge = self.get_item_edge_at(x, y)
        if edge_item and edge:
            self.session.begin_resize(edge_item.uuid, edge)
            self.item_selected.emit(edge_item.uuid)
            self.update()
            return

        item = self.get_item_at(x, y)
        if item:
            self.session.begin_drag(item.uuid, self.x_to_time(x))
            self._drag_origin_start = item.start_time
            self.item_selected.emit(item.uuid)
        else:
            # Click on empty area - clear selection and move playhead
            self.session.select(None)
            self.dragging_playhead = True
            self._move_playhead(x)
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        """Handle mouse move"""
        x = event.position().x()
        y = event.position().y()

        if self.dragging_playhead:
            self._move_playhead(x)
            return

        if self.session.is_resizing:
            self.session.resize_to(self.x_to_time(x))
            self.refresh()
            return

        if self.session.is_dragging:
            track = self.get_track_at(y)
            if track is not None:
                self.session.drag_to(track.uuid, self.x_to_time(x))
                self.refresh()
            return

        # Update cursor based on edge proximity
        edge_item, edge = self.get_item_edge_at(x, y)
        if edge_item and edge:
            self.setCursor(QCursor(Qt.CursorShape.SizeHorCursor))
        else:
            self.setCursor(QCursor(Qt.CursorShape.ArrowCursor))

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Handle mouse release"""
        if self.dragging_playhead:
            self.dragging_playhead = False
            return

        was_resizing = self.session.is_resizing
        item = self.session.end_interaction()
        if item is not None:
            if was_resizing:
                self.item_resized.emit(item.uuid)
            elif self._drag_origin_start is not None and item.start_time != self._drag_origin_start:
                self.item_moved.emit(item.uuid, item.start_time)
        self._drag_origin_start = None
        self.update()

    def wheelEvent(self, event: QWheelEvent):
        """Ctrl+wheel zooms, plain wheel scrolls"""
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            if event.angleDelta().y() > 0:
                self.session.zoom_in()
            else:
                self.session.zoom_out()
        else:
            self.scroll_offset -= event.angleDelta().x() + event.angleDelta().y()
            self.scroll_offset = max(0.0, self.scroll_offset)
        self.update()
