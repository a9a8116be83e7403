"""
Edit session - applies placement results to timeline snapshots.

The engine functions are pure; this class is the thin stateful layer a
view talks to. It keeps the transient state of one pointer gesture
(which item, which edge, where the pointer grabbed the item) and swaps
in a new Timeline snapshot after every call. Everything is in
milliseconds; pixel conversion happens in the view through a
TimeMapper.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from config import MAX_ZOOM, MIN_ZOOM, SKIP_STEP_MS, ZOOM_STEP
from core.insertion import calculate_new_item_start_time, create_placeholder_item
from core.media_library import MediaLibraryItem
from core.placement import Placement, get_valid_drag_position, validate_item_position
from core.resize import ResizeEdge, apply_resize, get_resize_bounds
from core.snapping import find_snap_targets, snap_item_start, snap_time
from models.timeline import Timeline, TimelineItem, Track
from runtime_config import RuntimeConfig, get_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragState:
    item: TimelineItem  # Item as it was when the drag started
    original_track_uuid: str
    offset: float  # Pointer time minus item start at grab time


@dataclass(frozen=True)
class ResizeState:
    item_uuid: str
    edge: ResizeEdge


class EditSession:
    """Drives drag, resize and insert gestures over a Timeline."""

    def __init__(self, timeline: Optional[Timeline] = None,
                 config: Optional[RuntimeConfig] = None):
        self.config = config or get_config()
        if timeline is None:
            timeline = Timeline(total_duration=self.config.total_duration_ms)
        self._timeline = timeline
        self._drag: Optional[DragState] = None
        self._resize: Optional[ResizeState] = None
        self.active_snap_time: Optional[float] = None  # For the view's snap indicator

    # -- Snapshot ----------------------------------------------------------

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    def set_timeline(self, timeline: Timeline):
        """Replace the snapshot and drop any gesture in progress."""
        self._timeline = timeline
        self.end_interaction()

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    @property
    def is_resizing(self) -> bool:
        return self._resize is not None

    @property
    def resize_edge(self) -> Optional[ResizeEdge]:
        return self._resize.edge if self._resize else None

    # -- Tracks and items --------------------------------------------------

    def add_track(self, name: str = "") -> Track:
        order = len(self._timeline.tracks)
        track = Track(name=name or f"Track {order + 1}", order=order)
        self._timeline = self._timeline.with_track(track)
        return track

    def remove_track(self, track_uuid: str) -> bool:
        """Remove a track with its items; the last track always stays."""
        if len(self._timeline.tracks) <= 1:
            logger.debug("Remove ignored: %s is the only track", track_uuid)
            return False
        if self._timeline.get_track(track_uuid) is None:
            return False
        self._timeline = self._timeline.without_track(track_uuid)
        return True

    def remove_item(self, item_uuid: str):
        self._timeline = self._timeline.without_item(item_uuid)

    def select(self, item_uuid: Optional[str]):
        self._timeline = self._timeline.with_selection(item_uuid)

    def _default_start(self, track: Track) -> float:
        return calculate_new_item_start_time(
            self._timeline.playhead_position, list(track.items), self.config.snap_proximity_ms
        )

    def _add_new_item(self, item: TimelineItem, track: Track) -> TimelineItem:
        item = item.moved(validate_item_position(item, track.items))
        self._timeline = self._timeline.with_item(item)
        logger.debug("Inserted %s at %.0f on %s", item.name, item.start_time, track.name)
        return item

    def insert_item(self, item_type: str, track_uuid: str) -> Optional[TimelineItem]:
        """Add a placeholder on *track_uuid* near the play cursor."""
        track = self._timeline.get_track(track_uuid)
        if track is None:
            logger.debug("Insert ignored: unknown track %s", track_uuid)
            return None
        item = create_placeholder_item(item_type, track.uuid, self._default_start(track), self.config)
        return self._add_new_item(item, track)

    def insert_media(self, media: MediaLibraryItem, track_uuid: str) -> Optional[TimelineItem]:
        """Add a library entry on *track_uuid* near the play cursor, keeping
        the entry's own duration."""
        track = self._timeline.get_track(track_uuid)
        if track is None:
            logger.debug("Insert ignored: unknown track %s", track_uuid)
            return None
        item = media.to_timeline_item(track.uuid, self._default_start(track))
        return self._add_new_item(item, track)

    # -- Playhead and zoom -------------------------------------------------

    def set_playhead(self, position: float):
        self._timeline = self._timeline.with_playhead(position)

    def skip_forward(self):
        self.set_playhead(self._timeline.playhead_position + SKIP_STEP_MS)

    def skip_backward(self):
        self.set_playhead(self._timeline.playhead_position - SKIP_STEP_MS)

    def zoom_in(self):
        self._timeline = self._timeline.with_zoom(min(self._timeline.zoom_level + ZOOM_STEP, MAX_ZOOM))

    def zoom_out(self):
        self._timeline = self._timeline.with_zoom(max(self._timeline.zoom_level - ZOOM_STEP, MIN_ZOOM))

    # -- Dragging ----------------------------------------------------------

    def _snap_targets(self, item_uuid: str) -> list[float]:
        if not self.config.snap_enabled:
            return []
        return find_snap_targets(item_uuid, self._timeline.tracks, self._timeline.playhead_position)

    def begin_drag(self, item_uuid: str, pointer_time: float) -> bool:
        """Grab *item_uuid* at *pointer_time*; the grab offset is kept for
        the whole gesture so the item does not jump under the pointer."""
        self.end_interaction()
        item = self._timeline.get_item(item_uuid)
        if item is None:
            return False
        self._drag = DragState(item, item.track_uuid, pointer_time - item.start_time)
        self._timeline = self._timeline.with_selection(item_uuid)
        return True

    def drag_to(self, track_uuid: str, pointer_time: float) -> Optional[Placement]:
        """Move the dragged item so its grab point follows *pointer_time*
        on *track_uuid*."""
        if self._drag is None:
            return None
        track = self._timeline.get_track(track_uuid)
        if track is None:
            return None

        # The duration of the grabbed item is used on every move, so an item
        # shrunk by a narrow gap regains its size once it leaves the gap
        item = self._drag.item
        total_duration = self._timeline.total_duration
        requested_start = max(0.0, min(pointer_time - self._drag.offset, total_duration - item.duration))

        snapped_start = requested_start
        targets = self._snap_targets(item.uuid)
        if targets:
            snapped_start = snap_item_start(requested_start, item.duration, targets,
                                            self.config.snap_distance_ms)

        placement = get_valid_drag_position(
            item,
            snapped_start,
            track.other_items(item.uuid),
            total_duration,
            min_duration=self.config.min_item_duration_ms,
        )
        if placement.duration <= 0:
            logger.debug("Drag of %s ignored: no room before %.0f", item.uuid, total_duration)
            self.active_snap_time = None
            return None

        # Show the guide only when the item really landed on the snapped spot
        self.active_snap_time = None
        if snapped_start != requested_start and placement.start_time == snapped_start:
            if snapped_start in targets:
                self.active_snap_time = snapped_start
            else:
                self.active_snap_time = snapped_start + item.duration

        moved = item.moved(placement.start_time, placement.duration, track.uuid)
        self._timeline = self._timeline.replace_item(moved)
        return placement

    # -- Resizing ----------------------------------------------------------

    def begin_resize(self, item_uuid: str, edge: str) -> bool:
        self.end_interaction()
        if self._timeline.get_item(item_uuid) is None:
            return False
        self._resize = ResizeState(item_uuid, ResizeEdge(edge))
        self._timeline = self._timeline.with_selection(item_uuid)
        return True

    def resize_to(self, pointer_time: float) -> Optional[TimelineItem]:
        """Move the active edge towards *pointer_time*, snapped and bounded."""
        if self._resize is None:
            return None
        track = self._timeline.find_item_track(self._resize.item_uuid)
        if track is None:
            return None
        item = track.get_item(self._resize.item_uuid)

        candidate = snap_time(pointer_time, self._snap_targets(item.uuid), self.config.snap_distance_ms)
        self.active_snap_time = candidate if candidate != pointer_time else None

        bounds = get_resize_bounds(
            item, track.items, self._resize.edge,
            self._timeline.total_duration, self.config.min_item_duration_ms,
        )
        resized = apply_resize(item, self._resize.edge, candidate, bounds)
        self._timeline = self._timeline.replace_item(resized)
        return resized

    # -- Gesture end -------------------------------------------------------

    def end_interaction(self) -> Optional[TimelineItem]:
        """Finish the current gesture and return the item it touched."""
        item_uuid = None
        if self._drag is not None:
            item_uuid = self._drag.item.uuid
        elif self._resize is not None:
            item_uuid = self._resize.item_uuid

        self._drag = None
        self._resize = None
        self.active_snap_time = None

        if item_uuid is None:
            return None
        return self._timeline.get_item(item_uuid)
