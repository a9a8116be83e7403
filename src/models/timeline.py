"""
Timeline - Tracks and timeline items for the placement engine.

Every value in this module is immutable. Editing a timeline means
building a new snapshot with one of the ``with_*`` / ``without_*``
helpers and swapping it in, so the engine always reads a consistent
state and never has to defend against concurrent mutation.

All times are in milliseconds.
"""
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from config import DEFAULT_TOTAL_DURATION_MS, DEFAULT_ZOOM


class MediaType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"


# ---------------------------------------------------------------------------
# Timeline Items
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimelineItem:
    """A placeholder or media reference placed on a track.

    Attributes:
        uuid: Unique identifier for this item.
        item_type: "video" | "audio" | "image".
        start_time: When this item begins on the timeline (ms).
        duration: How long this item occupies on the timeline (ms).
        track_uuid: UUID of the owning Track.
        media_start_time: Offset into the source asset (ms). Carried along
            for the renderer; placement never reads it.
        max_duration: Upper clamp applied when resizing, if set.
    """
    uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    item_type: str = MediaType.VIDEO.value
    start_time: float = 0.0
    duration: float = 0.0
    track_uuid: str = ""
    media_start_time: Optional[float] = None
    max_duration: Optional[float] = None
    name: str = ""
    is_placeholder: bool = False

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def moved(self, start_time: float, duration: Optional[float] = None,
              track_uuid: Optional[str] = None) -> "TimelineItem":
        """Return a copy at a new position (and optionally size/track)."""
        return replace(
            self,
            start_time=start_time,
            duration=self.duration if duration is None else duration,
            track_uuid=self.track_uuid if track_uuid is None else track_uuid,
        )


# ---------------------------------------------------------------------------
# Track
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Track:
    """A lane of non-overlapping items.

    Items are kept in insertion order; the engine sorts whatever it
    needs on its own.
    """
    uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    order: int = 0
    items: tuple[TimelineItem, ...] = ()

    def get_item(self, item_uuid: str) -> Optional[TimelineItem]:
        for item in self.items:
            if item.uuid == item_uuid:
                return item
        return None

    def other_items(self, item_uuid: str) -> list[TimelineItem]:
        """All items on this track except *item_uuid*."""
        return [item for item in self.items if item.uuid != item_uuid]

    def with_item(self, item: TimelineItem) -> "Track":
        """Append *item*, taking ownership of it."""
        return replace(self, items=self.items + (replace(item, track_uuid=self.uuid),))

    def without_item(self, item_uuid: str) -> "Track":
        return replace(self, items=tuple(self.other_items(item_uuid)))

    def replace_item(self, item: TimelineItem) -> "Track":
        """Swap the item with the same uuid, keeping its slot in the list."""
        return replace(
            self,
            items=tuple(replace(item, track_uuid=self.uuid) if i.uuid == item.uuid else i
                        for i in self.items),
        )


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Timeline:
    """Top-level snapshot: tracks plus the shared play cursor and bounds.

    Attributes:
        playhead_position: Play cursor (ms).
        zoom_level: Pixels per second used by the view.
        total_duration: Upper bound every item must respect (ms).
    """
    tracks: tuple[Track, ...] = ()
    playhead_position: float = 0.0
    zoom_level: float = DEFAULT_ZOOM
    total_duration: float = DEFAULT_TOTAL_DURATION_MS
    selected_item_uuid: Optional[str] = None

    # -- Lookups -----------------------------------------------------------

    def get_track(self, track_uuid: str) -> Optional[Track]:
        for t in self.tracks:
            if t.uuid == track_uuid:
                return t
        return None

    def get_item(self, item_uuid: str) -> Optional[TimelineItem]:
        for track in self.tracks:
            item = track.get_item(item_uuid)
            if item is not None:
                return item
        return None

    def find_item_track(self, item_uuid: str) -> Optional[Track]:
        """Return the track currently owning *item_uuid*."""
        for track in self.tracks:
            if track.get_item(item_uuid) is not None:
                return track
        return None

    def all_items(self) -> list[TimelineItem]:
        """Flatten all items across all tracks."""
        result: list[TimelineItem] = []
        for track in self.tracks:
            result.extend(track.items)
        return result

    # -- Copy-on-write helpers ---------------------------------------------

    def with_track(self, track: Track) -> "Timeline":
        """Add *track*, or replace the track with the same uuid."""
        if self.get_track(track.uuid) is None:
            return replace(self, tracks=self.tracks + (track,))
        return replace(self, tracks=tuple(track if t.uuid == track.uuid else t for t in self.tracks))

    def without_track(self, track_uuid: str) -> "Timeline":
        tracks = tuple(t for t in self.tracks if t.uuid != track_uuid)
        selected = self.selected_item_uuid
        if selected is not None and all(t.get_item(selected) is None for t in tracks):
            selected = None
        return replace(self, tracks=tracks, selected_item_uuid=selected)

    def with_item(self, item: TimelineItem) -> "Timeline":
        """Add *item* to the track named by its ``track_uuid``."""
        track = self.get_track(item.track_uuid)
        if track is None:
            return self
        return self.with_track(track.with_item(item))

    def without_item(self, item_uuid: str) -> "Timeline":
        track = self.find_item_track(item_uuid)
        if track is None:
            return self
        selected = None if self.selected_item_uuid == item_uuid else self.selected_item_uuid
        return replace(self.with_track(track.without_item(item_uuid)), selected_item_uuid=selected)

    def replace_item(self, item: TimelineItem) -> "Timeline":
        """Store a new version of *item*, moving it across tracks if its
        ``track_uuid`` changed."""
        current = self.find_item_track(item.uuid)
        if current is None:
            return self.with_item(item)
        if current.uuid == item.track_uuid:
            return self.with_track(current.replace_item(item))
        return self.without_item(item.uuid).with_item(item).with_selection(self.selected_item_uuid)

    def with_playhead(self, position: float) -> "Timeline":
        """Move the play cursor, clamped to [0, total_duration]."""
        return replace(self, playhead_position=max(0.0, min(position, self.total_duration)))

    def with_zoom(self, zoom_level: float) -> "Timeline":
        return replace(self, zoom_level=zoom_level)

    def with_selection(self, item_uuid: Optional[str]) -> "Timeline":
        return replace(self, selected_item_uuid=item_uuid)

    @property
    def content_end(self) -> float:
        """End of the last item on any track."""
        ends = [item.end_time for item in self.all_items()]
        return max(ends) if ends else 0.0
