"""
Media Library - catalogue of media that can be dropped on the timeline.

The catalogue is static sample data. A library entry becomes a
TimelineItem through to_timeline_item(); video and audio entries cannot
be stretched past the length of their source.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from models.timeline import MediaType, TimelineItem

FILTER_ALL = "all"


@dataclass(frozen=True)
class MediaLibraryItem:
    """One entry of the media library.

    Attributes:
        id: Stable library identifier (not a timeline uuid).
        name: Display name.
        item_type: "video" | "audio" | "image".
        duration: Source length in ms; the default display time for images.
        thumbnail: Optional path to a preview image.
    """
    id: str
    name: str
    item_type: str
    duration: float
    thumbnail: Optional[str] = None

    @property
    def max_duration(self) -> Optional[float]:
        if self.item_type == MediaType.IMAGE.value:
            return None
        return self.duration

    def to_timeline_item(self, track_uuid: str, start_time: float) -> TimelineItem:
        return TimelineItem(
            item_type=self.item_type,
            start_time=start_time,
            duration=self.duration,
            track_uuid=track_uuid,
            media_start_time=0.0,
            max_duration=self.max_duration,
            name=self.name,
            is_placeholder=False,
        )


DEFAULT_MEDIA_ITEMS = (
    MediaLibraryItem("video-1", "Sample Video 1", MediaType.VIDEO.value, 10000),
    MediaLibraryItem("video-2", "Sample Video 2", MediaType.VIDEO.value, 15000),
    MediaLibraryItem("video-3", "Sample Video 3", MediaType.VIDEO.value, 8000),
    MediaLibraryItem("audio-1", "Sample Audio 1", MediaType.AUDIO.value, 20000),
    MediaLibraryItem("audio-2", "Sample Audio 2", MediaType.AUDIO.value, 12000),
    MediaLibraryItem("audio-3", "Sample Audio 3", MediaType.AUDIO.value, 18000),
    MediaLibraryItem("image-1", "Sample Image 1", MediaType.IMAGE.value, 5000),
    MediaLibraryItem("image-2", "Sample Image 2", MediaType.IMAGE.value, 5000),
    MediaLibraryItem("image-3", "Sample Image 3", MediaType.IMAGE.value, 5000),
)


def format_duration(milliseconds: float) -> str:
    """Format ms as m:ss (library listing precision)"""
    seconds = int(milliseconds) // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


class MediaLibrary:
    """Library entries with a media type filter."""

    def __init__(self, items: Optional[Iterable[MediaLibraryItem]] = None):
        self._items = tuple(DEFAULT_MEDIA_ITEMS if items is None else items)
        self.selected_filter = FILTER_ALL

    @property
    def items(self) -> tuple[MediaLibraryItem, ...]:
        return self._items

    def set_filter(self, media_filter: str):
        """Show one media type, or FILTER_ALL.

        Raises:
            ValueError: If *media_filter* is neither FILTER_ALL nor a media type.
        """
        if media_filter != FILTER_ALL:
            media_filter = MediaType(media_filter).value
        self.selected_filter = media_filter

    @property
    def filtered_items(self) -> list[MediaLibraryItem]:
        if self.selected_filter == FILTER_ALL:
            return list(self._items)
        return [item for item in self._items if item.item_type == self.selected_filter]

    def get(self, item_id: str) -> Optional[MediaLibraryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None
