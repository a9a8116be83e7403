"""
Insertion - default slot for an item added at the play cursor.
"""
from typing import Optional, Sequence

from core.gaps import sort_items
from models.timeline import MediaType, TimelineItem
from runtime_config import RuntimeConfig, get_config


def find_closest_item(track_items: Sequence[TimelineItem], time: float) -> Optional[TimelineItem]:
    """Return the item whose start or end is nearest to *time*.

    The first item in list order wins on ties. None for an empty track.
    """
    if not track_items:
        return None

    closest_item = track_items[0]
    min_distance = abs(closest_item.start_time - time)

    for item in track_items:
        distance = min(abs(item.start_time - time), abs(item.end_time - time))
        if distance < min_distance:
            min_distance = distance
            closest_item = item

    return closest_item


def _after_last_item(track_items: Sequence[TimelineItem]) -> float:
    return sort_items(track_items)[-1].end_time


def calculate_new_item_start_time(playhead_time: float,
                                  track_items: Sequence[TimelineItem],
                                  snap_proximity_ms: float) -> float:
    """Pick a start time for an item inserted at the play cursor.

    If the cursor is near an item's end the new item attaches after it;
    near its start, the new item goes right after the preceding item.
    A cursor inside an item sends the new item to the end of the track.

    The result is not checked against the timeline bound or for overlap
    with the final slot; run it through validate_item_position first.
    """
    closest_item = find_closest_item(track_items, playhead_time)
    if closest_item is None:
        return playhead_time

    distance_to_start = abs(closest_item.start_time - playhead_time)
    distance_to_end = abs(closest_item.end_time - playhead_time)

    if distance_to_end <= snap_proximity_ms:
        return closest_item.end_time

    if distance_to_start <= snap_proximity_ms:
        items_before = sort_items(i for i in track_items if i.end_time <= closest_item.start_time)
        if items_before:
            return items_before[-1].end_time
        if closest_item.start_time == 0:
            # No room before an item at position 0
            return _after_last_item(track_items)
        return 0.0

    if any(i.start_time <= playhead_time < i.end_time for i in track_items):
        return _after_last_item(track_items)

    return playhead_time


def create_placeholder_item(item_type: str, track_uuid: str, start_time: float,
                            config: Optional[RuntimeConfig] = None) -> TimelineItem:
    """Build a placeholder with the configured default size for its type."""
    config = config or get_config()
    media_type = MediaType(item_type)
    return TimelineItem(
        item_type=media_type.value,
        start_time=start_time,
        duration=config.default_duration(media_type.value),
        track_uuid=track_uuid,
        max_duration=config.default_max_duration(media_type.value),
        name=f"{media_type.value} placeholder",
        is_placeholder=True,
    )
