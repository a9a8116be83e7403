"""
Placement - resolve where a dragged item actually lands.

get_valid_drag_position() is called once per pointer move. It is a pure
geometric function: the same arguments always give the same result, and
moving the pointer inside a gap never makes the item jump past distant,
unrelated gaps.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from config import MIN_ITEM_DURATION_MS, SNAP_DISTANCE_MS
from core.gaps import (
    find_all_gaps,
    find_closest_gap,
    find_gap_for_position,
    items_overlap,
    sort_items,
)
from core.snapping import snap_item_start
from models.timeline import TimelineItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Resolved position of an item.

    forced_overlap is set when the target gap was narrower than the
    minimum duration and the item still got the minimum, so it pokes
    into the next item.
    """
    start_time: float
    duration: float
    forced_overlap: bool = False

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


def get_valid_drag_position(item: TimelineItem,
                            requested_start: float,
                            track_items: Iterable[TimelineItem],
                            total_duration: float,
                            snap_targets: Optional[Sequence[float]] = None,
                            snap_distance: float = SNAP_DISTANCE_MS,
                            min_duration: float = MIN_ITEM_DURATION_MS) -> Placement:
    """Calculate a non-overlapping position for *item* near *requested_start*.

    Args:
        item: The item being placed; only its uuid and duration are read.
        requested_start: Desired start (ms), may be negative.
        track_items: Items on the destination track. The item itself is
            ignored if present.
        total_duration: Timeline bound; the result never ends past it.
        snap_targets: Optional guide positions applied before placement.
        snap_distance: Snapping proximity (ms).
        min_duration: Floor used when shrinking into a narrow gap.

    Returns:
        Placement with the final start time and duration.
    """
    adjusted_start = requested_start
    if snap_targets:
        adjusted_start = snap_item_start(requested_start, item.duration, snap_targets, snap_distance)
    # Nothing starts before 0
    adjusted_start = max(0.0, adjusted_start)

    other_items = [i for i in track_items if i.uuid != item.uuid]

    # Empty track - place at requested position with original duration
    if not other_items:
        return Placement(adjusted_start, min(item.duration, total_duration - adjusted_start))

    gap = find_gap_for_position(adjusted_start, other_items)
    if gap is None:
        # Position lands on an existing item: use the closest gap instead
        # of jumping to the end of the track
        gap = find_closest_gap(adjusted_start, find_all_gaps(other_items))

    # After the last item: never start before the gap, or the item would
    # slide back over the previous occupant
    if gap.is_unbounded:
        start_time = max(gap.gap_start, adjusted_start)
        return Placement(start_time, min(item.duration, total_duration - start_time))

    gap_size = gap.width

    # Fits completely: keep the request, clamped inside the gap
    if item.duration <= gap_size:
        max_start = gap.gap_end - item.duration
        start_time = max(gap.gap_start, min(adjusted_start, max_start))
        return Placement(start_time, min(item.duration, total_duration - start_time))

    # Doesn't fit: shrink into the gap, respecting the minimum duration
    fitted = min(gap_size, total_duration - gap.gap_start)
    duration = max(min_duration, fitted)
    forced_overlap = duration > gap_size
    if forced_overlap:
        logger.debug(
            "Gap %.0f-%.0f is narrower than the minimum duration; item %s overlaps its neighbor",
            gap.gap_start, gap.gap_end, item.uuid,
        )
    return Placement(gap.gap_start, duration, forced_overlap)


def validate_item_position(item: TimelineItem, track_items: Sequence[TimelineItem]) -> float:
    """Return a start time for *item* that does not collide on the track.

    The item keeps its own start if it overlaps nothing; otherwise it is
    pushed after the last item of the track.
    """
    others = [i for i in track_items if i.uuid != item.uuid]
    if any(items_overlap(item, existing) for existing in others):
        last_item = sort_items(others)[-1]
        logger.debug("Item %s collides at %.0f, moving after %s",
                     item.uuid, item.start_time, last_item.uuid)
        return last_item.end_time
    return item.start_time
