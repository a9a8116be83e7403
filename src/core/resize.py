"""
Edge resizing - legal range for dragging one edge of an item.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from config import MIN_ITEM_DURATION_MS
from core.gaps import sort_items
from models.timeline import TimelineItem


class ResizeEdge(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ResizeBounds:
    min_time: float
    max_time: float

    def clamp(self, time: float) -> float:
        return max(self.min_time, min(time, self.max_time))


def get_resize_bounds(item: TimelineItem,
                      track_items: Iterable[TimelineItem],
                      edge: str,
                      total_duration: float,
                      min_duration: float = MIN_ITEM_DURATION_MS) -> ResizeBounds:
    """Get the range the dragged edge of *item* may move in.

    Left edge: from the end of the nearest item fully to the left (or 0)
    up to ``min_duration`` before the item's end.
    Right edge: from ``min_duration`` after the item's start up to the
    start of the nearest item fully to the right, never past
    *total_duration*.
    """
    other_items = sort_items(i for i in track_items if i.uuid != item.uuid)

    if ResizeEdge(edge) is ResizeEdge.LEFT:
        left_items = [i for i in other_items if i.end_time <= item.start_time]
        min_time = left_items[-1].end_time if left_items else 0.0
        return ResizeBounds(min_time, item.end_time - min_duration)

    right_item = next((i for i in other_items if i.start_time >= item.end_time), None)
    max_time = min(right_item.start_time, total_duration) if right_item else total_duration
    return ResizeBounds(item.start_time + min_duration, max_time)


def apply_resize(item: TimelineItem, edge: str, cursor_time: float,
                 bounds: ResizeBounds) -> TimelineItem:
    """Move one edge of *item* to *cursor_time* within *bounds*.

    The opposite edge stays fixed. ``max_duration`` caps the result; on
    a left-edge resize the start is pulled back so the right edge does
    not move.
    """
    if ResizeEdge(edge) is ResizeEdge.LEFT:
        new_start = bounds.clamp(cursor_time)
        new_duration = item.end_time - new_start
        if item.max_duration:
            new_duration = min(new_duration, item.max_duration)
        return item.moved(item.end_time - new_duration, new_duration)

    new_end = bounds.clamp(cursor_time)
    new_duration = new_end - item.start_time
    if item.max_duration:
        new_duration = min(new_duration, item.max_duration)
    return item.moved(item.start_time, new_duration)
