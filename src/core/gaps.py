"""
Gap discovery on a single track.

A gap is a maximal free interval ``[gap_start, gap_end)`` between (or
beyond) the items of a track. The interval after the last item is
unbounded and is represented with ``gap_end == math.inf``.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from models.timeline import TimelineItem


@dataclass(frozen=True)
class Gap:
    gap_start: float
    gap_end: float
    left_item: Optional[TimelineItem] = None
    right_item: Optional[TimelineItem] = None

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.gap_end)

    @property
    def width(self) -> float:
        return self.gap_end - self.gap_start

    def contains(self, time: float) -> bool:
        return self.gap_start <= time < self.gap_end


def items_overlap(item1: TimelineItem, item2: TimelineItem) -> bool:
    """Check whether two half-open item intervals intersect.

    Touching endpoints (``item1.end_time == item2.start_time``) do not count.
    """
    return not (item1.end_time <= item2.start_time or item2.end_time <= item1.start_time)


def sort_items(items: Iterable[TimelineItem]) -> list[TimelineItem]:
    """Items ordered by start time (stable for equal starts)."""
    return sorted(items, key=lambda i: i.start_time)


def find_all_gaps(track_items: Iterable[TimelineItem]) -> list[Gap]:
    """Enumerate the free intervals of a track in time order.

    Zero-width gaps between touching items are skipped. The last gap is
    always unbounded.
    """
    sorted_items = sort_items(track_items)

    if not sorted_items:
        return [Gap(0.0, math.inf)]

    gaps: list[Gap] = []

    # Gap before first item
    first = sorted_items[0]
    if first.start_time > 0:
        gaps.append(Gap(0.0, first.start_time, None, first))

    # Gaps between items
    for left_item, right_item in zip(sorted_items, sorted_items[1:]):
        gap_start = left_item.end_time
        gap_end = right_item.start_time
        if gap_end > gap_start:
            gaps.append(Gap(gap_start, gap_end, left_item, right_item))

    # Gap after last item
    last = sorted_items[-1]
    gaps.append(Gap(last.end_time, math.inf, last, None))

    return gaps


def find_gap_for_position(requested_start: float,
                          track_items: Iterable[TimelineItem]) -> Optional[Gap]:
    """Return the gap containing *requested_start*.

    Returns None when the position falls inside an existing item, which
    is the signal that the caller has to pick the closest gap instead.
    """
    sorted_items = sort_items(track_items)

    # Empty track - infinite gap
    if not sorted_items:
        return Gap(0.0, math.inf)

    first = sorted_items[0]
    if requested_start < first.start_time and first.start_time > 0:
        return Gap(0.0, first.start_time, None, first)

    for left_item, right_item in zip(sorted_items, sorted_items[1:]):
        gap_start = left_item.end_time
        gap_end = right_item.start_time
        if gap_start <= requested_start < gap_end:
            return Gap(gap_start, gap_end, left_item, right_item)

    last = sorted_items[-1]
    if requested_start >= last.end_time:
        return Gap(last.end_time, math.inf, last, None)

    return None


def gap_distance(requested_start: float, gap: Gap) -> float:
    """Distance from a time to a gap; zero when the time lies inside it."""
    if requested_start < gap.gap_start:
        return gap.gap_start - requested_start
    if gap.is_unbounded or requested_start < gap.gap_end:
        return 0.0
    return requested_start - gap.gap_end


def find_closest_gap(requested_start: float, gaps: Sequence[Gap]) -> Gap:
    """Pick the gap nearest to *requested_start*.

    On equal distances the earlier gap in *gaps* wins. Callers always
    pass the output of find_all_gaps, which is never empty.
    """
    closest_gap = gaps[0]
    min_distance = math.inf

    for gap in gaps:
        distance = gap_distance(requested_start, gap)
        if distance < min_distance:
            min_distance = distance
            closest_gap = gap

    return closest_gap
