"""
Snapping - pull a candidate time onto nearby guide positions.

Guide positions are the edges of other items (on every track) and the
play cursor. Ties are resolved by the order of the target list, so the
list order is part of the observable behavior at snap boundaries.
"""
from typing import Iterable, Sequence

from models.timeline import Track


def find_snap_targets(dragged_item_uuid: str,
                      tracks: Iterable[Track],
                      playhead_position: float) -> list[float]:
    """Collect guide positions for an item being dragged or resized.

    The play cursor comes first, then the start and end of every other
    item on every track, in track order.
    """
    targets = [playhead_position]
    for track in tracks:
        for item in track.items:
            if item.uuid != dragged_item_uuid:
                targets.append(item.start_time)
                targets.append(item.end_time)
    return targets


def snap_time(candidate: float, targets: Sequence[float], proximity_ms: float) -> float:
    """Return the target closest to *candidate* if strictly within
    *proximity_ms*, otherwise *candidate* unchanged."""
    best_snap = candidate
    min_diff = proximity_ms

    for target in targets:
        diff = abs(candidate - target)
        if diff < min_diff:
            min_diff = diff
            best_snap = target

    return best_snap


def snap_item_start(requested_start: float, duration: float,
                    targets: Sequence[float], proximity_ms: float) -> float:
    """Snap a dragged item by either of its edges.

    For each target the start edge is tried before the end edge; when the
    end edge wins, the returned start is ``target - duration``.
    """
    snapped_start = requested_start
    min_diff = proximity_ms
    requested_end = requested_start + duration

    for target in targets:
        diff = abs(requested_start - target)
        if diff < min_diff:
            min_diff = diff
            snapped_start = target

        diff = abs(requested_end - target)
        if diff < min_diff:
            min_diff = diff
            snapped_start = target - duration

    return snapped_start
