"""
TrackSlot Data Models.

Public API:

  Timeline Layer:
    Timeline, Track
    TimelineItem, MediaType
"""

from models.timeline import (
    Timeline,
    Track,
    TimelineItem,
    MediaType,
)

__all__ = [
    "Timeline",
    "Track",
    "TimelineItem",
    "MediaType",
]
