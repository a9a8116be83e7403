"""
Coordinates - translate view positions into timeline time.

The placement engine only ever sees milliseconds. Whatever turns a
pointer position into a time lives behind the TimeMapper protocol so it
can be replaced without touching the engine.
"""
from dataclasses import dataclass
from typing import Protocol


class TimeMapper(Protocol):
    def x_to_time(self, x: float) -> float:
        ...

    def time_to_x(self, time: float) -> float:
        ...


@dataclass(frozen=True)
class LinearTimeMapper:
    """Linear pixel <-> millisecond mapping for a horizontally scrolled view.

    Attributes:
        zoom_level: Pixels per second.
        scroll_offset: Horizontal scroll of the content (px).
        origin_x: Widget x where time 0 is drawn when unscrolled
            (e.g. the width of the track header column).
    """
    zoom_level: float
    scroll_offset: float = 0.0
    origin_x: float = 0.0

    @property
    def pixels_per_ms(self) -> float:
        return self.zoom_level / 1000.0

    def x_to_time(self, x: float) -> float:
        """Convert a widget x position to time (ms)"""
        return (x - self.origin_x + self.scroll_offset) / self.pixels_per_ms

    def time_to_x(self, time: float) -> float:
        """Convert time (ms) to a widget x position"""
        return time * self.pixels_per_ms - self.scroll_offset + self.origin_x

    def duration_to_width(self, duration: float) -> float:
        return duration * self.pixels_per_ms
