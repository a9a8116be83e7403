import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.coordinates import LinearTimeMapper


def test_unscrolled_mapping():
    mapper = LinearTimeMapper(zoom_level=50)  # 50 px per second
    assert mapper.pixels_per_ms == pytest.approx(0.05)
    assert mapper.x_to_time(100) == pytest.approx(2000)
    assert mapper.time_to_x(2000) == pytest.approx(100)


def test_scroll_and_origin():
    mapper = LinearTimeMapper(zoom_level=100, scroll_offset=200, origin_x=150)
    # x=150 is time 0 before scrolling; 200px of scroll is 2 seconds
    assert mapper.x_to_time(150) == pytest.approx(2000)
    assert mapper.time_to_x(2000) == pytest.approx(150)


def test_duration_to_width():
    assert LinearTimeMapper(zoom_level=50).duration_to_width(3000) == pytest.approx(150)
