"""
Unit tests for snapping (core.snapping).
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.snapping import find_snap_targets, snap_item_start, snap_time
from models.timeline import TimelineItem, Track


class TestSnapTime(unittest.TestCase):
    def test_snaps_within_proximity(self):
        self.assertEqual(snap_time(5150, [5000], 200), 5000)

    def test_no_snap_outside_proximity(self):
        self.assertEqual(snap_time(10300, [10000], 200), 10300)

    def test_proximity_is_exclusive(self):
        self.assertEqual(snap_time(5200, [5000], 200), 5200)

    def test_nearest_target_wins(self):
        self.assertEqual(snap_time(1000, [1150, 950, 1100], 200), 950)

    def test_tie_goes_to_first_target(self):
        self.assertEqual(snap_time(1000, [1100, 900], 200), 1100)
        self.assertEqual(snap_time(1000, [900, 1100], 200), 900)

    def test_no_targets(self):
        self.assertEqual(snap_time(1234, [], 200), 1234)


class TestSnapItemStart(unittest.TestCase):
    def test_start_edge(self):
        self.assertEqual(snap_item_start(5100, 1000, [5000], 200), 5000)

    def test_end_edge(self):
        # End at 5950 snaps to 6000, so start moves to 5000
        self.assertEqual(snap_item_start(4950, 1000, [6000], 200), 5000)

    def test_closer_edge_wins(self):
        # Start is 150 from 3000, end is 50 from 4100
        self.assertEqual(snap_item_start(3150, 1000, [3000, 4100], 200), 3100)

    def test_start_edge_preferred_on_tie(self):
        self.assertEqual(snap_item_start(1100, 1000, [1000, 2200], 200), 1000)


class TestFindSnapTargets(unittest.TestCase):
    def test_playhead_first_then_other_items(self):
        t1 = Track(uuid="t1", items=(
            TimelineItem(uuid="dragged", start_time=0, duration=1000, track_uuid="t1"),
            TimelineItem(uuid="a", start_time=2000, duration=500, track_uuid="t1"),
        ))
        t2 = Track(uuid="t2", items=(
            TimelineItem(uuid="b", start_time=7000, duration=1000, track_uuid="t2"),
        ))
        targets = find_snap_targets("dragged", [t1, t2], 4000)
        self.assertEqual(targets, [4000, 2000, 2500, 7000, 8000])


if __name__ == "__main__":
    unittest.main()
