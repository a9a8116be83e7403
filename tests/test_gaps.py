"""
Unit tests for overlap detection and gap discovery (core.gaps).
"""
import math
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.gaps import (
    Gap,
    find_all_gaps,
    find_closest_gap,
    find_gap_for_position,
    gap_distance,
    items_overlap,
)
from models.timeline import TimelineItem


def item(uuid: str, start: float, duration: float) -> TimelineItem:
    return TimelineItem(uuid=uuid, start_time=start, duration=duration, track_uuid="t1")


class TestItemsOverlap(unittest.TestCase):
    def test_touching_items_do_not_overlap(self):
        a = item("a", 0, 1000)
        b = item("b", 1000, 500)
        self.assertFalse(items_overlap(a, b))
        self.assertFalse(items_overlap(b, a))

    def test_partial_overlap(self):
        self.assertTrue(items_overlap(item("a", 0, 1000), item("b", 999, 500)))

    def test_containment(self):
        self.assertTrue(items_overlap(item("a", 0, 5000), item("b", 1000, 500)))

    def test_disjoint(self):
        self.assertFalse(items_overlap(item("a", 0, 100), item("b", 200, 100)))


class TestFindAllGaps(unittest.TestCase):
    def test_empty_track(self):
        gaps = find_all_gaps([])
        self.assertEqual(len(gaps), 1)
        self.assertEqual(gaps[0].gap_start, 0)
        self.assertTrue(gaps[0].is_unbounded)
        self.assertIsNone(gaps[0].left_item)

    def test_unsorted_input(self):
        a, b = item("a", 1000, 1000), item("b", 4000, 1000)
        gaps = find_all_gaps([b, a])
        self.assertEqual([(g.gap_start, g.gap_end) for g in gaps],
                         [(0, 1000), (2000, 4000), (5000, math.inf)])
        self.assertIs(gaps[0].right_item, a)
        self.assertIs(gaps[1].left_item, a)
        self.assertIs(gaps[1].right_item, b)
        self.assertIs(gaps[-1].left_item, b)

    def test_touching_items_leave_no_zero_width_gap(self):
        gaps = find_all_gaps([item("a", 0, 1000), item("b", 1000, 1000)])
        self.assertEqual(len(gaps), 1)
        self.assertEqual(gaps[0].gap_start, 2000)
        self.assertTrue(all(g.width > 0 for g in gaps))

    def test_no_leading_gap_when_first_item_at_zero(self):
        gaps = find_all_gaps([item("a", 0, 500), item("b", 800, 200)])
        self.assertEqual(gaps[0].gap_start, 500)


class TestFindGapForPosition(unittest.TestCase):
    def setUp(self):
        self.items = [item("a", 1000, 1000), item("b", 3000, 1000)]

    def test_leading_gap(self):
        gap = find_gap_for_position(500, self.items)
        self.assertEqual((gap.gap_start, gap.gap_end), (0, 1000))

    def test_negative_request_lands_in_leading_gap(self):
        gap = find_gap_for_position(-200, self.items)
        self.assertEqual(gap.gap_start, 0)

    def test_negative_request_before_item_at_zero_is_inside_item(self):
        # No zero-width leading gap exists when the first item starts at 0
        self.assertIsNone(find_gap_for_position(-100, [item("a", 0, 5000)]))

    def test_between_items(self):
        gap = find_gap_for_position(2000, self.items)
        self.assertEqual((gap.gap_start, gap.gap_end), (2000, 3000))

    def test_trailing_gap(self):
        gap = find_gap_for_position(4000, self.items)
        self.assertEqual(gap.gap_start, 4000)
        self.assertTrue(gap.is_unbounded)

    def test_inside_item_returns_none(self):
        self.assertIsNone(find_gap_for_position(1500, self.items))
        self.assertIsNone(find_gap_for_position(3000, self.items))

    def test_empty_track(self):
        gap = find_gap_for_position(1234, [])
        self.assertEqual(gap, Gap(0.0, math.inf))


class TestFindClosestGap(unittest.TestCase):
    def test_distance(self):
        gap = Gap(1000, 2000)
        self.assertEqual(gap_distance(500, gap), 500)
        self.assertEqual(gap_distance(1500, gap), 0)
        self.assertEqual(gap_distance(2500, gap), 500)
        self.assertEqual(gap_distance(10 ** 9, Gap(1000, math.inf)), 0)

    def test_picks_nearest(self):
        items = [item("a", 0, 2000), item("b", 3000, 2000)]
        gaps = find_all_gaps(items)
        self.assertEqual(find_closest_gap(4500, gaps).gap_start, 5000)
        self.assertEqual(find_closest_gap(3200, gaps).gap_start, 2000)

    def test_tie_goes_to_first_gap(self):
        # 4000 is 1000 away from both the [2000,3000) gap and the trailing gap
        items = [item("a", 0, 2000), item("b", 3000, 2000)]
        gaps = find_all_gaps(items)
        self.assertEqual(find_closest_gap(4000, gaps).gap_start, 2000)


if __name__ == "__main__":
    unittest.main()
