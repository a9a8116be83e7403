"""
Unit tests for drag placement (core.placement).

Tests cover:
  - The documented drag scenarios
  - Gap fitting, shrinking and the minimum-duration floor
  - Timeline bound handling
  - Randomized invariants: no overlap, idempotence, bound respect
"""
import os
import random
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.gaps import find_all_gaps, find_gap_for_position, items_overlap
from core.placement import Placement, get_valid_drag_position, validate_item_position
from models.timeline import TimelineItem

TOTAL = 60000


def item(uuid: str, start: float, duration: float) -> TimelineItem:
    return TimelineItem(uuid=uuid, start_time=start, duration=duration, track_uuid="t1")


class TestDragScenarios(unittest.TestCase):
    def test_shrinks_to_fit_small_gap(self):
        others = [item("a", 0, 5000), item("b", 6000, 5000)]
        result = get_valid_drag_position(item("x", 20000, 3000), 5500, others, TOTAL)
        self.assertEqual((result.start_time, result.duration), (5000, 1000))
        self.assertFalse(result.forced_overlap)

    def test_drag_onto_item_goes_to_closest_gap(self):
        a, b, c = item("a", 0, 2000), item("b", 3000, 2000), item("c", 6000, 2000)
        result = get_valid_drag_position(c, 4500, [a, b, c], TOTAL)
        self.assertGreaterEqual(result.start_time, 5000)
        self.assertFalse(items_overlap(c.moved(result.start_time, result.duration), b))

    def test_empty_track_keeps_request(self):
        result = get_valid_drag_position(item("x", 0, 3000), 5000, [], TOTAL)
        self.assertEqual(result, Placement(5000, 3000))

    def test_narrow_gap_floors_to_minimum(self):
        others = [item("a", 0, 3000), item("b", 3050, 3000)]
        result = get_valid_drag_position(item("x", 20000, 3000), 3025, others, TOTAL, min_duration=100)
        self.assertEqual((result.start_time, result.duration), (3000, 100))
        # The floor pokes 50ms into "b"; reported, not prevented
        self.assertTrue(result.forced_overlap)


class TestPlacementRules(unittest.TestCase):
    def test_negative_request_on_empty_track(self):
        result = get_valid_drag_position(item("x", 0, 1000), -500, [], TOTAL)
        self.assertEqual(result.start_time, 0)

    def test_negative_request_clamped_to_leading_gap(self):
        others = [item("a", 5000, 1000)]
        result = get_valid_drag_position(item("x", 0, 1000), -500, others, TOTAL)
        self.assertEqual((result.start_time, result.duration), (0, 1000))

    def test_negative_request_against_item_at_zero(self):
        a = item("a", 0, 5000)
        result = get_valid_drag_position(item("x", 20000, 3000), -100, [a], TOTAL)
        self.assertEqual(result, Placement(5000, 3000))
        self.assertFalse(items_overlap(item("x", result.start_time, result.duration), a))

    def test_clamped_to_gap_end(self):
        others = [item("a", 0, 1000), item("b", 5000, 1000)]
        result = get_valid_drag_position(item("x", 0, 2000), 4500, others, TOTAL)
        self.assertEqual((result.start_time, result.duration), (3000, 2000))

    def test_trailing_gap_never_starts_before_gap(self):
        others = [item("a", 0, 4000)]
        result = get_valid_drag_position(item("x", 0, 1000), 4000, others, TOTAL)
        self.assertEqual(result.start_time, 4000)

    def test_total_duration_caps_trailing_gap(self):
        others = [item("a", 0, 1000)]
        result = get_valid_drag_position(item("x", 0, 3000), 58000, others, TOTAL)
        self.assertEqual((result.start_time, result.duration), (58000, 2000))

    def test_total_duration_caps_empty_track(self):
        result = get_valid_drag_position(item("x", 0, 3000), 59500, [], TOTAL)
        self.assertEqual(result.duration, 500)

    def test_item_itself_is_ignored_in_track_items(self):
        x = item("x", 0, 1000)
        result = get_valid_drag_position(x, 200, [x], TOTAL)
        self.assertEqual(result, Placement(200, 1000))

    def test_snap_targets_applied_before_placement(self):
        others = [item("a", 0, 1000)]
        # 1150 is within 200ms of the end of "a"
        result = get_valid_drag_position(item("x", 0, 500), 1150, others, TOTAL,
                                         snap_targets=[1000], snap_distance=200)
        self.assertEqual(result.start_time, 1000)

    def test_snap_by_item_end(self):
        result = get_valid_drag_position(item("x", 0, 500), 2400, [], TOTAL,
                                         snap_targets=[3000], snap_distance=200)
        self.assertEqual(result.start_time, 2500)


class TestPlacementInvariants(unittest.TestCase):
    """Seeded random sweeps over generated tracks."""

    def _random_track(self, rng: random.Random) -> list[TimelineItem]:
        items = []
        cursor = 0
        for index in range(rng.randint(1, 6)):
            cursor += rng.choice([0, 50, 300, 1000, 2500])
            duration = rng.choice([500, 1000, 2000, 4000])
            items.append(item(f"i{index}", cursor, duration))
            cursor += duration
        rng.shuffle(items)
        return items

    def test_no_overlap_and_bounds(self):
        rng = random.Random(1234)
        for _ in range(500):
            others = self._random_track(rng)
            dragged = item("x", 0, rng.choice([100, 700, 1500, 3000, 6000]))
            requested = rng.uniform(-2000, 30000)
            result = get_valid_drag_position(dragged, requested, others, TOTAL)
            placed = dragged.moved(result.start_time, result.duration)

            self.assertGreaterEqual(result.start_time, 0)
            self.assertLessEqual(result.end_time, TOTAL)
            if result.forced_overlap:
                # Only a real gap narrower than the minimum may force an overlap
                narrow = [g for g in find_all_gaps(others)
                          if g.gap_start == result.start_time and not g.is_unbounded and g.width < 100]
                self.assertTrue(narrow, (requested, others, result))
                self.assertEqual(result.duration, 100)
                continue
            for other in others:
                self.assertFalse(items_overlap(placed, other), (requested, others, result))

    def test_idempotent(self):
        rng = random.Random(99)
        for _ in range(200):
            others = self._random_track(rng)
            dragged = item("x", 0, 1500)
            requested = rng.uniform(0, 20000)
            first = get_valid_drag_position(dragged, requested, others, TOTAL)
            second = get_valid_drag_position(dragged, requested, others, TOTAL)
            self.assertEqual(first, second)

    def test_fit_preserves_request(self):
        rng = random.Random(7)
        checked = 0
        for _ in range(500):
            others = self._random_track(rng)
            dragged = item("x", 0, rng.choice([200, 500, 1000]))
            requested = rng.uniform(0, 20000)
            gap = find_gap_for_position(requested, others)
            if gap is None or requested > gap.gap_end - dragged.duration:
                continue
            result = get_valid_drag_position(dragged, requested, others, TOTAL)
            self.assertEqual(result.start_time, requested)
            self.assertEqual(result.duration, dragged.duration)
            checked += 1
        self.assertGreater(checked, 0)

    def test_unbounded_gap_containment(self):
        rng = random.Random(42)
        for _ in range(200):
            others = self._random_track(rng)
            last_end = max(o.end_time for o in others)
            requested = rng.uniform(last_end - 3000, last_end + 3000)
            gap = find_gap_for_position(requested, others)
            if gap is None or not gap.is_unbounded:
                continue
            result = get_valid_drag_position(item("x", 0, 1000), requested, others, TOTAL)
            self.assertGreaterEqual(result.start_time, gap.gap_start)


class TestValidateItemPosition(unittest.TestCase):
    def test_free_slot_is_kept(self):
        others = [item("a", 0, 1000)]
        self.assertEqual(validate_item_position(item("x", 1000, 500), others), 1000)

    def test_collision_moves_after_last_item(self):
        others = [item("b", 4000, 1000), item("a", 0, 1000)]
        self.assertEqual(validate_item_position(item("x", 500, 500), others), 5000)

    def test_empty_track(self):
        self.assertEqual(validate_item_position(item("x", 700, 500), []), 700)


if __name__ == "__main__":
    unittest.main()
