"""Snapshot interpolation and change-detection tests."""

from __future__ import annotations

import unittest

from tweenlist.diff import PreviousState, RenderState, diff_snapshots, lerp, previous_states
from tweenlist.tree_model import PositionedItem


def item(item_id: str, offset: int, index: int | None = None, version: int | None = None) -> PositionedItem:
    return PositionedItem(id=item_id, offset=offset, index=index, version=version)


class LerpTests(unittest.TestCase):
    def test_lerp_endpoints_and_midpoint(self) -> None:
        self.assertEqual(lerp(0, 10, 0), 0)
        self.assertEqual(lerp(0, 10, 1), 10)
        self.assertEqual(lerp(0, 10, 0.5), 5)
        self.assertEqual(lerp(10, 0, 0.25), 7.5)
        self.assertEqual(lerp(-5, 5, 0.5), 0)


class DiffSnapshotTests(unittest.TestCase):
    def test_items_in_both_snapshots_are_opaque_and_new_ones_appear(self) -> None:
        result = diff_snapshots([item("a", 0), item("b", 1)], [item("a", 0), item("b", 1)], 0.5, {})

        self.assertEqual(len(result), 2)
        self.assertEqual(
            result[0],
            RenderState(id="a", offset=0, opacity=1.0, is_appearing=True, is_sticky=True),
        )

    def test_offsets_interpolate_between_floor_and_ceil(self) -> None:
        result = diff_snapshots([item("a", 0)], [item("a", 2)], 0.5, {"a": PreviousState(offset=0)})

        self.assertEqual(result[0].offset, 1)
        self.assertEqual(result[0].opacity, 1)
        self.assertFalse(result[0].is_appearing)
        self.assertFalse(result[0].is_sticky)

    def test_t_zero_and_one_select_floor_and_ceil(self) -> None:
        floor, ceil = [item("a", 0)], [item("a", 10)]

        self.assertEqual(diff_snapshots(floor, ceil, 0, {})[0].offset, 0)
        self.assertEqual(diff_snapshots(floor, ceil, 1, {})[0].offset, 10)

    def test_ceil_only_items_slide_in_from_below(self) -> None:
        (state,) = diff_snapshots([], [item("a", 0)], 0.3, {})

        self.assertAlmostEqual(state.offset, 0.7)
        self.assertAlmostEqual(state.opacity, 0.3)
        self.assertTrue(state.is_appearing)
        self.assertFalse(state.is_disappearing)

    def test_floor_only_items_slide_up_and_fade_out(self) -> None:
        (state,) = diff_snapshots([item("a", 0)], [], 0.3, {"a": PreviousState(offset=0)})

        self.assertAlmostEqual(state.offset, -0.3)
        self.assertAlmostEqual(state.opacity, 0.7)
        self.assertFalse(state.is_appearing)
        self.assertTrue(state.is_disappearing)

    def test_moving_compares_index_when_available(self) -> None:
        moved = diff_snapshots([item("a", 1, index=5)], [item("a", 0, index=5)], 0.5, {"a": PreviousState(1, index=4)})
        still = diff_snapshots([item("a", 1, index=5)], [item("a", 0, index=5)], 0.5, {"a": PreviousState(3, index=5)})

        self.assertTrue(moved[0].is_moving)
        self.assertFalse(still[0].is_moving)

    def test_moving_falls_back_to_offset(self) -> None:
        moved = diff_snapshots([item("a", 2)], [item("a", 2)], 0.5, {"a": PreviousState(offset=0)})
        still = diff_snapshots([item("a", 1)], [item("a", 1)], 0.5, {"a": PreviousState(offset=1)})

        self.assertTrue(moved[0].is_moving)
        self.assertFalse(moved[0].is_appearing)
        self.assertFalse(still[0].is_moving)

    def test_version_changes_are_flagged(self) -> None:
        changed = diff_snapshots([item("a", 0, version=2)], [item("a", 0, version=2)], 0.5, {"a": PreviousState(0, version=1)})
        same = diff_snapshots([item("a", 0, version=1)], [item("a", 0, version=1)], 0.5, {"a": PreviousState(0, version=1)})
        unversioned = diff_snapshots([item("a", 0)], [item("a", 0)], 0.5, {"a": PreviousState(0)})

        self.assertTrue(changed[0].has_changed)
        self.assertFalse(same[0].has_changed)
        self.assertFalse(unversioned[0].has_changed)

    def test_mixed_states_keep_floor_order_then_new_ceil_ids(self) -> None:
        previous = {"a": PreviousState(0), "b": PreviousState(1)}

        result = diff_snapshots([item("a", 0), item("b", 1)], [item("a", 0), item("c", 2)], 0.5, previous)

        self.assertEqual([state.id for state in result], ["a", "b", "c"])
        a, b, c = result
        self.assertEqual(a.opacity, 1)
        self.assertFalse(a.is_appearing or a.is_disappearing)
        self.assertEqual(b.opacity, 0.5)
        self.assertTrue(b.is_disappearing)
        self.assertEqual(c.opacity, 0.5)
        self.assertTrue(c.is_appearing)

    def test_empty_inputs_and_version_passthrough(self) -> None:
        self.assertEqual(diff_snapshots([], [], 0.5, {}), [])
        self.assertEqual(diff_snapshots([item("a", 0, version=5)], [item("a", 0, version=5)], 0.5, {})[0].version, 5)


class PreviousStatesTests(unittest.TestCase):
    def test_previous_states_keep_offset_index_and_version(self) -> None:
        states = [RenderState(id="a", offset=1.5, opacity=1.0, index=7, version=2)]

        self.assertEqual(previous_states(states), {"a": PreviousState(offset=1.5, index=7, version=2)})


if __name__ == "__main__":
    unittest.main()
