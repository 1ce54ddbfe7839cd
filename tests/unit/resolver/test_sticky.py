"""Sticky-header convergence tests.

Exercises single convergence steps in isolation as well as the full
section-by-section resolution.
"""

from __future__ import annotations

import unittest
from unittest import mock

from tweenlist.errors import StickyResolutionError
from tweenlist.resolver import (
    StepOutcome,
    StepResult,
    apply_sticky_stack,
    convergence_step,
    expected_parent_key,
    find_missing_parent,
    group_sections,
    natural_slots,
    resolve_sticky_stack,
    seed_selected_stack,
)
from tweenlist.tree_model import ItemKey, PositionedItem, flatten_tree

TREE = [
    {
        "id": "root",
        "children": [
            {"id": "child1", "children": [{"id": "grandchild1"}, {"id": "grandchild2"}]},
            {"id": "child2", "children": [{"id": "grandchild3"}]},
        ],
    },
    {"id": "root2", "children": [{"id": "child3"}]},
]


def header(item_id: str, index: int) -> PositionedItem:
    return PositionedItem.for_key(ItemKey(item_id, index), 0)


def resolve(flat, position: int, slots: int = 5) -> list[str]:
    natural = natural_slots(flat, position, slots)
    stack = resolve_sticky_stack(flat, natural, group_sections(flat, natural))
    return [item.id for item in apply_sticky_stack(natural, stack)]


class ExpectedParentTests(unittest.TestCase):
    def test_parent_occurrence_follows_child_loop_iteration(self) -> None:
        flat = flatten_tree(TREE)
        child = PositionedItem.for_key(ItemKey("grandchild3", 13), 0)

        self.assertEqual(expected_parent_key(flat, child, "child2"), ItemKey("child2", 12))
        self.assertEqual(expected_parent_key(flat, child, "root"), ItemKey("root", 8))

    def test_negative_child_index_yields_negative_parent_index(self) -> None:
        flat = flatten_tree(TREE)
        child = PositionedItem.for_key(ItemKey("child3", -1), 0)

        self.assertEqual(expected_parent_key(flat, child, "root2"), ItemKey("root2", -2))

    def test_child_without_index_has_no_expected_parent(self) -> None:
        flat = flatten_tree(TREE)

        self.assertIsNone(expected_parent_key(flat, PositionedItem(id="child3", offset=0), "root2"))


class FindMissingParentTests(unittest.TestCase):
    def test_root_most_missing_ancestor_is_returned_first(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 2, 5)
        grandchild3 = natural[3]

        missing = find_missing_parent(flat, grandchild3, set(), natural[:4], 0, {"root": 4})

        assert missing is not None
        self.assertEqual(missing.id, "root__0")
        self.assertEqual(missing.index, 0)
        self.assertEqual(missing.version, 4)

    def test_ancestor_in_sticky_matches_by_original_id(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 10, 5)
        grandchild3 = natural[3]

        missing = find_missing_parent(flat, grandchild3, {"root", "child2"}, natural, 2)

        self.assertIsNone(missing)

    def test_naturally_visible_parent_must_be_below_the_stack(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 6, 5)
        child3 = natural[1]

        self.assertIsNone(find_missing_parent(flat, child3, set(), natural, 0))
        missing = find_missing_parent(flat, child3, {"root"}, natural, 1)
        assert missing is not None
        self.assertEqual(missing.id, "root2__6")


class ConvergenceStepTests(unittest.TestCase):
    def test_missing_parent_evicts_bottom_of_previous_stack(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 6, 5)
        section = group_sections(flat, natural)[0]

        step = convergence_step(flat, natural, section, (header("root", 0),), ())

        self.assertEqual(step.outcome, StepOutcome.RESTART)
        self.assertEqual(step.previous, ())
        self.assertEqual([item.id for item in step.current], ["root2__6"])

    def test_selected_previous_entry_is_never_evicted(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 6, 5)
        section = group_sections(flat, natural)[0]

        step = convergence_step(flat, natural, section, (header("root", 0),), (), selected={"root"})

        self.assertEqual(step.outcome, StepOutcome.RESTART)
        self.assertEqual([item.id for item in step.previous], ["root__0"])
        self.assertEqual([item.id for item in step.current], ["root2__6"])

    def test_covered_selected_item_is_promoted_before_parent_scan(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 4, 5)
        section = group_sections(flat, natural)[0]

        step = convergence_step(
            flat,
            natural,
            section,
            (header("child1", 1),),
            (header("root", 0),),
            selected={"child1", "grandchild3"},
        )

        self.assertEqual(step.outcome, StepOutcome.RESTART)
        self.assertEqual([item.id for item in step.current], ["root__0", "grandchild3__5"])
        self.assertEqual(step.current[-1].offset, 0)

    def test_section_fully_under_stack_is_covered(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 7, 5)
        section = group_sections(flat, natural)[0]

        step = convergence_step(flat, natural, section, (), (header("root2", 6),))

        self.assertEqual(step.outcome, StepOutcome.COVERED)

    def test_section_with_visible_ancestors_is_satisfied(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 0, 5)
        section = group_sections(flat, natural)[0]

        step = convergence_step(flat, natural, section, (), ())

        self.assertEqual(step, StepResult((), (), StepOutcome.SATISFIED))


class ResolveStickyStackTests(unittest.TestCase):
    def test_top_of_tree_needs_no_headers(self) -> None:
        flat = flatten_tree(TREE)

        self.assertEqual(resolve(flat, 0), ["root__0", "child1__1", "grandchild1__2", "grandchild2__3", "child2__4"])

    def test_deep_scroll_pins_root_and_intermediate_parent(self) -> None:
        flat = flatten_tree(TREE)

        self.assertEqual(resolve(flat, 2), ["root__0", "child1__1", "child2__4", "grandchild3__5", "root2__6"])

    def test_covered_section_hands_its_stack_to_the_next_section(self) -> None:
        flat = flatten_tree(TREE)

        self.assertEqual(resolve(flat, 4), ["root__0", "child2__4", "root2__6", "child3__7", "root__8"])
        self.assertEqual(resolve(flat, 7), ["root2__6", "root__8", "child1__9", "grandchild1__10", "grandchild2__11"])

    def test_headers_before_the_wrap_use_negative_indices(self) -> None:
        flat = flatten_tree(TREE)

        self.assertEqual(resolve(flat, -1), ["root2__-2", "root__0", "child1__1", "grandchild1__2", "grandchild2__3"])

    def test_selected_seed_stays_on_the_stack(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 7, 5)
        seed = seed_selected_stack(flat, natural, 7, ["grandchild3"])

        stack = resolve_sticky_stack(
            flat, natural, group_sections(flat, natural), selected={"grandchild3"}, seed=seed
        )

        self.assertEqual([item.id for item in stack], ["grandchild3__5"])

    def test_non_converging_section_raises_after_iteration_cap(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 2, 5)
        sections = group_sections(flat, natural)

        def restart_forever(flat, natural, section, previous, current, versions=None, selected=frozenset()):
            return StepResult(previous, current, StepOutcome.RESTART)

        with mock.patch("tweenlist.resolver.sticky.convergence_step", side_effect=restart_forever) as step:
            with self.assertLogs("tweenlist.resolver.sticky", level="WARNING"):
                with self.assertRaises(StickyResolutionError):
                    resolve_sticky_stack(flat, natural, sections)

        self.assertEqual(step.call_count, len(flat) + 2)


class ApplyStickyStackTests(unittest.TestCase):
    def test_stack_replaces_top_slots_in_order(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 2, 5)

        result = apply_sticky_stack(natural, (header("root", 0), header("child1", 1)))

        self.assertEqual([item.offset for item in result], [0, 1, 2, 3, 4])
        self.assertEqual([item.id for item in result][:2], ["root__0", "child1__1"])
        self.assertEqual(result[2], natural[2])

    def test_stack_longer_than_viewport_is_truncated(self) -> None:
        flat = flatten_tree(TREE)
        natural = natural_slots(flat, 2, 2)
        stack = (header("root", 0), header("child1", 1), header("child2", 4))

        result = apply_sticky_stack(natural, stack)

        self.assertEqual([item.id for item in result], ["root__0", "child1__1"])
        self.assertEqual([item.offset for item in result], [0, 1])


if __name__ == "__main__":
    unittest.main()
