"""Sticky-header resolution over sections of natural slots.

Every visible item must have its ancestor chain shown above it. When an
ancestor has scrolled out of the natural view, a synthetic occurrence of it is
pushed onto a sticky stack that occupies the top slots. Adding a header
covers one more natural slot, which can change what is needed, so each
section is re-scanned until it converges.

Stacks are immutable tuples: ``previous`` is carried over from earlier
sections and ``current`` belongs to the section being resolved.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass

from ..errors import StickyResolutionError
from ..tree_model.types import FlatTree, ItemKey, PositionedItem, Section
from .selection import find_covered_selected, is_evictable

logger = logging.getLogger(__name__)

Stack = tuple[PositionedItem, ...]


class StepOutcome(enum.Enum):
    RESTART = "restart"
    COVERED = "covered"
    SATISFIED = "satisfied"


@dataclass(frozen=True)
class StepResult:
    """Stacks after one scan of a section and what the scan concluded."""

    previous: Stack
    current: Stack
    outcome: StepOutcome


def expected_parent_key(flat: FlatTree, item: PositionedItem, parent_id: str) -> ItemKey | None:
    """Occurrence of ``parent_id`` belonging to the same loop iteration as ``item``.

    The parent sits exactly ``child_position - parent_position`` slots before
    the child in absolute index space.
    """
    child_position = flat.position_of(item.original_id)
    parent_position = flat.position_of(parent_id)
    if child_position is None or parent_position is None or item.index is None:
        return None
    return ItemKey(parent_id, item.index - (child_position - parent_position))


def find_missing_parent(
    flat: FlatTree,
    item: PositionedItem,
    effective_ids: Collection[str],
    section_items: Sequence[PositionedItem],
    effective_count: int,
    versions: Mapping[str, int] | None = None,
) -> PositionedItem | None:
    """Return a header occurrence for the root-most ancestor of ``item`` not shown.

    An ancestor counts as shown when any sticky entry carries its id, or when
    its expected occurrence is naturally visible below the sticky stack.
    """
    flat_item = flat.get(item.original_id)
    if flat_item is None:
        return None

    for parent_id in flat_item.parents:
        if parent_id in effective_ids:
            continue
        parent_key = expected_parent_key(flat, item, parent_id)
        if parent_key is None:
            continue
        parent_uid = str(parent_key)
        if any(other.id == parent_uid and other.offset >= effective_count for other in section_items):
            continue
        version = versions.get(parent_id) if versions is not None else None
        return PositionedItem.for_key(parent_key, 0, version)
    return None


def convergence_step(
    flat: FlatTree,
    natural: Sequence[PositionedItem],
    section: Section,
    previous: Stack,
    current: Stack,
    versions: Mapping[str, int] | None = None,
    selected: Collection[str] = frozenset(),
) -> StepResult:
    """Scan ``section`` once against ``previous + current``.

    Uncovered items are visited bottom-up; the first one with a missing
    ancestor pushes a header onto ``current`` (evicting the bottom of
    ``previous`` unless it is selected) and asks for a restart.
    """
    effective = previous + current
    effective_count = len(effective)
    effective_ids = {entry.original_id for entry in effective}

    if selected:
        rescued = find_covered_selected(natural, effective_ids, effective_count, selected)
        if rescued is not None:
            logger.debug("promoting covered selection %s", rescued.id)
            return StepResult(previous, current + (rescued,), StepOutcome.RESTART)

    saw_uncovered = False
    for item in reversed(section.items):
        if item.offset < effective_count:
            continue
        saw_uncovered = True
        missing = find_missing_parent(flat, item, effective_ids, section.items, effective_count, versions)
        if missing is None:
            continue
        if previous and is_evictable(previous[-1], selected):
            logger.debug("evicting header %s for %s", previous[-1].id, missing.id)
            previous = previous[:-1]
        return StepResult(previous, current + (missing,), StepOutcome.RESTART)

    outcome = StepOutcome.SATISFIED if saw_uncovered else StepOutcome.COVERED
    return StepResult(previous, current, outcome)


def resolve_sticky_stack(
    flat: FlatTree,
    natural: Sequence[PositionedItem],
    sections: Sequence[Section],
    versions: Mapping[str, int] | None = None,
    selected: Collection[str] = frozenset(),
    seed: Stack = (),
) -> Stack:
    """Run convergence over ``sections`` and return the final sticky stack.

    A section whose uncovered items are all satisfied concludes the whole
    computation. Fully covered sections hand their stack to the next section.
    """
    previous: Stack = tuple(seed)
    for section in sections:
        current: Stack = ()
        # Every restart pushes an id not yet on the stack.
        iteration_cap = len(previous) + len(flat) + 2
        for _ in range(iteration_cap):
            step = convergence_step(flat, natural, section, previous, current, versions, selected)
            previous, current = step.previous, step.current
            if step.outcome is StepOutcome.RESTART:
                continue
            if step.outcome is StepOutcome.SATISFIED:
                return previous + current
            break
        else:
            logger.warning(
                "sticky resolution did not converge for section %r after %d iterations",
                section.root_id,
                iteration_cap,
            )
            raise StickyResolutionError(
                f"sticky resolution did not converge for section {section.root_id!r} "
                f"after {iteration_cap} iterations"
            )
        previous = previous + current
    return previous


def apply_sticky_stack(natural: Sequence[PositionedItem], stack: Sequence[PositionedItem]) -> list[PositionedItem]:
    """Place ``stack`` over the top slots and return items ordered by offset.

    Entries beyond the viewport are dropped.
    """
    slots = {item.offset: item for item in natural}
    for offset, entry in enumerate(stack[: len(natural)]):
        slots[offset] = entry.with_offset(offset)
    return [slots[offset] for offset in sorted(slots)]
