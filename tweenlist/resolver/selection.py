"""Selection-aware additions to sticky resolution.

Selected items are seeded into the sticky stack when they are not naturally
visible, rescued when a growing stack is about to cover them, and protected
from eviction when ancestor headers need room.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence

from ..tree_model.types import FlatTree, ItemKey, PositionedItem
from .natural import closest_occurrence_at_or_before


def seed_selected_stack(
    flat: FlatTree,
    natural: Sequence[PositionedItem],
    position: int,
    selected: Iterable[str],
    versions: Mapping[str, int] | None = None,
) -> tuple[PositionedItem, ...]:
    """Initial sticky stack: selected ids absent from ``natural``, ordered by index."""
    natural_ids = {item.original_id for item in natural}
    seeded: list[PositionedItem] = []
    for item_id in selected:
        if item_id in natural_ids:
            continue
        absolute_index = closest_occurrence_at_or_before(flat, item_id, position)
        if absolute_index is None:
            continue
        version = versions.get(item_id) if versions is not None else None
        seeded.append(PositionedItem.for_key(ItemKey(item_id, absolute_index), 0, version))
    seeded.sort(key=lambda item: item.index or 0)
    return tuple(seeded)


def find_covered_selected(
    natural: Sequence[PositionedItem],
    effective_ids: Collection[str],
    effective_count: int,
    selected: Collection[str],
) -> PositionedItem | None:
    """Return the first selected natural item hidden under the sticky stack."""
    for item in natural[:effective_count]:
        original_id = item.original_id
        if original_id in effective_ids:
            continue
        if original_id in selected:
            return item.with_offset(0)
    return None


def is_evictable(candidate: PositionedItem, selected: Collection[str]) -> bool:
    """Whether ``candidate`` may be popped to make room for an ancestor header."""
    return candidate.original_id not in selected
