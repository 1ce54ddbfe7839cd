"""Natural slot addressing over an infinitely repeating flat sequence."""

from __future__ import annotations

from collections.abc import Mapping

from ..tree_model.types import FlatTree, ItemKey, PositionedItem


def wrap_index(absolute_index: int, length: int) -> int:
    """Canonicalize ``absolute_index`` into ``[0, length)``."""
    return ((absolute_index % length) + length) % length


def natural_slots(
    flat: FlatTree,
    position: int,
    viewport_slots: int,
    versions: Mapping[str, int] | None = None,
) -> list[PositionedItem]:
    """Return one candidate per viewport slot before sticky correction.

    Slot ``s`` holds the occurrence at absolute index ``position + s``; its id
    embeds that absolute index so repeated logical items never collide.
    """
    length = len(flat)
    if length == 0:
        return []

    slots: list[PositionedItem] = []
    for slot in range(max(0, viewport_slots)):
        absolute_index = position + slot
        flat_item = flat.items[wrap_index(absolute_index, length)]
        version = versions.get(flat_item.id) if versions is not None else None
        slots.append(PositionedItem.for_key(ItemKey(flat_item.id, absolute_index), slot, version))
    return slots


def closest_occurrence_at_or_before(flat: FlatTree, item_id: str, position: int) -> int | None:
    """Absolute index of the nearest occurrence of ``item_id`` not after ``position``."""
    length = len(flat)
    flat_position = flat.position_of(item_id)
    if length == 0 or flat_position is None:
        return None
    candidate = (position // length) * length + flat_position
    if candidate > position:
        candidate -= length
    return candidate
