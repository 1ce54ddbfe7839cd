"""Finite hierarchy with sticky ancestor headers and no wraparound."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..errors import ItemNotFoundError
from ..tree_model.flatten import flatten_tree, node_children, node_id
from ..tree_model.types import FlatItem, FlatTree, NodeView, PositionedItem


class HierarchyStrategy:
    """Scrolls a flattened tree once from top to bottom.

    Ids are the plain node ids. Slots are resolved top-down: when the topmost
    unresolved item is missing an ancestor, that slot is replaced by the
    root-most missing ancestor, which then counts as visible for the slots
    below it.
    """

    def __init__(self, flat: FlatTree) -> None:
        self.flat = flat
        self.versions: dict[str, int] = {item.id: 0 for item in flat.items}

    @classmethod
    def from_tree(
        cls,
        nodes: Iterable[Any],
        get_id: Callable[[Any], str] = node_id,
        get_children: Callable[[Any], Sequence[Any]] = node_children,
    ) -> HierarchyStrategy:
        return cls(flatten_tree(nodes, get_id, get_children))

    def _positioned(self, flat_item: FlatItem, offset: int, index: int | None) -> PositionedItem:
        return PositionedItem(
            id=flat_item.id,
            offset=offset,
            index=index,
            version=self.versions.get(flat_item.id),
        )

    def get_items_at_position(self, position: int, viewport_slots: int) -> list[PositionedItem]:
        length = len(self.flat)
        if length == 0:
            return []

        slots: list[PositionedItem | None] = []
        for slot in range(max(0, viewport_slots)):
            index = position + slot
            if 0 <= index < length:
                slots.append(self._positioned(self.flat.items[index], slot, index))
            else:
                slots.append(None)

        sticky_ids: set[str] = set()
        for slot, current in enumerate(slots):
            # Past the end of the list nothing below needs a header.
            if current is None:
                break
            if current.id in sticky_ids:
                continue
            flat_item = self.flat.get(current.id)
            if flat_item is None:
                continue

            shown_above = {entry.id for entry in slots[:slot] if entry is not None}
            missing_id = next(
                (parent_id for parent_id in flat_item.parents if parent_id not in sticky_ids and parent_id not in shown_above),
                None,
            )
            if missing_id is None:
                continue
            parent = self.flat.get(missing_id)
            if parent is None:
                continue
            slots[slot] = self._positioned(parent, slot, self.flat.position_of(parent.id))
            sticky_ids.add(missing_id)

        return [entry for entry in slots if entry is not None]

    def get_item_data(self, item_id: str) -> NodeView:
        flat_item = self.flat.get(item_id)
        if flat_item is None:
            raise ItemNotFoundError(item_id)
        return NodeView(
            id=flat_item.id,
            data=flat_item.data,
            depth=flat_item.depth,
            has_children=self.flat.has_children(flat_item.id),
            parent_id=flat_item.parent_id,
        )

    def get_total_positions(self) -> int:
        return len(self.flat)

    def get_initial_position(self) -> int:
        return 0
