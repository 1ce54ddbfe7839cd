"""Flat infinite list: a finite item array repeated through modulo addressing."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from ..errors import ItemNotFoundError
from ..resolver.natural import wrap_index
from ..tree_model.flatten import node_id
from ..tree_model.types import ItemKey, PositionedItem, original_id_of
from .base import DEFAULT_TOTAL_POSITIONS


class InfiniteLoopStrategy:
    """Wraps ``items`` into an endless list.

    Supports in-place replacement via ``update_item`` and whole-array
    replacement via ``set_items``; bumping an item's version lets the
    snapshot differ flag it as changed.
    """

    def __init__(
        self,
        items: Iterable[Any],
        get_item_id: Callable[[Any], str] = node_id,
        total_positions: int = DEFAULT_TOTAL_POSITIONS,
    ) -> None:
        self.get_item_id = get_item_id
        self.total_positions = total_positions
        self.items: list[Any] = []
        self.items_by_id: dict[str, Any] = {}
        self.versions: dict[str, int] = {}
        self.set_items(items)

    def get_items_at_position(self, position: int, viewport_slots: int) -> list[PositionedItem]:
        length = len(self.items)
        if length == 0:
            return []

        result: list[PositionedItem] = []
        for slot in range(max(0, viewport_slots)):
            absolute_index = position + slot
            item_id = self.get_item_id(self.items[wrap_index(absolute_index, length)])
            key = ItemKey(item_id, absolute_index)
            result.append(PositionedItem.for_key(key, slot, self.versions.get(item_id)))
        return result

    def get_item_data(self, item_id: str) -> Any:
        original_id = original_id_of(item_id)
        if original_id in self.items_by_id:
            return self.items_by_id[original_id]
        # Plain ids that happen to contain the separator.
        if item_id in self.items_by_id:
            return self.items_by_id[item_id]
        raise ItemNotFoundError(original_id, derived_from=item_id)

    def get_total_positions(self) -> int:
        return self.total_positions

    def get_initial_position(self) -> int:
        return self.total_positions // 2

    def update_item(self, item_id: str, data: Any, increment_version: bool = False) -> None:
        """Replace the item with ``item_id`` in place."""
        for index, item in enumerate(self.items):
            if self.get_item_id(item) == item_id:
                break
        else:
            raise ItemNotFoundError(item_id)

        self.items[index] = data
        self.items_by_id[item_id] = data
        if increment_version:
            self.versions[item_id] = self.versions.get(item_id, 0) + 1

    def set_items(self, items: Iterable[Any]) -> None:
        """Replace the whole source; every version resets to 0."""
        self.items = list(items)
        self.items_by_id = {}
        self.versions = {}
        for item in self.items:
            item_id = self.get_item_id(item)
            self.items_by_id[item_id] = item
            self.versions[item_id] = 0
