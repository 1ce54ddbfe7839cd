"""Infinite hierarchy where selected items stay reachable as sticky headers.

Priority when resolving headers:
1. selected items are always shown, sticky when not naturally visible;
2. ancestors are sticky when a visible child needs them.

Selected headers are never evicted to make room for ancestors; the stack
grows instead. Having more selected items than viewport slots is not
supported.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from ..resolver.selection import seed_selected_stack
from ..resolver.sticky import Stack, resolve_sticky_stack
from ..selection_set import SelectionListener, SelectionSet
from ..tree_model.types import FlatTree, NodeView, PositionedItem, Section, original_id_of
from .base import DEFAULT_TOTAL_POSITIONS
from .infinite_hierarchy import InfiniteHierarchyStrategy


class InfiniteHierarchySelectionStrategy(InfiniteHierarchyStrategy):
    """Selection-aware variant of ``InfiniteHierarchyStrategy``.

    With nothing selected it produces exactly the same items.
    """

    def __init__(self, flat: FlatTree, total_positions: int = DEFAULT_TOTAL_POSITIONS) -> None:
        super().__init__(flat, total_positions=total_positions)
        self.selection = SelectionSet()
        self._callback_unsubscribe: Callable[[], None] | None = None

    def _sticky_stack(self, position: int, natural: list[PositionedItem], sections: list[Section]) -> Stack:
        selected = self.selection.snapshot()
        if not selected:
            return super()._sticky_stack(position, natural, sections)
        seed = seed_selected_stack(self.flat, natural, position, self.selection, self.versions)
        stack = resolve_sticky_stack(self.flat, natural, sections, self.versions, selected=selected, seed=seed)
        return tuple(sorted(stack, key=lambda entry: entry.index or 0))

    def get_item_data(self, item_id: str) -> NodeView:
        view = super().get_item_data(item_id)
        return NodeView(
            id=view.id,
            data=view.data,
            depth=view.depth,
            has_children=view.has_children,
            parent_id=view.parent_id,
            is_selected=view.id in self.selection,
        )

    def select(self, item_id: str) -> None:
        self.selection.select(item_id)

    def deselect(self, item_id: str) -> None:
        self.selection.deselect(item_id)

    def toggle_selection(self, item_id: str) -> bool:
        return self.selection.toggle(item_id)

    def get_selected_ids(self) -> set[str]:
        return set(self.selection)

    def subscribe_selection(self, listener: SelectionListener) -> Callable[[], None]:
        """Receive the selected ids after every mutation; returns an unsubscribe handle."""
        return self.selection.subscribe(listener)

    def set_on_selection_change(self, callback: SelectionListener | None) -> None:
        """Install a single change callback, replacing any previous one."""
        if self._callback_unsubscribe is not None:
            self._callback_unsubscribe()
            self._callback_unsubscribe = None
        if callback is not None:
            self._callback_unsubscribe = self.selection.subscribe(callback)

    def find_safe_scroll_position(self, item_id: str, current_position: float, viewport_slots: int) -> int | float:
        """Closest position at or above ``current_position`` showing ``item_id`` unpinned.

        The item is deselected while probing so it does not stick; selection is
        restored afterwards. Returns ``current_position`` when no such position
        exists within two full loops. Composite ids are accepted.

        A hit is an integer position; a miss echoes ``current_position``.
        """
        item_id = original_id_of(item_id)
        length = len(self.flat)
        if length == 0 or self.flat.get(item_id) is None:
            return current_position

        start = math.floor(current_position)
        with self.selection.suspended(item_id):
            for step in range(2 * length):
                position = start - step
                for item in self.get_items_at_position(position, viewport_slots):
                    if item.original_id != item_id or item.index is None:
                        continue
                    if item.offset == item.index - position:
                        return position
        return current_position
