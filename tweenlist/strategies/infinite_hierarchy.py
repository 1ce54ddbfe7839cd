"""Infinite hierarchy: modulo-addressed tree with sticky ancestor headers.

Limitations (not corrected):
- a section shorter than the sticky stack it needs can leave children at the
  bottom while their section also appears at the top;
- a hierarchy deeper than the viewport cannot show a full ancestor chain.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from ..errors import ItemNotFoundError
from ..resolver.natural import natural_slots
from ..resolver.sections import group_sections
from ..resolver.sticky import Stack, apply_sticky_stack, resolve_sticky_stack
from ..tree_model.flatten import flat_tree_from_items, flatten_tree, node_children, node_id
from ..tree_model.types import FlatItem, FlatTree, NodeView, PositionedItem, Section, original_id_of
from .base import DEFAULT_TOTAL_POSITIONS

StrategyT = TypeVar("StrategyT", bound="InfiniteHierarchyStrategy")


class InfiniteHierarchyStrategy:
    """Flattener, natural slots, section grouping, then sticky resolution."""

    def __init__(self, flat: FlatTree, total_positions: int = DEFAULT_TOTAL_POSITIONS) -> None:
        self.flat = flat
        self.total_positions = total_positions
        self.versions: dict[str, int] = {item.id: 0 for item in flat.items}

    @classmethod
    def from_tree(
        cls: type[StrategyT],
        nodes: Iterable[Any],
        get_id: Callable[[Any], str] = node_id,
        get_children: Callable[[Any], Sequence[Any]] = node_children,
        **options: Any,
    ) -> StrategyT:
        """Build from nested ``{id, children}`` nodes."""
        return cls(flatten_tree(nodes, get_id, get_children), **options)

    @classmethod
    def from_flat(cls: type[StrategyT], records: Iterable[Any], **options: Any) -> StrategyT:
        """Build from pre-flattened ``{id, data, depth, parents}`` records."""
        return cls(flat_tree_from_items(records), **options)

    def get_items_at_position(self, position: int, viewport_slots: int) -> list[PositionedItem]:
        if len(self.flat) == 0:
            return []
        natural = natural_slots(self.flat, position, viewport_slots, self.versions)
        sections = group_sections(self.flat, natural)
        stack = self._sticky_stack(position, natural, sections)
        return apply_sticky_stack(natural, stack)

    def _sticky_stack(self, position: int, natural: list[PositionedItem], sections: list[Section]) -> Stack:
        return resolve_sticky_stack(self.flat, natural, sections, self.versions)

    def _flat_item_for(self, item_id: str) -> FlatItem:
        original_id = original_id_of(item_id)
        flat_item = self.flat.get(original_id)
        if flat_item is None:
            raise ItemNotFoundError(original_id, derived_from=item_id)
        return flat_item

    def get_item_data(self, item_id: str) -> NodeView:
        flat_item = self._flat_item_for(item_id)
        return NodeView(
            id=flat_item.id,
            data=flat_item.data,
            depth=flat_item.depth,
            has_children=self.flat.has_children(flat_item.id),
            parent_id=flat_item.parent_id,
        )

    def get_total_positions(self) -> int:
        return self.total_positions

    def get_initial_position(self) -> int:
        return self.total_positions // 2
