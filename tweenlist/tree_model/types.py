"""Structural datatypes shared by the flattener, resolvers, and strategies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, NamedTuple

COMPOSITE_SEPARATOR = "__"


class ItemKey(NamedTuple):
    """One occurrence of a logical item in the infinite address space.

    Renders as ``"<original_id>__<absolute_index>"``. Splitting relies on the
    last separator, so original ids must not contain ``"__"``.
    """

    original_id: str
    absolute_index: int

    def __str__(self) -> str:
        return f"{self.original_id}{COMPOSITE_SEPARATOR}{self.absolute_index}"


def composite_id(original_id: str, absolute_index: int) -> str:
    """Return the external string id for one occurrence."""
    return str(ItemKey(original_id, absolute_index))


def split_composite_id(item_id: str) -> tuple[str, int | None]:
    """Split ``item_id`` at its last separator.

    Returns ``(item_id, None)`` for plain ids. A trailing segment that is not
    an integer is treated as part of a plain id.
    """
    head, sep, tail = item_id.rpartition(COMPOSITE_SEPARATOR)
    if not sep:
        return item_id, None
    try:
        return head, int(tail)
    except ValueError:
        return item_id, None


def original_id_of(item_id: str) -> str:
    """Recover the original id from a composite or plain id."""
    return split_composite_id(item_id)[0]


@dataclass(frozen=True)
class PositionedItem:
    """Externally visible unit: one occurrence placed at a viewport slot."""

    id: str
    offset: int
    index: int | None = None
    version: int | None = None
    key: ItemKey | None = field(default=None, compare=False, repr=False)

    @classmethod
    def for_key(cls, key: ItemKey, offset: int, version: int | None = None) -> PositionedItem:
        return cls(id=str(key), offset=offset, index=key.absolute_index, version=version, key=key)

    @property
    def original_id(self) -> str:
        if self.key is not None:
            return self.key.original_id
        return original_id_of(self.id)

    def with_offset(self, offset: int) -> PositionedItem:
        """Return a copy placed at ``offset``."""
        return replace(self, offset=offset)


@dataclass(frozen=True)
class FlatItem:
    """One tree node in depth-first order with its ancestor chain."""

    id: str
    data: Any
    depth: int
    parents: tuple[str, ...] = ()

    @property
    def root_id(self) -> str:
        """First ancestor, or the item itself when it is a root."""
        return self.parents[0] if self.parents else self.id

    @property
    def parent_id(self) -> str | None:
        return self.parents[-1] if self.parents else None


@dataclass(frozen=True)
class FlatTree:
    """Flattened sequence plus lookup maps built once per strategy."""

    items: tuple[FlatItem, ...]
    by_id: dict[str, FlatItem]
    payload_by_id: dict[str, Any]
    positions: dict[str, int]
    child_counts: dict[str, int]

    def __len__(self) -> int:
        return len(self.items)

    def get(self, item_id: str) -> FlatItem | None:
        return self.by_id.get(item_id)

    def position_of(self, item_id: str) -> int | None:
        """Return the flat position recorded for ``item_id`` (last write wins)."""
        return self.positions.get(item_id)

    def has_children(self, item_id: str) -> bool:
        return self.child_counts.get(item_id, 0) > 0

    @property
    def max_depth(self) -> int:
        return max((item.depth for item in self.items), default=0)


@dataclass(frozen=True)
class Section:
    """Contiguous run of natural slots sharing one root ancestor."""

    root_id: str
    items: tuple[PositionedItem, ...]


@dataclass(frozen=True)
class NodeView:
    """Item data returned by hierarchy strategies for rendering."""

    id: str
    data: Any
    depth: int
    has_children: bool
    parent_id: str | None = None
    is_selected: bool = False
