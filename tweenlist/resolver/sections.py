"""Partition natural slots into same-root sections, splitting at wrap seams."""

from __future__ import annotations

from collections.abc import Iterable

from ..tree_model.types import FlatTree, PositionedItem, Section


def group_sections(flat: FlatTree, slots: Iterable[PositionedItem]) -> list[Section]:
    """Group ``slots`` into contiguous sections.

    A new section starts when the root ancestor changes or when the flat
    position drops below the previous item's (the sequence wrapped).
    """
    sections: list[Section] = []
    root_id: str | None = None
    members: list[PositionedItem] = []
    last_flat_position = -1

    for item in slots:
        flat_item = flat.get(item.original_id)
        if flat_item is None:
            continue
        flat_position = flat.position_of(flat_item.id)
        assert flat_position is not None

        wrapped = last_flat_position != -1 and flat_position < last_flat_position
        if root_id is None or root_id != flat_item.root_id or wrapped:
            if root_id is not None:
                sections.append(Section(root_id=root_id, items=tuple(members)))
            root_id = flat_item.root_id
            members = []
        members.append(item)
        last_flat_position = flat_position

    if root_id is not None:
        sections.append(Section(root_id=root_id, items=tuple(members)))
    return sections
