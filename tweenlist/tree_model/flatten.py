"""Tree flattening into the ordered sequence used for position addressing."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from .types import FlatItem, FlatTree


def node_id(node: Any) -> str:
    """Read ``id`` from a mapping or attribute-style node."""
    if isinstance(node, Mapping):
        return str(node["id"])
    return str(node.id)


def node_children(node: Any) -> Sequence[Any]:
    """Read the optional ordered ``children`` of a mapping or attribute-style node."""
    if isinstance(node, Mapping):
        children = node.get("children")
    else:
        children = getattr(node, "children", None)
    return children or ()


def flatten_tree(
    nodes: Iterable[Any],
    get_id: Callable[[Any], str] = node_id,
    get_children: Callable[[Any], Sequence[Any]] = node_children,
) -> FlatTree:
    """Flatten ``nodes`` pre-order, recording depth and root-first ancestor ids.

    Duplicate ids overwrite earlier lookup entries; callers must keep ids
    unique for positions to be meaningful.
    """
    items: list[FlatItem] = []
    by_id: dict[str, FlatItem] = {}
    payload_by_id: dict[str, Any] = {}
    positions: dict[str, int] = {}
    child_counts: dict[str, int] = {}

    def walk(level: Iterable[Any], depth: int, parents: tuple[str, ...]) -> None:
        for node in level:
            item_id = get_id(node)
            children = get_children(node)
            flat_item = FlatItem(id=item_id, data=node, depth=depth, parents=parents)
            positions[item_id] = len(items)
            items.append(flat_item)
            by_id[item_id] = flat_item
            payload_by_id[item_id] = node
            child_counts[item_id] = len(children)
            if children:
                walk(children, depth + 1, parents + (item_id,))

    walk(nodes, 0, ())
    return FlatTree(
        items=tuple(items),
        by_id=by_id,
        payload_by_id=payload_by_id,
        positions=positions,
        child_counts=child_counts,
    )


def flat_tree_from_items(records: Iterable[Any]) -> FlatTree:
    """Build a ``FlatTree`` from pre-flattened ``{id, data, depth, parents}`` records.

    Records keep their given order. ``data`` defaults to the record itself and
    ``depth`` defaults to the length of ``parents``.
    """
    items: list[FlatItem] = []
    by_id: dict[str, FlatItem] = {}
    payload_by_id: dict[str, Any] = {}
    positions: dict[str, int] = {}
    child_counts: dict[str, int] = {}

    for record in records:
        if isinstance(record, FlatItem):
            flat_item = record
        elif isinstance(record, Mapping):
            parents = tuple(str(parent) for parent in record.get("parents") or ())
            flat_item = FlatItem(
                id=str(record["id"]),
                data=record.get("data", record),
                depth=int(record.get("depth", len(parents))),
                parents=parents,
            )
        else:
            parents = tuple(str(parent) for parent in getattr(record, "parents", None) or ())
            flat_item = FlatItem(
                id=str(record.id),
                data=getattr(record, "data", record),
                depth=int(getattr(record, "depth", len(parents))),
                parents=parents,
            )
        positions[flat_item.id] = len(items)
        items.append(flat_item)
        by_id[flat_item.id] = flat_item
        payload_by_id[flat_item.id] = flat_item.data
        child_counts.setdefault(flat_item.id, 0)
        if flat_item.parents:
            parent_id = flat_item.parents[-1]
            child_counts[parent_id] = child_counts.get(parent_id, 0) + 1

    return FlatTree(
        items=tuple(items),
        by_id=by_id,
        payload_by_id=payload_by_id,
        positions=positions,
        child_counts=child_counts,
    )
