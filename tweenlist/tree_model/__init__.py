"""Tree-model flattening and structural datatypes.

Defines ``FlatItem``/``FlatTree`` and the composite occurrence key, and turns
nested trees (or pre-flattened records) into the sequence that scroll
positions address.
"""

from __future__ import annotations

from .flatten import flat_tree_from_items, flatten_tree, node_children, node_id
from .types import (
    COMPOSITE_SEPARATOR,
    FlatItem,
    FlatTree,
    ItemKey,
    NodeView,
    PositionedItem,
    Section,
    composite_id,
    original_id_of,
    split_composite_id,
)

__all__ = [
    "COMPOSITE_SEPARATOR",
    "FlatItem",
    "FlatTree",
    "ItemKey",
    "NodeView",
    "PositionedItem",
    "Section",
    "composite_id",
    "flat_tree_from_items",
    "flatten_tree",
    "node_children",
    "node_id",
    "original_id_of",
    "split_composite_id",
]
