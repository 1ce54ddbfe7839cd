"""Public package surface for tweenlist.

Strategy-driven virtualized lists over discrete scroll positions: which item
occupies which viewport slot, sticky ancestor headers for hierarchies, and
interpolated render state between adjacent positions.
"""

from __future__ import annotations

from .diff import PreviousState, RenderState, diff_snapshots, lerp, previous_states
from .errors import ItemNotFoundError, StickyResolutionError, TweenListError
from .frame import Frame, FrameBuilder, viewport_slots_for
from .selection_set import SelectionSet
from .strategies import (
    DEFAULT_TOTAL_POSITIONS,
    HierarchyStrategy,
    InfiniteHierarchySelectionStrategy,
    InfiniteHierarchyStrategy,
    InfiniteLoopStrategy,
    VisibilityStrategy,
)
from .tree_model import FlatItem, ItemKey, NodeView, PositionedItem, composite_id, original_id_of


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DEFAULT_TOTAL_POSITIONS",
    "FlatItem",
    "Frame",
    "FrameBuilder",
    "HierarchyStrategy",
    "InfiniteHierarchySelectionStrategy",
    "InfiniteHierarchyStrategy",
    "InfiniteLoopStrategy",
    "ItemKey",
    "ItemNotFoundError",
    "NodeView",
    "PositionedItem",
    "PreviousState",
    "RenderState",
    "SelectionSet",
    "StickyResolutionError",
    "TweenListError",
    "VisibilityStrategy",
    "composite_id",
    "diff_snapshots",
    "lerp",
    "main",
    "original_id_of",
    "previous_states",
    "viewport_slots_for",
]
