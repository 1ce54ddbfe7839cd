"""Visibility strategies: flat loop, finite hierarchy, infinite hierarchy, selection."""

from __future__ import annotations

from .base import DEFAULT_TOTAL_POSITIONS, VisibilityStrategy
from .hierarchy import HierarchyStrategy
from .infinite_hierarchy import InfiniteHierarchyStrategy
from .infinite_hierarchy_selection import InfiniteHierarchySelectionStrategy
from .infinite_loop import InfiniteLoopStrategy

__all__ = [
    "DEFAULT_TOTAL_POSITIONS",
    "HierarchyStrategy",
    "InfiniteHierarchySelectionStrategy",
    "InfiniteHierarchyStrategy",
    "InfiniteLoopStrategy",
    "VisibilityStrategy",
]
