"""Headless per-frame controller: fractional position in, render states out.

Queries the strategy at ``floor(position)`` and ``floor(position) + 1`` and
diffs both snapshots against the previous frame. Rendering, layout, and
scroll-event capture belong to the host.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .diff import PreviousState, RenderState, diff_snapshots, previous_states
from .strategies.base import VisibilityStrategy
from .tree_model.types import PositionedItem

# Caps the host scroll extent to avoid overflow in very long lists.
MAX_SCROLL_EXTENT = 10_000_000


def viewport_slots_for(height: float, slot_height: float) -> int:
    """Number of slots needed to fill ``height``."""
    if slot_height <= 0:
        raise ValueError("slot_height must be > 0")
    return max(0, math.ceil(height / slot_height))


def split_position(position: float) -> tuple[int, int, float]:
    """Return ``(floor, ceil, t)``; ``ceil`` is always ``floor + 1``."""
    floor = math.floor(position)
    return floor, floor + 1, position - floor


@dataclass(frozen=True)
class Frame:
    position: float
    floor: int
    t: float
    items: tuple[RenderState, ...]

    @property
    def sticky_items(self) -> tuple[RenderState, ...]:
        return tuple(item for item in self.items if item.is_sticky)

    @property
    def scroll_items(self) -> tuple[RenderState, ...]:
        return tuple(item for item in self.items if not item.is_sticky)


class FrameBuilder:
    """Keeps the previous-frame cache and snapshot memo for one strategy."""

    def __init__(self, strategy: VisibilityStrategy, viewport_slots: int) -> None:
        self.strategy = strategy
        self.viewport_slots = viewport_slots
        self.previous: dict[str, PreviousState] = {}
        self._snapshots: dict[int, list[PositionedItem]] = {}

    def scroll_extent(self, slot_height: float) -> float:
        """Total scrollable extent in host units for ``slot_height`` slots."""
        return min(self.strategy.get_total_positions() * slot_height, MAX_SCROLL_EXTENT)

    def invalidate(self) -> None:
        """Drop memoized snapshots so the next frame re-reads the strategy."""
        self._snapshots.clear()

    def snapshot(self, position: int) -> list[PositionedItem]:
        cached = self._snapshots.get(position)
        if cached is None:
            cached = self.strategy.get_items_at_position(position, self.viewport_slots)
            self._snapshots[position] = cached
        return cached

    def frame(self, position: float) -> Frame:
        floor, ceil, t = split_position(position)
        # Only the current pair is worth keeping.
        for stale in [key for key in self._snapshots if key not in (floor, ceil)]:
            del self._snapshots[stale]
        items = diff_snapshots(self.snapshot(floor), self.snapshot(ceil), t, self.previous)
        self.previous = previous_states(items)
        return Frame(position=position, floor=floor, t=t, items=tuple(items))
