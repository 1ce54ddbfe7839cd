"""Visibility-strategy contract shared by every list strategy."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..tree_model.types import PositionedItem

# Large enough for bidirectional infinite scrolling, small enough to keep the
# scroll extent within typical host limits (100_000 * 50px = 5_000_000px).
DEFAULT_TOTAL_POSITIONS = 100_000


@runtime_checkable
class VisibilityStrategy(Protocol):
    """Decides which items occupy which viewport slot at a discrete position."""

    def get_items_at_position(self, position: int, viewport_slots: int) -> list[PositionedItem]:
        """Items ordered by offset ``0..viewport_slots-1``; empty iff the source is empty."""
        ...

    def get_item_data(self, item_id: str) -> Any:
        """Renderable data for ``item_id``; raises ``ItemNotFoundError`` when unknown."""
        ...

    def get_total_positions(self) -> int:
        ...

    def get_initial_position(self) -> int:
        ...
