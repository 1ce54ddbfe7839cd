"""Exception types raised by strategies and the sticky resolver."""

from __future__ import annotations


class TweenListError(Exception):
    """Base class for tweenlist failures."""


class ItemNotFoundError(TweenListError, LookupError):
    """Raised when an id (or the original id derived from it) is unknown."""

    def __init__(self, item_id: str, derived_from: str | None = None) -> None:
        self.item_id = item_id
        self.derived_from = derived_from
        if derived_from is not None and derived_from != item_id:
            message = f'Item with id "{item_id}" (derived from "{derived_from}") not found'
        else:
            message = f'Item with id "{item_id}" not found'
        super().__init__(message)


class StickyResolutionError(TweenListError, RuntimeError):
    """Raised when sticky-header convergence exceeds its iteration cap.

    Only malformed input (for example cyclic ``parents`` chains supplied
    through flat records) can trigger this.
    """
