"""Selected-id state with a subscription channel for change notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

SelectionListener = Callable[[frozenset[str]], None]


class SelectionSet:
    """Original (non-composite) ids marked selected.

    Listeners receive a frozen copy after every mutation made through
    ``select``/``deselect``/``toggle``. Iteration follows insertion order.
    """

    def __init__(self) -> None:
        self._ids: dict[str, None] = {}
        self._listeners: list[SelectionListener] = []

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._ids)

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, item_id: str) -> None:
        self._ids[item_id] = None
        self._notify()

    def deselect(self, item_id: str) -> None:
        self._ids.pop(item_id, None)
        self._notify()

    def toggle(self, item_id: str) -> bool:
        """Flip ``item_id`` and return whether it is now selected."""
        if item_id in self._ids:
            del self._ids[item_id]
            selected = False
        else:
            self._ids[item_id] = None
            selected = True
        self._notify()
        return selected

    @contextmanager
    def suspended(self, item_id: str) -> Iterator[None]:
        """Temporarily drop ``item_id`` without notifying, restoring it on exit."""
        was_selected = item_id in self._ids
        if not was_selected:
            yield
            return
        # Re-insert at the original position so iteration order is unchanged.
        order = list(self._ids)
        del self._ids[item_id]
        try:
            yield
        finally:
            self._ids = dict.fromkeys(order)

    def _notify(self) -> None:
        current = self.snapshot()
        logger.debug("selection changed: %d selected", len(current))
        for listener in list(self._listeners):
            listener(current)
