"""Snapshot interpolation between adjacent discrete scroll positions.

Compares two snapshots for scroll interpolation (floor vs ceil) and the
previous frame's states for change detection, producing one ``RenderState``
per id.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .tree_model.types import PositionedItem


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation; ``t`` ranges from 0.0 to 1.0."""
    return start + (end - start) * t


@dataclass(frozen=True)
class PreviousState:
    """What the previous frame knew about one id."""

    offset: float
    index: int | None = None
    version: int | None = None


@dataclass(frozen=True)
class RenderState:
    """Interpolated per-item state handed to renderers."""

    id: str
    offset: float
    opacity: float
    index: int | None = None
    is_appearing: bool = False
    is_disappearing: bool = False
    is_moving: bool = False
    has_changed: bool = False
    is_sticky: bool = False
    version: int | None = None


def diff_snapshots(
    items_at_floor: Iterable[PositionedItem],
    items_at_ceil: Iterable[PositionedItem],
    t: float,
    previous: Mapping[str, PreviousState],
) -> list[RenderState]:
    """Interpolate every id present in either snapshot.

    Ids in both snapshots lerp their offset and stay opaque; ids only at the
    floor slide up one slot and fade out; ids only at the ceil slide in from
    one slot below and fade in.
    """
    floor_map = {item.id: item for item in items_at_floor}
    ceil_map = {item.id: item for item in items_at_ceil}
    all_ids = list(floor_map)
    all_ids.extend(item_id for item_id in ceil_map if item_id not in floor_map)

    result: list[RenderState] = []
    for item_id in all_ids:
        at_floor = floor_map.get(item_id)
        at_ceil = ceil_map.get(item_id)

        if at_floor is not None and at_ceil is not None:
            prev = previous.get(item_id)
            is_moving = False
            has_changed = False
            if prev is not None:
                if at_floor.index is not None and prev.index is not None:
                    is_moving = prev.index != at_floor.index
                else:
                    is_moving = prev.offset != at_floor.offset
                if prev.version is not None and at_floor.version is not None:
                    has_changed = prev.version != at_floor.version
            result.append(
                RenderState(
                    id=item_id,
                    offset=lerp(at_floor.offset, at_ceil.offset, t),
                    opacity=1.0,
                    index=at_floor.index,
                    is_appearing=prev is None,
                    is_moving=is_moving,
                    has_changed=has_changed,
                    # A pinned header keeps its slot whatever the scroll delta.
                    is_sticky=at_floor.offset == at_ceil.offset,
                    version=at_floor.version,
                )
            )
        elif at_floor is not None:
            result.append(
                RenderState(
                    id=item_id,
                    offset=lerp(at_floor.offset, at_floor.offset - 1, t),
                    opacity=1.0 - t,
                    index=at_floor.index,
                    is_disappearing=True,
                    version=at_floor.version,
                )
            )
        elif at_ceil is not None:
            result.append(
                RenderState(
                    id=item_id,
                    offset=lerp(at_ceil.offset + 1, at_ceil.offset, t),
                    opacity=t,
                    index=at_ceil.index,
                    is_appearing=True,
                    version=at_ceil.version,
                )
            )
    return result


def previous_states(states: Iterable[RenderState]) -> dict[str, PreviousState]:
    """Per-id cache to pass as ``previous`` when diffing the next frame."""
    return {
        state.id: PreviousState(offset=state.offset, index=state.index, version=state.version)
        for state in states
    }
