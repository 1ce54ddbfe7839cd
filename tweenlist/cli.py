"""Command-line front door for tweenlist.

Loads a JSON tree (or flat item list), builds a visibility strategy, and
prints the interpolated frame at one or more fractional scroll positions.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import config
from .errors import TweenListError
from .frame import FrameBuilder
from .render import DEFAULT_STYLE, format_frame_rows, frame_to_dict, render_json
from .strategies import (
    DEFAULT_TOTAL_POSITIONS,
    HierarchyStrategy,
    InfiniteHierarchySelectionStrategy,
    InfiniteHierarchyStrategy,
    InfiniteLoopStrategy,
)

STRATEGY_NAMES = ("loop", "hierarchy", "infinite", "selection")
DEFAULT_VIEWPORT_SLOTS = 10


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def load_items(path: Path) -> list[Any]:
    """Read a top-level JSON list of items (nested nodes or flat records)."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        data = data["items"]
    if not isinstance(data, list):
        raise SystemExit(f"Expected a JSON list of items in {path}")
    return data


def _is_flat_records(items: list[Any]) -> bool:
    return bool(items) and all(isinstance(item, dict) and "parents" in item for item in items)


def build_strategy(name: str, items: list[Any], total_positions: int):
    """Construct the named strategy over ``items``."""
    if name == "loop":
        return InfiniteLoopStrategy(items, total_positions=total_positions)
    if name == "hierarchy":
        return HierarchyStrategy.from_tree(items)
    cls = InfiniteHierarchySelectionStrategy if name == "selection" else InfiniteHierarchyStrategy
    if _is_flat_records(items):
        return cls.from_flat(items, total_positions=total_positions)
    return cls.from_tree(items, total_positions=total_positions)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print frames for the requested positions."""
    parser = argparse.ArgumentParser(
        description="Show which items a tweenlist strategy places in each viewport slot."
    )
    parser.add_argument("path", help="JSON file with a list of tree nodes or flat records.")
    parser.add_argument("--strategy", choices=STRATEGY_NAMES, default="infinite", help="Visibility strategy.")
    parser.add_argument(
        "--position",
        type=float,
        default=None,
        help="Fractional scroll position (default: strategy initial position).",
    )
    parser.add_argument("--slots", type=_positive_int, default=None, help="Viewport slot count.")
    parser.add_argument("--total-positions", type=_positive_int, default=None, help="Scroll range for infinite strategies.")
    parser.add_argument("--select", action="append", default=[], metavar="ID", help="Select an item (selection strategy).")
    parser.add_argument("--frames", type=_positive_int, default=1, help="Number of frames to print.")
    parser.add_argument("--step", type=float, default=0.25, help="Position advance between frames.")
    parser.add_argument("--json", action="store_true", help="Print frames as JSON.")
    parser.add_argument("--style", default=None, help="Pygments style name for --json output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist --slots/--total-positions/--style.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log resolver decisions to stderr.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if args.select and args.strategy != "selection":
        raise SystemExit("--select requires --strategy selection.")

    total_positions = args.total_positions or config.load_total_positions() or DEFAULT_TOTAL_POSITIONS
    viewport_slots = args.slots or config.load_viewport_slots() or DEFAULT_VIEWPORT_SLOTS
    style = args.style or config.load_pygments_style() or DEFAULT_STYLE
    if args.save_defaults:
        if args.slots is not None:
            config.save_viewport_slots(args.slots)
        if args.total_positions is not None:
            config.save_total_positions(args.total_positions)
        if args.style is not None:
            config.save_pygments_style(args.style)

    no_color = args.no_color or not sys.stdout.isatty()
    strategy = build_strategy(args.strategy, load_items(path), total_positions)
    for item_id in args.select:
        strategy.select(item_id)

    builder = FrameBuilder(strategy, viewport_slots)
    position = args.position if args.position is not None else float(strategy.get_initial_position())
    try:
        frames = [builder.frame(position + step * args.step) for step in range(args.frames)]
        if args.json:
            payload: object = [frame_to_dict(frame) for frame in frames]
            if len(frames) == 1:
                payload = frame_to_dict(frames[0])
            sys.stdout.write(render_json(payload, style=style, no_color=no_color))
            return
        for number, frame in enumerate(frames):
            if number:
                sys.stdout.write("\n")
            sys.stdout.write(f"position {frame.position:g}\n")
            for row in format_frame_rows(frame, strategy, no_color=no_color):
                sys.stdout.write(row + "\n")
    except TweenListError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
