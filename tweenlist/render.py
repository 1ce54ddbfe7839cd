"""Plain-text and JSON rendering of frames for the command line."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .diff import RenderState
from .frame import Frame
from .strategies.base import VisibilityStrategy
from .tree_model.types import NodeView

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STICKY = "\033[1;38;5;81m"
CHANGED = "\033[38;5;214m"
SELECTED = "\033[38;5;42m"

DEFAULT_STYLE = "monokai"


def _label_for(data: Any) -> tuple[str, int, bool]:
    """Return ``(label, depth, is_selected)`` for strategy item data."""
    if isinstance(data, NodeView):
        payload = data.data
        label = data.id
        if isinstance(payload, dict):
            label = str(payload.get("label") or payload.get("name") or data.id)
        return label, data.depth, data.is_selected
    if isinstance(data, dict):
        return str(data.get("label") or data.get("name") or data.get("id", "")), 0, False
    return str(data), 0, False


def _flags(state: RenderState) -> str:
    flags = []
    if state.is_sticky:
        flags.append("sticky")
    if state.is_appearing:
        flags.append("appearing")
    if state.is_disappearing:
        flags.append("disappearing")
    if state.is_moving:
        flags.append("moving")
    if state.has_changed:
        flags.append("changed")
    return ",".join(flags)


def format_frame_rows(frame: Frame, strategy: VisibilityStrategy, no_color: bool = False) -> list[str]:
    """One text row per render state, ordered by interpolated offset."""
    rows: list[str] = []
    for state in sorted(frame.items, key=lambda item: item.offset):
        label, depth, is_selected = _label_for(strategy.get_item_data(state.id))
        marker = "*" if is_selected else " "
        text = f"{state.offset:6.2f} {state.opacity:4.2f} {marker} {'  ' * depth}{label}"
        flags = _flags(state)
        if flags:
            text = f"{text}  [{flags}]"
        if not no_color:
            if state.is_sticky:
                text = f"{STICKY}{text}{RESET}"
            elif state.has_changed:
                text = f"{CHANGED}{text}{RESET}"
            elif is_selected:
                text = f"{SELECTED}{text}{RESET}"
            elif state.opacity < 1.0:
                text = f"{DIM}{text}{RESET}"
        rows.append(text)
    return rows


def frame_to_dict(frame: Frame) -> dict[str, object]:
    return {
        "position": frame.position,
        "floor": frame.floor,
        "t": frame.t,
        "items": [asdict(state) for state in frame.items],
    }


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def render_json(payload: object, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Pretty JSON, highlighted for terminals unless ``no_color``."""
    text = json.dumps(payload, indent=2) + "\n"
    if no_color:
        return text
    return highlight(text, JsonLexer(), TerminalFormatter(style=normalize_style(style)))
