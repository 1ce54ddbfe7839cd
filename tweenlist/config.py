"""Persistent JSON config helpers.

Stores CLI defaults: scroll range, viewport slot count, and Pygments style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "tweenlist"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config directory never
    breaks the CLI.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_positive_int(key: str) -> int | None:
    """Read a strictly positive integer; booleans and other types are rejected."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_total_positions() -> int | None:
    return _load_positive_int("total_positions")


def save_total_positions(total_positions: int) -> None:
    _save_value("total_positions", max(1, int(total_positions)))


def load_viewport_slots() -> int | None:
    return _load_positive_int("viewport_slots")


def save_viewport_slots(viewport_slots: int) -> None:
    _save_value("viewport_slots", max(1, int(viewport_slots)))


def load_pygments_style() -> str | None:
    """Return the persisted Pygments style name, if a non-empty string."""
    value = load_config().get("pygments_style")
    return value if isinstance(value, str) and value else None


def save_pygments_style(style: str) -> None:
    _save_value("pygments_style", str(style))
