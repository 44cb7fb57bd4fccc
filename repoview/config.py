"""Persistent JSON config helpers.

Stores the hidden-file preference, theme choice, status poll interval and the
syntax-highlight line budget. All access is defensive: malformed or missing
config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from platformdirs import user_config_dir

from .limits import DEFAULT_SYNTAX_MAX_LINES, STATUS_POLL_SECONDS

APP_NAME = "repoview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    """Effective settings for one session."""

    show_hidden: bool = False
    dark_theme: bool = True
    status_poll_seconds: float = STATUS_POLL_SECONDS
    syntax_max_lines: int = DEFAULT_SYNTAX_MAX_LINES


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning(f"Ignoring unreadable config {CONFIG_PATH}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    directory never breaks the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError) as exc:
        logger.warning(f"Could not save config to {CONFIG_PATH}: {exc}")


def _load_bool(key: str, default: bool) -> bool:
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    return _load_bool("show_hidden", False)


def save_show_hidden(show_hidden: bool) -> None:
    _save_value("show_hidden", bool(show_hidden))


def load_dark_theme() -> bool:
    return _load_bool("dark_theme", True)


def save_dark_theme(dark_theme: bool) -> None:
    _save_value("dark_theme", bool(dark_theme))


def load_status_poll_seconds() -> float:
    """Return the status poll interval; non-positive or non-numeric values use the default."""
    value = load_config().get("status_poll_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return STATUS_POLL_SECONDS
    return float(value)


def load_syntax_max_lines() -> int:
    value = load_config().get("syntax_max_lines")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_SYNTAX_MAX_LINES
    return value


def load_settings() -> Settings:
    return Settings(
        show_hidden=load_show_hidden(),
        dark_theme=load_dark_theme(),
        status_poll_seconds=load_status_poll_seconds(),
        syntax_max_lines=load_syntax_max_lines(),
    )


__all__ = [
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "load_dark_theme",
    "load_settings",
    "load_show_hidden",
    "load_status_poll_seconds",
    "load_syntax_max_lines",
    "save_config",
    "save_dark_theme",
    "save_show_hidden",
]
