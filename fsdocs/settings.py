"""Persistent user settings.

Reads the sidecar file name, the Pygments style used for tooltips, and the
log level from a user-edited JSON file. All access is defensive: malformed or
missing settings fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "fsdocs"
SETTINGS_FILENAME = "settings.json"
SETTINGS_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / SETTINGS_FILENAME

DEFAULT_CONFIG_FILENAME = "fsdocs.config.json"
DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "WARNING"


def load_settings() -> dict[str, object]:
    """Load the persisted settings object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_nonempty_string(key: str) -> str | None:
    value = load_settings().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_config_filename() -> str:
    """Return the sidecar document name, rejecting values that contain a path."""
    value = _load_nonempty_string("config_filename")
    if value is None or Path(value).name != value:
        return DEFAULT_CONFIG_FILENAME
    return value


def load_style() -> str:
    return _load_nonempty_string("style") or DEFAULT_STYLE


def load_log_level() -> int:
    """Return the configured ``logging`` level, defaulting to ``WARNING``."""
    name = (_load_nonempty_string("log_level") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


__all__ = [
    "APP_NAME",
    "SETTINGS_PATH",
    "DEFAULT_CONFIG_FILENAME",
    "load_settings",
    "load_config_filename",
    "load_style",
    "load_log_level",
]
