"""Persistent JSON config helpers.

Holds the tab stop width, status-message lifetime, and escape-sequence
timeout. Access is defensive: a missing or malformed file, or any
out-of-range value, falls back to the built-in default.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from .input import ESC_SEQUENCE_TIMEOUT_MS
from .rows import TAB_STOP
from .state import STATUS_MESSAGE_SECONDS

logger = structlog.get_logger()

CONFIG_PATH = Path.home() / ".config" / "picoview.json"
CONFIG_PATH_ENV = "PICOVIEW_CONFIG"


@dataclass(frozen=True)
class ViewerConfig:
    tab_stop: int = TAB_STOP
    status_message_seconds: float = STATUS_MESSAGE_SECONDS
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS


def config_path() -> Path:
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override).expanduser() if override else CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("config_unreadable", path=str(path), error=str(exc))
        return {}
    if not isinstance(data, dict):
        logger.warning("config_not_an_object", path=str(path))
        return {}
    return data


def _bounded_int(data: dict[str, object], key: str, default: int, low: int, high: int) -> int:
    """Read an integer in ``[low, high]``; booleans and other types are rejected."""
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        logger.warning("config_value_ignored", key=key, value=value)
        return default
    return value


def _positive_number(data: dict[str, object], key: str, default: float) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.warning("config_value_ignored", key=key, value=value)
        return default
    return float(value)


def load_viewer_config() -> ViewerConfig:
    data = load_config()
    return ViewerConfig(
        tab_stop=_bounded_int(data, "tab_stop", TAB_STOP, 1, 32),
        status_message_seconds=_positive_number(data, "status_message_seconds", STATUS_MESSAGE_SECONDS),
        escape_timeout_ms=_bounded_int(data, "escape_timeout_ms", ESC_SEQUENCE_TIMEOUT_MS, 1, 1000),
    )
