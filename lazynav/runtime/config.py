"""Persistent JSON config helpers.

Stores the backend URL, request and cache tuning, the UI theme, and the last
visited path. Missing or malformed values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..tree_path import normalize_path

log = logging.getLogger(__name__)

APP_NAME = "lazynav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_API_URL = "http://localhost:3000/api"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_DETAIL_SCROLL_STEP = 5
DEFAULT_DOUBLE_CLICK_SECONDS = 0.35


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        log.debug(f"Ignoring unreadable config {CONFIG_PATH}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; failures are logged, not raised."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        log.debug(f"Could not write config {CONFIG_PATH}: {e}")


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def load_api_url() -> str:
    return _nonempty_str(load_config().get("api_url")) or DEFAULT_API_URL


def load_request_timeout() -> float:
    value = _positive_number(load_config().get("request_timeout"))
    return value if value is not None else DEFAULT_REQUEST_TIMEOUT


def load_detail_scroll_step() -> int:
    return _positive_int(load_config().get("detail_scroll_step")) or DEFAULT_DETAIL_SCROLL_STEP


def load_max_cached_paths() -> int | None:
    """Upper bound on cached listings; ``None`` keeps everything."""
    return _positive_int(load_config().get("max_cached_paths"))


def load_double_click_seconds() -> float:
    value = _positive_number(load_config().get("double_click_seconds"))
    return value if value is not None else DEFAULT_DOUBLE_CLICK_SECONDS


def load_theme_name() -> str | None:
    return _nonempty_str(load_config().get("theme"))


def load_last_path() -> str | None:
    """Path open when the previous session exited, ``None`` for the root."""
    value = load_config().get("last_path")
    if not isinstance(value, str):
        return None
    return normalize_path(value) or None


def save_last_path(path: str | None) -> None:
    config = load_config()
    key = normalize_path(path)
    if key:
        config["last_path"] = key
    else:
        config.pop("last_path", None)
    save_config(config)


@dataclass(frozen=True)
class NavigatorSettings:
    """Effective runtime settings: config file values with CLI overrides applied."""

    api_url: str = DEFAULT_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    detail_scroll_step: int = DEFAULT_DETAIL_SCROLL_STEP
    max_cached_paths: int | None = None
    double_click_seconds: float = DEFAULT_DOUBLE_CLICK_SECONDS
    theme_name: str | None = None

    @classmethod
    def resolve(
        cls,
        *,
        api_url: str | None = None,
        request_timeout: float | None = None,
        max_cached_paths: int | None = None,
        theme_name: str | None = None,
    ) -> NavigatorSettings:
        return cls(
            api_url=api_url or load_api_url(),
            request_timeout=request_timeout if request_timeout is not None else load_request_timeout(),
            detail_scroll_step=load_detail_scroll_step(),
            max_cached_paths=max_cached_paths if max_cached_paths is not None else load_max_cached_paths(),
            double_click_seconds=load_double_click_seconds(),
            theme_name=theme_name or load_theme_name(),
        )
