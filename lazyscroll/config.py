"""Persistent JSON config helpers.

Stores viewer preferences: wrap/line-number defaults, UI theme, and the
syntax highlighting style. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .viewport import ViewportOptions

logger = logging.getLogger(__name__)

APP_NAME = "lazyscroll"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


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
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks the viewer.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_viewport_options(default: ViewportOptions | None = None) -> ViewportOptions:
    """Return persisted wrap/number preferences layered over ``default``.

    Only explicit booleans are honored; anything else keeps the default.
    """
    base = default or ViewportOptions()
    data = load_config()
    return ViewportOptions(
        wrap=_load_bool(data, "wrap", base.wrap),
        number=_load_bool(data, "number", base.number),
    )


def save_viewport_options(options: ViewportOptions) -> None:
    """Persist wrap/number preferences."""
    config = load_config()
    config["wrap"] = bool(options.wrap)
    config["number"] = bool(options.number)
    save_config(config)


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_name(key: str, name: str) -> None:
    stripped = str(name).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def save_theme_name(theme_name: str) -> None:
    _save_name("theme", theme_name)


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    return _load_name("style")


def save_style_name(style_name: str) -> None:
    _save_name("style", style_name)
