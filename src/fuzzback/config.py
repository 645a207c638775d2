"""User configuration: defaults, then config.json, then tmux options."""

from __future__ import annotations

import json
import logging

from fuzzback.paths import CACHE_DIR, CONFIG_DIR

CONFIG_FILE = CONFIG_DIR / "config.json"
LOG_FILE = CACHE_DIR / "fuzzback.log"

DEFAULT_CONFIG = {
    "picker": "fzf",
    "popup": False,
    "popup_size": "70%",
    "fzf_layout": None,
    "fzf_colors": None,
    "debug": False,
}

TMUX_OPTIONS = {
    "picker": "@fuzzback-picker",
    "popup": "@fuzzback-popup",
    "popup_size": "@fuzzback-popup-size",
    "fzf_layout": "@fuzzback-fzf-layout",
    "fzf_colors": "@fuzzback-fzf-colors",
    "debug": "@fuzzback-debug",
}

_VALID_PICKERS = {"fzf", "textual"}
_VALID_LAYOUTS = {None, "default", "reverse", "reverse-list"}
_BOOL_KEYS = ("popup", "debug")
_TRUE = {"1", "true", "on", "yes"}
_FALSE = {"0", "false", "off", "no", ""}


def _normalize_config(data: object, base: dict | None = None) -> dict:
    """Overlay the valid keys of *data* on *base* (defaults when None)."""
    config = dict(base if base is not None else DEFAULT_CONFIG)
    if not isinstance(data, dict):
        return config

    picker = data.get("picker")
    if picker in _VALID_PICKERS:
        config["picker"] = picker

    layout = data.get("fzf_layout")
    if layout in _VALID_LAYOUTS and "fzf_layout" in data:
        config["fzf_layout"] = layout

    for key in ("popup_size", "fzf_colors"):
        value = data.get(key)
        if isinstance(value, str) and value:
            config[key] = value

    for key in _BOOL_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            config[key] = value

    return config


def _parse_bool(raw: str) -> bool | None:
    low = raw.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    return None


def options_from_tmux(options: dict[str, str]) -> dict:
    """Pick ``@fuzzback-*`` values out of ``show-options -g`` output."""
    data: dict = {}
    for key, opt in TMUX_OPTIONS.items():
        if opt not in options:
            continue
        raw = options[opt]
        if key in _BOOL_KEYS:
            parsed = _parse_bool(raw)
            if parsed is not None:
                data[key] = parsed
        else:
            data[key] = raw
    return data


def load_config_file() -> dict:
    """Load config.json, returning defaults for missing/corrupt data."""
    if not CONFIG_FILE.is_file():
        return dict(DEFAULT_CONFIG)
    try:
        with open(CONFIG_FILE) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        return dict(DEFAULT_CONFIG)
    return _normalize_config(data)


def load_config(tmux_options: dict[str, str] | None = None) -> dict:
    config = load_config_file()
    if tmux_options:
        config = _normalize_config(options_from_tmux(tmux_options), base=config)
    return config


def setup_logging(debug: bool) -> None:
    """Send log records to LOG_FILE when debugging, otherwise drop them.

    Safe to call twice: once silent before any tmux call, then again with
    the configured debug flag.
    """
    root = logging.getLogger("fuzzback")
    root.propagate = False
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    if not debug:
        return

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(LOG_FILE)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
