"""XDG Base Directory paths for fuzzback."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def _xdg_cache_home() -> Path:
    val = os.environ.get("XDG_CACHE_HOME", "")
    if val and Path(val).is_absolute():
        return Path(val)
    return Path.home() / ".cache"


def _xdg_config_home() -> Path:
    val = os.environ.get("XDG_CONFIG_HOME", "")
    if val and Path(val).is_absolute():
        return Path(val)
    return Path.home() / ".config"


def _runtime_dir() -> Path:
    """Per-user scratch area for capture files.

    ``$XDG_RUNTIME_DIR`` is already private to the user; the system temp
    directory is shared, so the uid goes into the name there.
    """
    val = os.environ.get("XDG_RUNTIME_DIR", "")
    if val and Path(val).is_absolute():
        return Path(val) / "fuzzback"
    return Path(tempfile.gettempdir()) / f"fuzzback-{os.getuid()}"


CACHE_DIR = _xdg_cache_home() / "fuzzback"
CONFIG_DIR = _xdg_config_home() / "fuzzback"
RUNTIME_DIR = _runtime_dir()
