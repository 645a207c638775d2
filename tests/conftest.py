from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture()
def tmp_runtime_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from fuzzback import paths

    runtime_dir = tmp_path / "runtime" / "fuzzback"
    monkeypatch.setattr(paths, "RUNTIME_DIR", runtime_dir)
    return runtime_dir


@pytest.fixture()
def tmp_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from fuzzback import config

    config_dir = tmp_path / "config" / "fuzzback"
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.json")
    monkeypatch.setattr(config, "LOG_FILE", tmp_path / "cache" / "fuzzback" / "fuzzback.log")
    return config_dir


@pytest.fixture()
def fuzzback_logger():
    """Restore the package logger after tests that configure it."""
    logger = logging.getLogger("fuzzback")
    saved = (list(logger.handlers), logger.propagate, logger.level)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.propagate = saved[1]
    logger.setLevel(saved[2])
