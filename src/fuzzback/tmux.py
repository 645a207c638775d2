"""Thin wrapper over the tmux binary: capture, cursor queries, copy mode."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from fuzzback.models import CopyModeCommand, CursorStart

logger = logging.getLogger(__name__)

MIN_VERSION = (2, 4)

_VERSION_RE = re.compile(r"(\d+)\.(\d+)")


class TmuxError(RuntimeError):
    """A tmux command exited with a non-zero status."""


def parse_version(output: str) -> tuple[int, int] | None:
    """``"tmux 3.3a"`` -> ``(3, 3)``; None when no version number is present."""
    m = _VERSION_RE.search(output)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2))


def is_supported(version: str, minimum: tuple[int, int] = MIN_VERSION) -> bool:
    """Check ``tmux -V`` output against *minimum*.

    Builds without a release number (``tmux master``) are newer than any
    release, so they pass.
    """
    parsed = parse_version(version)
    if parsed is None:
        return True
    return parsed >= minimum


class Tmux:
    """Commands against one pane (*target*), or the current pane if None."""

    def __init__(self, target: str | None = None, binary: str = "tmux") -> None:
        self.target = target
        self.binary = binary

    def _target_args(self) -> list[str]:
        return ["-t", self.target] if self.target else []

    def run(self, *args: str, stdout=None) -> str:
        cmd = [self.binary, *args]
        logger.debug("tmux: %s", cmd)
        proc = subprocess.run(
            cmd,
            stdout=stdout if stdout is not None else subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        if proc.returncode != 0:
            err = (proc.stderr or "").strip()
            logger.error("tmux %s failed (%d): %s", args[0], proc.returncode, err)
            raise TmuxError(f"tmux {args[0]} failed: {err or proc.returncode}")
        return proc.stdout or ""

    def display(self, fmt: str) -> str:
        return self.run("display-message", *self._target_args(), "-p", fmt).strip()

    def version(self) -> str:
        return self.run("-V").strip()

    def capture(self, dest: Path) -> None:
        """Write the whole scrollback, escape sequences included, to *dest*."""
        with open(dest, "w") as f:
            self.run("capture-pane", *self._target_args(), "-e", "-p", "-S", "-", stdout=f)

    def cursor_start(self) -> CursorStart:
        out = self.display("#{cursor_y} #{pane_height}")
        try:
            row, height = out.split()
            return CursorStart(row=int(row), height=int(height))
        except ValueError as e:
            raise TmuxError(f"unexpected cursor position: {out!r}") from e

    def show_options(self) -> dict[str, str]:
        """Global options as a flat ``{name: value}`` dict, quotes removed."""
        options: dict[str, str] = {}
        for line in self.run("show-options", "-g").splitlines():
            if " " not in line:
                continue
            key, value = line.split(" ", 1)
            options[key] = value.strip().strip('"')
        return options

    def enter_copy_mode(self) -> None:
        # Leave any copy mode that is already running so the cursor starts
        # from the live pane position.
        self.exit_copy_mode()
        self.run("copy-mode", *self._target_args())

    def exit_copy_mode(self) -> None:
        self.run("copy-mode", *self._target_args(), "-q")

    def send_copy_mode(self, command: CopyModeCommand) -> None:
        self.run("send-keys", *self._target_args(), *command.args())
