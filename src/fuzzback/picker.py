"""Interactive fuzzy pickers: fzf (default) and a built-in Textual fallback."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from fuzzback.models import MatchResult

logger = logging.getLogger(__name__)


class Picker(Protocol):
    def pick(self, candidates: Sequence[str]) -> MatchResult | None: ...


def parse_picker_output(stdout: str) -> MatchResult | None:
    """Split ``--print-query`` output into query and selection.

    Anything short of a query line plus a non-empty selection line is a
    cancellation.
    """
    lines = stdout.split("\n")
    if len(lines) < 2 or not lines[1]:
        return None
    return MatchResult(query=lines[0], selection=lines[1])


class FzfPicker:
    """Runs fzf-tmux (or plain fzf) over the tagged candidates.

    Only the text after the ``<sign><distance>:`` tag is shown and matched;
    the tag rides along and comes back in the selected line.
    """

    def __init__(
        self,
        binary: str = "fzf-tmux",
        popup: bool = False,
        popup_size: str = "70%",
        layout: str | None = None,
        colors: str | None = None,
    ) -> None:
        self.binary = binary
        self.popup = popup
        self.popup_size = popup_size
        self.layout = layout
        self.colors = colors

    def command(self) -> list[str]:
        cmd = [self.binary]
        if self.popup and self.binary.endswith("fzf-tmux"):
            cmd += ["-p", self.popup_size]
        cmd += [
            "--delimiter=:",
            "--ansi",
            "--with-nth=2..",
            "--no-multi",
            "--no-sort",
            "--no-preview",
            "--print-query",
        ]
        if self.layout:
            cmd.append(f"--layout={self.layout}")
        if self.colors:
            cmd.append(f"--color={self.colors}")
        return cmd

    def pick(self, candidates: Sequence[str]) -> MatchResult | None:
        if not candidates:
            return None
        cmd = self.command()
        logger.debug("picker: %s (%d candidates)", cmd, len(candidates))
        proc = subprocess.run(
            cmd,
            input="\n".join(candidates) + "\n",
            stdout=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        # 1: no match, 130: aborted. Both are cancellations.
        if proc.returncode != 0:
            logger.debug("picker exited with %d", proc.returncode)
            return None
        return parse_picker_output(proc.stdout)


def _find_fzf() -> str | None:
    for name in ("fzf-tmux", "fzf"):
        path = shutil.which(name)
        if path:
            return path
    return None


def get_picker(config: dict) -> Picker:
    """Build the configured picker, using Textual when fzf is not installed."""
    if config.get("picker") != "textual":
        binary = _find_fzf()
        if binary is not None:
            return FzfPicker(
                binary=binary,
                popup=bool(config.get("popup")),
                popup_size=config.get("popup_size") or "70%",
                layout=config.get("fzf_layout"),
                colors=config.get("fzf_colors"),
            )
        logger.info("fzf not found on PATH, using the built-in picker")

    from fuzzback.app import TextualPicker

    return TextualPicker()
