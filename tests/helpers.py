from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from fuzzback.models import CopyModeCommand, CursorStart, MatchResult
from fuzzback.tmux import TmuxError


def make_capture(n: int) -> list[str]:
    """Numbered lines, oldest first: ``line 1`` .. ``line n``."""
    return [f"line {i}" for i in range(1, n + 1)]


class FakeTmux:
    """Records copy-mode traffic instead of talking to a tmux server."""

    def __init__(
        self,
        lines: list[str],
        row: int,
        height: int,
        fail_on: str | None = None,
    ) -> None:
        self.lines = lines
        self.start = CursorStart(row=row, height=height)
        self.fail_on = fail_on
        self.commands: list[CopyModeCommand] = []
        self.events: list[str] = []

    def capture(self, dest: Path) -> None:
        self.events.append("capture")
        dest.write_text("".join(line + "\n" for line in self.lines))

    def cursor_start(self) -> CursorStart:
        return self.start

    def enter_copy_mode(self) -> None:
        self.events.append("enter")

    def exit_copy_mode(self) -> None:
        self.events.append("exit")

    def send_copy_mode(self, command: CopyModeCommand) -> None:
        if command.name == self.fail_on:
            raise TmuxError(f"{command.name} failed")
        self.commands.append(command)


class FakePicker:
    """Returns a canned result, or picks by a predicate over the candidates."""

    def __init__(self, query: str = "", choose=None) -> None:
        self.query = query
        self.choose = choose
        self.seen: list[str] | None = None

    def pick(self, candidates: Sequence[str]) -> MatchResult | None:
        self.seen = list(candidates)
        if self.choose is None:
            return None
        for candidate in candidates:
            if self.choose(candidate):
                return MatchResult(query=self.query, selection=candidate)
        return None
