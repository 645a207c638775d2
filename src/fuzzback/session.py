"""One fuzzback run: capture -> segment -> pick -> resolve -> navigate.

All intermediate files live in a private directory owned by
``ScrollbackSession`` and are removed when the ``with`` block exits,
whether the run finished, was cancelled or raised.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from fuzzback import navigate, paths
from fuzzback.models import CursorStart, SessionState
from fuzzback.picker import Picker
from fuzzback.resolve import resolve_match
from fuzzback.segment import Segments, split_capture
from fuzzback.tmux import Tmux, TmuxError

logger = logging.getLogger(__name__)


def _split_lines(text: str) -> list[str]:
    # Only \n separates records; captured text may hold other control chars.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class ScrollbackSession:
    """Session-scoped scratch files for a single invocation."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir
        self.dir: Path | None = None
        self.state = SessionState.IDLE

    def __enter__(self) -> ScrollbackSession:
        base = self.base_dir or paths.RUNTIME_DIR
        base.mkdir(parents=True, exist_ok=True)
        os.chmod(base, 0o700)
        self.dir = Path(tempfile.mkdtemp(prefix="session-", dir=base))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.dir is not None:
            shutil.rmtree(self.dir, ignore_errors=True)
            self.dir = None
        return False

    def _path(self, name: str) -> Path:
        if self.dir is None:
            raise RuntimeError("ScrollbackSession used outside of a with block")
        return self.dir / name

    @property
    def capture_file(self) -> Path:
        return self._path("capture.txt")

    @property
    def head_file(self) -> Path:
        return self._path("head.txt")

    @property
    def tail_file(self) -> Path:
        return self._path("tail.txt")

    def read_capture(self) -> list[str]:
        # Invalid UTF-8 reads as U+FFFD.
        with open(self.capture_file, encoding="utf-8", errors="replace", newline="") as f:
            return _split_lines(f.read())

    def write_segments(self, segments: Segments) -> None:
        for path, lines in ((self.head_file, segments.head), (self.tail_file, segments.tail)):
            with open(path, "w", encoding="utf-8", newline="") as f:
                for line in lines:
                    f.write(line.render() + "\n")

    def read_candidates(self) -> list[str]:
        """Tail then head, exactly as written."""
        out: list[str] = []
        for path in (self.tail_file, self.head_file):
            with open(path, encoding="utf-8", newline="") as f:
                out.extend(_split_lines(f.read()))
        return out


def run_fuzzback(tmux: Tmux, picker: Picker, base_dir: Path | None = None) -> SessionState:
    """Run one search and return the state the session finished in."""
    with ScrollbackSession(base_dir) as session:
        tmux.capture(session.capture_file)
        start: CursorStart = tmux.cursor_start()
        lines = session.read_capture()
        session.state = SessionState.CAPTURED
        logger.debug("captured %d lines, start %s", len(lines), start)

        segments = split_capture(lines, start)
        session.write_segments(segments)
        session.state = SessionState.SEGMENTED

        match = picker.pick(session.read_candidates())
        if match is None:
            logger.debug("picker cancelled")
            session.state = SessionState.CANCELLED
            return session.state
        session.state = SessionState.PICKED

        try:
            target = resolve_match(match)
        except ValueError:
            logger.warning("unrecognised selection %r", match.selection)
            session.state = SessionState.CANCELLED
            return session.state
        session.state = SessionState.RESOLVED
        logger.debug("query %r resolved to %s", match.query, target)

        limit = navigate.max_jump(segments.max_lines, start.height)
        tmux.enter_copy_mode()
        try:
            navigate.navigate(tmux, target, limit, start.height)
        except TmuxError:
            tmux.exit_copy_mode()
            raise
        session.state = SessionState.NAVIGATED
        return session.state
