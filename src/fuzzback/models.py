"""Data models for fuzzback."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    # Value is the sign written in front of a tagged line's distance.
    FORWARD = 1
    BACKWARD = -1


class SessionState(Enum):
    IDLE = "idle"
    CAPTURED = "captured"
    SEGMENTED = "segmented"
    PICKED = "picked"
    RESOLVED = "resolved"
    NAVIGATED = "navigated"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SignedOffset:
    """A distance from the start row, tagged with the direction to travel."""

    direction: Direction
    distance: int

    def __str__(self) -> str:
        return str(self.direction.value * self.distance)

    @classmethod
    def parse(cls, tag: str) -> SignedOffset:
        """Parse ``"5"`` / ``"-5"`` back into an offset.

        Raises ValueError for anything that is not a non-zero integer.
        """
        value = int(tag.strip())
        if value == 0:
            raise ValueError(f"Offset tag must be non-zero: {tag!r}")
        direction = Direction.FORWARD if value > 0 else Direction.BACKWARD
        return cls(direction=direction, distance=abs(value))


@dataclass(frozen=True)
class TaggedLine:
    offset: SignedOffset
    text: str

    def render(self) -> str:
        return f"{self.offset}:{self.text}"

    @classmethod
    def parse(cls, line: str) -> TaggedLine:
        """Split a rendered line on its first ``:`` only."""
        tag, sep, text = line.partition(":")
        if not sep:
            raise ValueError(f"Missing offset tag: {line!r}")
        return cls(offset=SignedOffset.parse(tag), text=text)


@dataclass(frozen=True)
class CursorStart:
    row: int  # cursor_y within the visible viewport
    height: int


@dataclass(frozen=True)
class MatchResult:
    query: str
    selection: str  # rendered TaggedLine as returned by the picker


@dataclass(frozen=True)
class ResolvedTarget:
    direction: Direction
    line: int  # 0-based copy-mode line offset; 0 is the start row itself
    column: int


@dataclass(frozen=True)
class JumpPlan:
    goto_line: int
    correction: int = 0  # rows to move after goto-line; > 0 up, < 0 down
    padding: int = 0  # centering rows, down then up


@dataclass(frozen=True)
class CopyModeCommand:
    """One ``send-keys -X`` command, optionally repeated with ``-N``."""

    name: str
    repeat: int | None = None
    argument: str | None = None

    def args(self) -> list[str]:
        out = ["-X"]
        if self.repeat is not None:
            out += ["-N", str(self.repeat)]
        out.append(self.name)
        if self.argument is not None:
            out.append(self.argument)
        return out
