"""Split a scrollback capture into head and tail segments around the cursor."""

from __future__ import annotations

from dataclasses import dataclass, field

from fuzzback.models import CursorStart, Direction, SignedOffset, TaggedLine


@dataclass
class Segments:
    # Both lists are ordered nearest-to-start first.
    head: list[TaggedLine] = field(default_factory=list)
    tail: list[TaggedLine] = field(default_factory=list)

    @property
    def max_lines(self) -> int:
        """Line count used to compute the highest goto-line target."""
        return len(self.head)

    def candidates(self) -> list[str]:
        """Rendered picker input: tail first, then head."""
        return [line.render() for line in self.tail + self.head]


def _tag(lines: list[str], direction: Direction) -> list[TaggedLine]:
    return [
        TaggedLine(SignedOffset(direction, distance), text)
        for distance, text in enumerate(lines, start=1)
    ]


def split_counts(total: int, start: CursorStart) -> tuple[int, int]:
    """Return ``(head_count, tail_count)`` for a capture of *total* lines.

    The head includes the start row itself. Counts are clamped so that both
    are non-negative and always add up to *total*.
    """
    tail_count = (start.height - start.row) - 1
    tail_count = max(0, min(tail_count, total))
    return total - tail_count, tail_count


def split_capture(lines: list[str], start: CursorStart) -> Segments:
    head_count, _tail_count = split_counts(len(lines), start)
    head = lines[:head_count]
    tail = lines[head_count:]
    return Segments(
        head=_tag(head[::-1], Direction.FORWARD),
        tail=_tag(tail, Direction.BACKWARD),
    )
