"""Turn a picker selection into a line offset and a column."""

from __future__ import annotations

import re

from fuzzback.models import MatchResult, ResolvedTarget, TaggedLine

# CSI (colours, cursor movement) and OSC (hyperlinks, titles) sequences.
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")


def strip_ansi(text: str) -> str:
    """Remove escape sequences so columns count visible cells only."""
    return _ANSI_RE.sub("", text)


def safe_find(haystack: str, needle: str) -> int | None:
    """Exact, literal substring search.

    Nothing in either string is interpreted: backslashes, a leading ``=``
    and regex metacharacters are plain characters. Returns the 0-based index
    of the first occurrence, or None.
    """
    idx = haystack.find(needle)
    return idx if idx >= 0 else None


def query_column(query: str, text: str) -> int:
    """Column of the first occurrence of *query* in *text*.

    Falls back to 0 (start of line) when the query does not occur
    literally, which happens for fuzzy matches that skip characters.
    """
    if not query:
        return 0
    column = safe_find(strip_ansi(text), query)
    return column if column is not None else 0


def resolve_match(match: MatchResult) -> ResolvedTarget:
    """Resolve a picker result; raises ValueError for an untagged selection."""
    tagged = TaggedLine.parse(match.selection)
    return ResolvedTarget(
        direction=tagged.offset.direction,
        line=tagged.offset.distance - 1,
        column=query_column(match.query, tagged.text),
    )
