"""Built-in Textual picker for hosts without fzf.

Needs a terminal of its own, so bind it through a popup, e.g.
``bind-key ? display-popup -E "fuzzback --picker textual --target '#{pane_id}'"``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from fuzzback.models import MatchResult, TaggedLine
from fuzzback.resolve import strip_ansi

# Enough to fill any pane; the rest only costs rendering time.
MAX_VISIBLE = 2000


def fuzzy_match(query: str, text: str) -> bool:
    """Subsequence match, case-insensitive unless *query* has uppercase."""
    if not query:
        return True
    if query == query.lower():
        text = text.lower()
    pos = 0
    for ch in query:
        pos = text.find(ch, pos)
        if pos == -1:
            return False
        pos += 1
    return True


def filter_candidates(query: str, texts: Sequence[str]) -> list[int]:
    """Indexes of matching *texts*, in input order."""
    terms = query.split()
    return [
        i for i, text in enumerate(texts)
        if all(fuzzy_match(term, text) for term in terms)
    ]


class ScrollbackPickerApp(App[MatchResult | None]):
    """Filter box over the tagged scrollback lines."""

    TITLE = "fuzzback"
    CSS = """
    #query {
        dock: top;
    }

    #results {
        height: 1fr;
        border: none;
    }

    #status {
        height: 1;
        dock: bottom;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("ctrl+p", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("ctrl+n", "cursor_down", "Down", show=False, priority=True),
    ]

    def __init__(self, candidates: Sequence[str]) -> None:
        super().__init__()
        self.candidates = list(candidates)
        self._raw = [TaggedLine.parse(c).text for c in self.candidates]
        self._plain = [strip_ansi(t) for t in self._raw]
        self._shown: list[int] = []

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search scrollback...", id="query")
        yield OptionList(id="results")
        yield Static("", id="status")

    def on_mount(self) -> None:
        self._refilter("")
        self.query_one("#query", Input).focus()

    def _refilter(self, query: str) -> None:
        matches = filter_candidates(query, self._plain)
        self._shown = matches[:MAX_VISIBLE]
        results = self.query_one("#results", OptionList)
        results.clear_options()
        results.add_options(
            [Option(Text.from_ansi(self._raw[i]), id=str(i)) for i in self._shown]
        )
        if self._shown:
            results.highlighted = 0
        self.query_one("#status", Static).update(
            f"{len(matches)}/{len(self.candidates)}"
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refilter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._commit(event.value)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._commit(self.query_one("#query", Input).value)

    def _commit(self, query: str) -> None:
        highlighted = self.query_one("#results", OptionList).highlighted
        if highlighted is None or highlighted >= len(self._shown):
            self.exit(None)
            return
        self.exit(MatchResult(query=query, selection=self.candidates[self._shown[highlighted]]))

    def action_cancel(self) -> None:
        self.exit(None)

    def action_cursor_up(self) -> None:
        self.query_one("#results", OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#results", OptionList).action_cursor_down()


class TextualPicker:
    def pick(self, candidates: Sequence[str]) -> MatchResult | None:
        if not candidates:
            return None
        return ScrollbackPickerApp(candidates).run()
