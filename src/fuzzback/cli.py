"""CLI entry point for fuzzback.

Usually bound to a key in tmux.conf::

    bind-key ? run-shell -b "fuzzback"

All fuzzback.* imports are lazy (inside functions) so that ``fuzzback
--help`` stays fast.

Nothing is ever printed on failure: an unsupported tmux, a cancelled
search or a tmux error all end as a silent no-op, with details in the
debug log when ``@fuzzback-debug`` is on.
"""

from __future__ import annotations

import argparse
import logging
from importlib.metadata import PackageNotFoundError, version

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("fuzzback")
    except PackageNotFoundError:
        return "unknown"


def cmd_search(args: argparse.Namespace) -> int:
    """Run one scrollback search in the target pane."""
    from fuzzback.config import load_config, setup_logging
    from fuzzback.picker import get_picker
    from fuzzback.session import run_fuzzback
    from fuzzback.tmux import Tmux, TmuxError, is_supported

    # Silence the package logger before tmux can fail; the debug log file
    # is only known once the options are loaded.
    setup_logging(False)
    tmux = Tmux(target=args.target)
    try:
        if not is_supported(tmux.version()):
            return 0
        config = load_config(tmux.show_options())
    except (TmuxError, OSError):
        # No usable tmux: nothing to search.
        return 0

    if args.picker:
        config["picker"] = args.picker
    if config["debug"]:
        setup_logging(True)

    try:
        state = run_fuzzback(tmux, get_picker(config))
    except (TmuxError, OSError):
        logger.exception("fuzzback session failed")
        return 0
    logger.debug("session finished: %s", state.value)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="fuzzback",
        description=(
            "Fuzzy search the scrollback of a tmux pane and jump there in "
            "copy mode."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    parser.add_argument(
        "--target", "-t",
        metavar="PANE",
        help="Pane to search (default: the current pane)",
    )
    parser.add_argument(
        "--picker",
        choices=["fzf", "textual"],
        help="Override the @fuzzback-picker option",
    )

    args = parser.parse_args()
    return cmd_search(args)


if __name__ == "__main__":
    raise SystemExit(main())
