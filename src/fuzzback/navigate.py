"""Copy-mode jump protocol.

tmux's ``goto-line N`` scrolls the copy-mode view N lines back from the
bottom of history while the cursor keeps its row, and it cannot scroll
further than the history allows. Lines above the start row are reached with
``goto-line`` (plus a ``cursor-up`` correction past the reachable range);
lines below it are reached from ``goto-line 0`` by moving down.
"""

from __future__ import annotations

import logging
from typing import Protocol

from fuzzback.models import CopyModeCommand, Direction, JumpPlan, ResolvedTarget

logger = logging.getLogger(__name__)


class CopyModeCursor(Protocol):
    def send_copy_mode(self, command: CopyModeCommand) -> None: ...


def max_jump(max_lines: int, height: int) -> int:
    """Highest line reachable through goto-line, never below zero."""
    return max(0, max_lines - height)


def plan_jump(target: ResolvedTarget, limit: int, height: int) -> JumpPlan:
    line = target.line
    if target.direction is Direction.BACKWARD:
        return JumpPlan(goto_line=0, correction=-(line + 1))

    if line > limit:
        # Pinned to the oldest reachable line; no centering here.
        return JumpPlan(goto_line=limit, correction=line - limit)

    padding = min(line, height // 2)
    return JumpPlan(goto_line=line, padding=max(0, padding))


def navigation_commands(
    target: ResolvedTarget, limit: int, height: int
) -> list[CopyModeCommand]:
    """Full copy-mode command sequence for *target*, column included."""
    plan = plan_jump(target, limit, height)
    cmds = [CopyModeCommand("goto-line", argument=str(plan.goto_line))]

    if plan.correction < 0:
        cmds.append(CopyModeCommand("cursor-down", repeat=-plan.correction))
    elif plan.correction > 0:
        cmds.append(CopyModeCommand("cursor-up", repeat=plan.correction))
    elif plan.padding > 0:
        # Net-zero motion; tmux scrolls so the landed line ends up mid-pane.
        cmds.append(CopyModeCommand("cursor-down", repeat=plan.padding))
        cmds.append(CopyModeCommand("cursor-up", repeat=plan.padding))

    cmds.append(CopyModeCommand("start-of-line"))
    if target.column > 0:
        cmds.append(CopyModeCommand("cursor-right", repeat=target.column))
    return cmds


def navigate(
    cursor: CopyModeCursor, target: ResolvedTarget, limit: int, height: int
) -> None:
    cmds = navigation_commands(target, limit, height)
    logger.debug("navigating to %s with %d commands", target, len(cmds))
    for cmd in cmds:
        cursor.send_copy_mode(cmd)
