"""Command grammar turning one line of text into a structured command."""

from __future__ import annotations

import re

from isoloot.sim.contracts import (
    ActionKind,
    BuildArgs,
    Command,
    GatherArgs,
    MoveArgs,
    SayArgs,
)

MOVE_RE = re.compile(
    r"^(\S+)\s+move\s+to\s+([0-9]+)\s*[,\s]\s*([0-9]+)$", re.IGNORECASE
)
EXPLORE_RE = re.compile(r"^(\S+)\s+explore$", re.IGNORECASE)
GATHER_RE = re.compile(r"^(\S+)\s+gather\s+(.+)$", re.IGNORECASE)
BUILD_RE = re.compile(r"^(\S+)\s+build\s+(.+)$", re.IGNORECASE)
SAY_RE = re.compile(r"^(\S+)\s+say\s+(.+)$", re.IGNORECASE)

COMMAND_HELP = (
    "AgentName move to X,Y | explore | gather <resource> | "
    "build <structure> | say <msg>"
)


def parse_command(text: str | None) -> Command | None:
    """Parse one line of input, returning None when no rule matches.

    Rules are tried in priority order (move, explore, gather, build, say) and
    the first one matching the whole trimmed line wins. Verb keywords are
    case-insensitive; the leading agent name is returned verbatim.
    """
    line = (text or "").strip()
    if not line:
        return None

    match = MOVE_RE.fullmatch(line)
    if match:
        return Command(
            target=match.group(1),
            kind=ActionKind.MOVE,
            move=MoveArgs(x=int(match.group(2)), y=int(match.group(3))),
        )
    match = EXPLORE_RE.fullmatch(line)
    if match:
        return Command(target=match.group(1), kind=ActionKind.EXPLORE)
    match = GATHER_RE.fullmatch(line)
    if match:
        return Command(
            target=match.group(1),
            kind=ActionKind.GATHER,
            gather=GatherArgs(resource=match.group(2).strip().lower()),
        )
    match = BUILD_RE.fullmatch(line)
    if match:
        return Command(
            target=match.group(1),
            kind=ActionKind.BUILD,
            build=BuildArgs(structure=match.group(2).strip().lower()),
        )
    match = SAY_RE.fullmatch(line)
    if match:
        return Command(
            target=match.group(1),
            kind=ActionKind.SAY,
            say=SayArgs(message=match.group(2)),
        )
    return None
