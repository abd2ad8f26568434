"""Heuristic check for skill features Claude Desktop cannot host.

The check sniffs the raw ``SKILL.md`` text for mentions of sub-agent
delegation, lifecycle hooks, and custom agent directories. It is a substring
test, not a structural parse: false positives and false negatives are
expected. Converters accept any ``IncompatibilityCheck`` so a stricter
predicate can replace this one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

IncompatibilityCheck = Callable[[str, Path], "str | None"]
"""Given skill content and its resolved directory, return a skip reason or None."""

SUBAGENT_MARKERS: tuple[str, ...] = ("subagent", "Task tool")
HOOK_MARKERS: tuple[str, ...] = ("hooks:", "PreToolUse")
AGENT_DIR_MARKER = "agents/"

SUBAGENT_REASON = "Uses subagents which are not supported in Desktop"
HOOK_REASON = "Uses hooks which are not supported in Desktop"
AGENT_REASON = "References custom agents which are not supported in Desktop"


def detect_incompatibility(content: str, skill_dir: Path) -> str | None:
    """Return why a skill cannot run in Claude Desktop, or None if it can.

    Args:
        content: Raw ``SKILL.md`` text.
        skill_dir: Resolved skill directory. Agent references only count when
            an ``agents`` directory exists two levels up (``~/.claude/agents``
            for a skill in ``~/.claude/skills``).
    """
    if any(marker in content for marker in SUBAGENT_MARKERS):
        return SUBAGENT_REASON
    if any(marker in content for marker in HOOK_MARKERS):
        return HOOK_REASON
    if AGENT_DIR_MARKER in content and (skill_dir / ".." / ".." / "agents").is_dir():
        return AGENT_REASON
    return None
