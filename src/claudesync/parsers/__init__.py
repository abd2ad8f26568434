"""Parsers for the marker documents of skills and extension packages."""

from claudesync.parsers.skill_markdown import SkillDocument, parse_skill_markdown

__all__ = [
    "SkillDocument",
    "parse_skill_markdown",
]
