"""Parser for ``SKILL.md`` marker documents.

A skill's ``SKILL.md`` is Markdown with optional YAML frontmatter delimited
by ``---`` lines. claudesync needs three things from it:

- **title** -- the text of the first level-one heading (``# Title``).
- **description** -- the first line of prose following the first heading.
- **frontmatter** -- ``name`` and ``description`` keys, used when the body
  has no heading or no prose.

The document is never split further: converters carry the whole raw text
as a single prompt.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Match YAML frontmatter: ---\n...\n---
_FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)

# First level-one heading. "## Sub" does not match.
_TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)

# First prose line after any heading line, skipping blank lines.
_DESCRIPTION_PATTERN = re.compile(r"^#.+\n+([^#\n].+)", re.MULTILINE)


@dataclass
class SkillDocument:
    """Parsed view of a ``SKILL.md`` file.

    Attributes:
        content: The complete raw text.
        title: First level-one heading, if any.
        description: First prose line after a heading, falling back to the
            frontmatter ``description``.
        frontmatter: Parsed YAML frontmatter (empty if absent or invalid).
    """

    content: str
    title: str | None = None
    description: str | None = None
    frontmatter: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        """Frontmatter ``name``, if declared."""
        value = self.frontmatter.get("name")
        return str(value) if value else None


def _parse_frontmatter(content: str) -> dict[str, Any]:
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        logger.debug("Ignoring invalid YAML frontmatter", exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def parse_skill_markdown(content: str) -> SkillDocument:
    """Parse a ``SKILL.md`` document.

    Args:
        content: Raw Markdown text.

    Returns:
        A ``SkillDocument``. Missing parts are None rather than errors.
    """
    frontmatter = _parse_frontmatter(content)

    title: str | None = None
    title_match = _TITLE_PATTERN.search(content)
    if title_match:
        title = title_match.group(1).strip()

    description: str | None = None
    desc_match = _DESCRIPTION_PATTERN.search(content)
    if desc_match:
        description = desc_match.group(1).strip()
    elif frontmatter.get("description"):
        description = str(frontmatter["description"]).strip()

    return SkillDocument(
        content=content,
        title=title,
        description=description or None,
        frontmatter=frontmatter,
    )
