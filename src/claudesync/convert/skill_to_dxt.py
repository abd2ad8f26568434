"""Convert a Claude Code skill into a Claude Desktop extension package.

Package layout written under ``<Claude Extensions>/<skill name>/``::

    manifest.json      package descriptor (see ``DxtManifest``)
    icon.svg           generated placeholder icon
    server/index.js    MCP server serving the skill as one prompt
    README.md          copied from the skill, when present

The whole ``SKILL.md`` becomes a single ``skill_prompt`` prompt; its first
heading and first prose line become the display name and description.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from claudesync.convert.compatibility import IncompatibilityCheck, detect_incompatibility
from claudesync.convert.dxt import (
    DIRNAME_PLACEHOLDER,
    DxtAuthor,
    DxtCompatibility,
    DxtManifest,
    DxtMcpConfig,
    DxtPrompt,
    DxtServer,
)
from claudesync.convert.icon import generate_placeholder_icon
from claudesync.convert.models import ConversionResult
from claudesync.convert.server_stub import SERVER_ENTRY_POINT, generate_mcp_server
from claudesync.core.models import ScannedItem
from claudesync.discovery.paths import SyncPaths
from claudesync.parsers.skill_markdown import parse_skill_markdown

logger = logging.getLogger(__name__)

DXT_VERSION = "0.1"
PACKAGE_VERSION = "1.0.0"
PROMPT_NAME = "skill_prompt"
ICON_FILE = "icon.svg"
KEYWORDS = ["converted", "claude-code", "skill"]


def build_manifest(name: str, display_name: str, content: str) -> DxtManifest:
    """Build the package manifest for a skill's ``SKILL.md`` text."""
    doc = parse_skill_markdown(content)
    return DxtManifest(
        dxt_version=DXT_VERSION,
        name=name,
        display_name=doc.title or display_name,
        version=PACKAGE_VERSION,
        description=doc.description or f"Converted from Claude Code skill: {name}",
        long_description=content,
        author=DxtAuthor(name="claudesync"),
        icon=ICON_FILE,
        server=DxtServer(
            type="node",
            entry_point=SERVER_ENTRY_POINT,
            mcp_config=DxtMcpConfig(
                command="node",
                args=[f"{DIRNAME_PLACEHOLDER}/{SERVER_ENTRY_POINT}"],
            ),
        ),
        prompts=[DxtPrompt(
            name=PROMPT_NAME,
            description=doc.description or "Main skill prompt",
            text=content,
        )],
        keywords=list(KEYWORDS),
        license="MIT",
        compatibility=DxtCompatibility(
            claude_desktop=">=0.10.0",
            platforms=["darwin", "win32", "linux"],
            runtimes={"node": ">=16.0.0"},
        ),
    )


class SkillToDxtConverter:
    """Writes extension packages for skills.

    Args:
        paths: Filesystem layout; packages go under ``desktop_extensions``.
        incompatibility: Predicate deciding whether a skill must be skipped.
    """

    def __init__(
        self,
        paths: SyncPaths,
        incompatibility: IncompatibilityCheck = detect_incompatibility,
    ) -> None:
        self.paths = paths
        self.incompatibility = incompatibility

    def convert(self, item: ScannedItem) -> ConversionResult:
        """Convert one skill.

        Returns:
            An error result if the skill or its ``SKILL.md`` is missing, a
            skipped result if the skill uses Code-only features, otherwise
            a success result with the package directory.
        """
        if not item.path.exists():
            return ConversionResult(success=False, error="Skill path does not exist")

        real_path = item.path.resolve() if item.path.is_symlink() else item.path
        skill_md = real_path / "SKILL.md"
        if not skill_md.is_file():
            return ConversionResult(success=False, error="SKILL.md not found")

        try:
            content = skill_md.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return ConversionResult(success=False, error=f"Cannot read SKILL.md: {exc}")

        reason = self.incompatibility(content, real_path)
        if reason:
            logger.info("Skipping skill %s: %s", item.name, reason)
            return ConversionResult(success=False, skipped=True, skip_reason=reason)

        manifest = build_manifest(item.name, item.display_name, content)
        output_dir = self.paths.desktop_extensions / item.name
        try:
            self._write_package(output_dir, manifest, real_path)
        except OSError as exc:
            return ConversionResult(success=False, error=f"Failed to write extension: {exc}")

        logger.debug("Wrote extension package %s", output_dir)
        return ConversionResult(success=True, output_path=output_dir)

    @staticmethod
    def _write_package(output_dir: Path, manifest: DxtManifest, skill_dir: Path) -> None:
        (output_dir / "server").mkdir(parents=True, exist_ok=True)
        (output_dir / "manifest.json").write_text(
            json.dumps(manifest.to_dict(), indent=2) + "\n", encoding="utf-8",
        )
        (output_dir / ICON_FILE).write_text(
            generate_placeholder_icon(manifest.name), encoding="utf-8",
        )
        (output_dir / SERVER_ENTRY_POINT).write_text(
            generate_mcp_server(manifest.name, manifest.prompts), encoding="utf-8",
        )
        readme = skill_dir / "README.md"
        if readme.is_file():
            shutil.copyfile(readme, output_dir / "README.md")
