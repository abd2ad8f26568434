"""Convert a Claude Desktop extension into Claude Code artifacts.

An extension contributes up to two things:

- its MCP server, registered under the package name in Claude Code
  settings, with ``${__dirname}`` expanded to the extension directory;
- its prompts, rendered into ``<skills>/<package name>/SKILL.md``.

An extension with neither converts successfully to nothing.
"""

from __future__ import annotations

import logging
import shutil
from typing import Any

from claudesync.convert.dxt import DIRNAME_PLACEHOLDER, DxtManifest
from claudesync.convert.models import ExtensionConversionResult, McpRegistration
from claudesync.core.models import McpServerConfig, ScannedItem
from claudesync.discovery.paths import SyncPaths

logger = logging.getLogger(__name__)


def render_skill_markdown(manifest: DxtManifest) -> str:
    """Render a ``SKILL.md`` document describing an extension."""
    lines: list[str] = [f"# {manifest.title}", ""]
    if manifest.description:
        lines += [manifest.description, ""]
    if manifest.long_description:
        lines += [manifest.long_description, ""]

    if manifest.prompts:
        lines += ["## Prompts", ""]
        for prompt in manifest.prompts:
            lines += [f"### {prompt.name}", ""]
            if prompt.description:
                lines += [prompt.description, ""]
            if prompt.text:
                lines += ["```", prompt.text, "```", ""]

    if manifest.tools:
        lines += ["## Available Tools", "", "This extension provides the following MCP tools:", ""]
        lines += [f"- **{tool.name}**: {tool.description}" for tool in manifest.tools]
        lines.append("")

    return "\n".join(lines)


def is_safe_skill_name(name: str) -> bool:
    """True when ``name`` is usable as a single directory under the skills root."""
    if not name or name == ".":
        return False
    return not any(part in name for part in ("/", "\\", ".."))


class DxtToSkillConverter:
    """Turns installed extensions into skills and MCP registrations.

    Args:
        paths: Filesystem layout; skills go under ``code_skills``.
    """

    def __init__(self, paths: SyncPaths) -> None:
        self.paths = paths

    def convert(self, item: ScannedItem) -> ExtensionConversionResult:
        """Convert one extension.

        The MCP registration is returned, not written; the caller decides
        where it goes.
        """
        raw: Any = item.metadata.get("manifest")
        if not raw:
            return ExtensionConversionResult(success=False, error="No manifest found for extension")
        try:
            manifest = DxtManifest.from_dict(raw)
        except ValueError as exc:
            return ExtensionConversionResult(success=False, error=f"Invalid extension manifest: {exc}")
        if not is_safe_skill_name(manifest.name):
            return ExtensionConversionResult(
                success=False, error=f"Unsafe extension name: {manifest.name!r}",
            )

        result = ExtensionConversionResult(success=True)

        if manifest.server is not None and manifest.server.mcp_config is not None:
            cfg = manifest.server.mcp_config
            ext_dir = str(item.path)
            result.mcp_registration = McpRegistration(
                name=manifest.name,
                config=McpServerConfig(
                    command=cfg.command,
                    args=tuple(arg.replace(DIRNAME_PLACEHOLDER, ext_dir) for arg in cfg.args),
                    env=dict(cfg.env) if cfg.env else None,
                ),
            )

        if manifest.prompts:
            skill_dir = self.paths.code_skills / manifest.name
            try:
                skill_dir.mkdir(parents=True, exist_ok=True)
                (skill_dir / "SKILL.md").write_text(
                    render_skill_markdown(manifest), encoding="utf-8",
                )
                readme = item.path / "README.md"
                if readme.is_file():
                    shutil.copyfile(readme, skill_dir / "README.md")
            except OSError as exc:
                return ExtensionConversionResult(success=False, error=f"Failed to write skill: {exc}")
            logger.debug("Wrote skill %s from extension %s", skill_dir, item.name)
            result.skill_path = skill_dir

        return result
