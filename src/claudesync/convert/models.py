"""Result types returned by the converters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from claudesync.core.models import McpServerConfig


@dataclass
class ConversionResult:
    """Outcome of converting a skill into an extension package.

    Exactly one of three shapes: success with ``output_path``; skipped with
    ``skip_reason`` (nothing written); failure with ``error``.
    """

    success: bool
    output_path: Path | None = None
    error: str | None = None
    skipped: bool = False
    skip_reason: str | None = None


@dataclass(frozen=True)
class McpRegistration:
    """An MCP server to register in Claude Code settings."""

    name: str
    config: McpServerConfig


@dataclass
class ExtensionConversionResult:
    """Outcome of converting an extension into Claude Code artifacts.

    Attributes:
        success: False only when the extension has no package manifest.
        skill_path: Generated skill directory, when the extension has prompts.
        mcp_registration: Server to register, when the extension runs one.
        error: Failure message.
    """

    success: bool
    skill_path: Path | None = None
    mcp_registration: McpRegistration | None = None
    error: str | None = None
