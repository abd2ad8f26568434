"""Converters between Claude Code and Claude Desktop artifact formats."""

from claudesync.convert.compatibility import detect_incompatibility
from claudesync.convert.dxt_to_skill import DxtToSkillConverter, render_skill_markdown
from claudesync.convert.models import (
    ConversionResult,
    ExtensionConversionResult,
    McpRegistration,
)
from claudesync.convert.registry import lookup_in_registry, registry_install_instructions
from claudesync.convert.skill_to_dxt import SkillToDxtConverter

__all__ = [
    "ConversionResult",
    "DxtToSkillConverter",
    "ExtensionConversionResult",
    "McpRegistration",
    "SkillToDxtConverter",
    "detect_incompatibility",
    "lookup_in_registry",
    "registry_install_instructions",
    "render_skill_markdown",
]
