"""Backup layout constants and the restore result type."""

from __future__ import annotations

from dataclasses import dataclass, field

CODE_DIR = "claude-code"
DESKTOP_DIR = "claude-desktop"
METADATA_FILE = "metadata.json"

CODE_SETTINGS_FILE = "settings.json"
CODE_SKILLS_DIR = "skills"
DESKTOP_CONFIG_FILE = "claude_desktop_config.json"
DESKTOP_INSTALLATIONS_FILE = "extensions-installations.json"
DESKTOP_EXTENSIONS_DIR = "extensions"


@dataclass
class RestoreResult:
    """Outcome of restoring a backup.

    Attributes:
        success: True when every captured artifact was put back.
        restored_items: Human-readable labels of restored artifacts, in
            restore order.
        error: Failure message, when ``success`` is False.
    """

    success: bool
    restored_items: list[str] = field(default_factory=list)
    error: str | None = None
