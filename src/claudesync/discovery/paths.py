"""Well-known on-disk locations of both environments and of claudesync's own data.

``SyncPaths`` is resolved once at startup and passed explicitly to the
scanner, converters, backup, and executor. Tests build one rooted at a
temporary directory with ``SyncPaths.for_home(tmp_path)``.

Platform Notes:
    Claude Code keeps everything under ``~/.claude/`` on every platform.
    Claude Desktop uses ``~/Library/Application Support/Claude/`` on macOS,
    ``%APPDATA%/Claude/`` on Windows, and ``~/.config/Claude/`` on Linux.
"""

from __future__ import annotations

import os
import platform as _platform
from dataclasses import dataclass
from pathlib import Path


def current_platform() -> str:
    """Return the current platform identifier: "macos", "windows", or "linux"."""
    system = _platform.system().lower()
    if system == "darwin":
        return "macos"
    return "windows" if system == "windows" else "linux"


def _desktop_root(home: Path, platform: str) -> Path:
    if platform == "macos":
        return home / "Library" / "Application Support" / "Claude"
    if platform == "windows":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Claude"
    return home / ".config" / "Claude"


@dataclass(frozen=True)
class SyncPaths:
    """Resolved filesystem layout for one machine.

    Attributes:
        code_root: Claude Code root (``~/.claude``).
        code_settings: Claude Code ``settings.json`` (enabled plugins and
            MCP servers).
        code_skills: Directory with one subdirectory per skill.
        code_installed_plugins: ``plugins/installed_plugins.json`` registry.
        desktop_root: Claude Desktop application-support directory.
        desktop_config: ``claude_desktop_config.json`` (MCP servers).
        desktop_extensions: Directory with one subdirectory per extension.
        desktop_installations: ``extensions-installations.json`` index.
        sync_root: claudesync data directory (``~/.claude-sync``).
        manifest: Sync manifest file.
        backups: Directory holding one subdirectory per backup.
    """

    code_root: Path
    code_settings: Path
    code_skills: Path
    code_installed_plugins: Path
    desktop_root: Path
    desktop_config: Path
    desktop_extensions: Path
    desktop_installations: Path
    sync_root: Path
    manifest: Path
    backups: Path

    @classmethod
    def for_home(cls, home: Path | None = None, platform: str | None = None) -> SyncPaths:
        """Build the standard layout under a home directory.

        Args:
            home: Home directory. Defaults to ``Path.home()``.
            platform: "macos", "windows", or "linux". Defaults to the
                running platform.
        """
        home_dir = Path(home) if home is not None else Path.home()
        plat = platform or current_platform()

        code_root = home_dir / ".claude"
        desktop_root = _desktop_root(home_dir, plat)
        sync_root = home_dir / ".claude-sync"
        return cls(
            code_root=code_root,
            code_settings=code_root / "settings.json",
            code_skills=code_root / "skills",
            code_installed_plugins=code_root / "plugins" / "installed_plugins.json",
            desktop_root=desktop_root,
            desktop_config=desktop_root / "claude_desktop_config.json",
            desktop_extensions=desktop_root / "Claude Extensions",
            desktop_installations=desktop_root / "extensions-installations.json",
            sync_root=sync_root,
            manifest=sync_root / "manifest.json",
            backups=sync_root / "backups",
        )
