"""Typed views of the JSON files both environments keep on disk.

Each schema is a dataclass with a ``from_dict`` that tolerates missing or
wrong-typed sections by falling back to empty defaults. Reading goes
through ``read_json_object``, which treats a missing, unreadable, or
non-object file as ``{}``: either environment may be only partially
configured, and that is never a scan failure.

Writes are the opposite: ``load_settings_for_update`` refuses to return an
empty object for a file that exists but cannot be parsed, so a rewrite can
never silently replace a user's settings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from claudesync.core.models import McpServerConfig
from claudesync.exceptions import SettingsError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Raw JSON access
# ---------------------------------------------------------------------------


def read_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON object from disk, returning ``{}`` on any failure.

    Args:
        path: File to read.

    Returns:
        The parsed object, or an empty dict when the file is missing,
        unreadable, malformed, or holds a non-object value.
    """
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Could not parse %s; treating it as empty", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logger.warning("%s does not contain a JSON object; treating it as empty", path)
        return {}
    return data


def load_settings_for_update(path: Path) -> dict[str, Any]:
    """Read a settings file that is about to be rewritten.

    Returns:
        The parsed object, or ``{}`` if the file does not exist yet.

    Raises:
        SettingsError: If the file exists but is not a readable JSON object.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Failed to parse {path}: top level is not an object")
    return data


def write_json(path: Path, data: Any) -> None:
    """Write pretty-printed JSON with a trailing newline.

    Creates parent directories if they do not exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def parse_mcp_servers(raw: Any, source: Path | str = "") -> dict[str, McpServerConfig]:
    """Parse an ``mcpServers`` section into typed configs.

    Entries that are not valid server descriptors are logged and dropped.
    A section that is not an object yields an empty map.
    """
    if not isinstance(raw, dict):
        return {}
    servers: dict[str, McpServerConfig] = {}
    for name, entry in raw.items():
        try:
            servers[str(name)] = McpServerConfig.from_dict(entry)
        except ValueError:
            logger.warning("Ignoring malformed MCP server %r in %s", name, source)
    return servers


# ---------------------------------------------------------------------------
# Claude Code
# ---------------------------------------------------------------------------


@dataclass
class CodeSettings:
    """The parts of ``~/.claude/settings.json`` claudesync reads.

    Attributes:
        enabled_plugins: Plugin id (``name@marketplace``) to enabled flag.
        mcp_servers: Server name to launch descriptor.
    """

    enabled_plugins: dict[str, bool] = field(default_factory=dict)
    mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | str = "") -> CodeSettings:
        raw_plugins = data.get("enabledPlugins", {})
        plugins: dict[str, bool] = {}
        if isinstance(raw_plugins, dict):
            plugins = {str(k): bool(v) for k, v in raw_plugins.items()}
        return cls(
            enabled_plugins=plugins,
            mcp_servers=parse_mcp_servers(data.get("mcpServers"), source),
        )

    @classmethod
    def load(cls, path: Path) -> CodeSettings:
        return cls.from_dict(read_json_object(path), path)


@dataclass(frozen=True)
class InstalledPlugin:
    """One version record from ``installed_plugins.json``.

    Attributes:
        install_path: Where the plugin is installed.
        version: Installed version string.
        git_commit_sha: Commit the install was taken from, if recorded.
    """

    install_path: str
    version: str = ""
    git_commit_sha: str | None = None


@dataclass
class InstalledPluginsRegistry:
    """``installed_plugins.json``: plugin id to version records, latest first."""

    plugins: dict[str, list[InstalledPlugin]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstalledPluginsRegistry:
        raw = data.get("plugins", {})
        plugins: dict[str, list[InstalledPlugin]] = {}
        if not isinstance(raw, dict):
            return cls()
        for plugin_id, records in raw.items():
            if not isinstance(records, list):
                continue
            parsed: list[InstalledPlugin] = []
            for record in records:
                if not isinstance(record, dict) or not record.get("installPath"):
                    continue
                parsed.append(InstalledPlugin(
                    install_path=str(record["installPath"]),
                    version=str(record.get("version", "")),
                    git_commit_sha=record.get("gitCommitSha") or None,
                ))
            plugins[str(plugin_id)] = parsed
        return cls(plugins=plugins)

    @classmethod
    def load(cls, path: Path) -> InstalledPluginsRegistry:
        return cls.from_dict(read_json_object(path))

    def latest(self, plugin_id: str) -> InstalledPlugin | None:
        """Return the most recent install record for ``plugin_id``."""
        records = self.plugins.get(plugin_id)
        return records[0] if records else None


# ---------------------------------------------------------------------------
# Claude Desktop
# ---------------------------------------------------------------------------


@dataclass
class DesktopConfig:
    """The parts of ``claude_desktop_config.json`` claudesync reads."""

    mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | str = "") -> DesktopConfig:
        return cls(mcp_servers=parse_mcp_servers(data.get("mcpServers"), source))

    @classmethod
    def load(cls, path: Path) -> DesktopConfig:
        return cls.from_dict(read_json_object(path), path)


@dataclass(frozen=True)
class ExtensionInstallation:
    """One entry of ``extensions-installations.json``.

    Attributes:
        id: Extension identifier (also its directory name).
        version: Installed version.
        hash: Content hash recorded by Claude Desktop, if any.
        manifest: The extension's raw package manifest, if recorded.
        raw: The whole entry as stored, used as a hash fallback.
    """

    id: str
    version: str = ""
    hash: str | None = None
    manifest: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class InstallationsIndex:
    """``extensions-installations.json``: extension id to installation entry."""

    extensions: dict[str, ExtensionInstallation] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstallationsIndex:
        raw = data.get("extensions", {})
        if not isinstance(raw, dict):
            return cls()
        extensions: dict[str, ExtensionInstallation] = {}
        for ext_id, entry in raw.items():
            if not isinstance(entry, dict):
                logger.debug("Skipping non-object installation entry %r", ext_id)
                continue
            manifest = entry.get("manifest")
            extensions[str(ext_id)] = ExtensionInstallation(
                id=str(entry.get("id") or ext_id),
                version=str(entry.get("version", "")),
                hash=entry.get("hash") or None,
                manifest=manifest if isinstance(manifest, dict) else None,
                raw=entry,
            )
        return cls(extensions=extensions)

    @classmethod
    def load(cls, path: Path) -> InstallationsIndex:
        return cls.from_dict(read_json_object(path))
