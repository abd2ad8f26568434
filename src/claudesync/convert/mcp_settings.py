"""Writes of MCP server descriptors into either environment's settings file.

Every write is a read-modify-write of the whole JSON object: keys other
than the touched ``mcpServers`` entries are preserved as they were.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from claudesync.core.models import AppType, McpServerConfig, SyncDirection
from claudesync.discovery.paths import SyncPaths
from claudesync.discovery.settings import load_settings_for_update, write_json
from claudesync.exceptions import SettingsError

logger = logging.getLogger(__name__)


def settings_path_for(paths: SyncPaths, app: AppType) -> Path:
    """The file holding ``mcpServers`` in ``app``."""
    return paths.code_settings if app is AppType.CODE else paths.desktop_config


def merge_mcp_servers(path: Path, servers: Mapping[str, McpServerConfig]) -> list[str]:
    """Add or replace ``servers`` in the ``mcpServers`` section of ``path``.

    Args:
        path: Settings file. Created if missing.
        servers: Server name to descriptor.

    Returns:
        The names written, in input order.

    Raises:
        SettingsError: If the existing file cannot be parsed or the new
            content cannot be written.
    """
    settings = load_settings_for_update(path)
    section = settings.get("mcpServers")
    if not isinstance(section, dict):
        section = {}
    for name, config in servers.items():
        section[name] = config.to_dict()
    settings["mcpServers"] = section
    try:
        write_json(path, settings)
    except OSError as exc:
        raise SettingsError(f"Failed to write {path}: {exc}") from exc
    logger.debug("Wrote %d MCP server(s) to %s", len(servers), path)
    return list(servers)


def add_mcp_server_to_settings(path: Path, name: str, config: McpServerConfig) -> None:
    """Register a single MCP server in a settings file.

    Raises:
        SettingsError: See ``merge_mcp_servers``.
    """
    merge_mcp_servers(path, {name: config})


def sync_mcp_servers(
    paths: SyncPaths,
    direction: SyncDirection,
    servers: Mapping[str, McpServerConfig],
) -> tuple[list[str], list[str]]:
    """Copy MCP servers into the target environment of ``direction``.

    Returns:
        ``(synced, errors)``: names written, and error messages. A failure
        leaves the target file untouched and reports every name as unsynced.
    """
    if not servers:
        return [], []
    target = settings_path_for(paths, direction.target)
    try:
        return merge_mcp_servers(target, servers), []
    except SettingsError as exc:
        logger.warning("MCP server sync to %s failed: %s", target, exc)
        return [], [str(exc)]
