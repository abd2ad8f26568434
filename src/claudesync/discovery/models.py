"""Data models for the discovery module.

Contains the result types produced by ``EnvironmentScanner``: the four
per-run inventories and the environment presence probe.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from claudesync.core.models import (
    AppType,
    ItemKind,
    McpServerConfig,
    ScannedItem,
    SyncDirection,
)


@dataclass
class EnvironmentStatus:
    """Presence of each environment on disk.

    Attributes:
        code_exists: Claude Code root directory and settings file exist.
        desktop_exists: Claude Desktop root directory exists.
    """

    code_exists: bool
    desktop_exists: bool

    @property
    def ready(self) -> bool:
        """True when both environments can take part in a sync."""
        return self.code_exists and self.desktop_exists

    @property
    def missing(self) -> list[str]:
        """Labels of the environments that are not present."""
        return [
            app.label for app, found in (
                (AppType.CODE, self.code_exists),
                (AppType.DESKTOP, self.desktop_exists),
            ) if not found
        ]


@dataclass
class ScanResult:
    """Inventories of both environments from one scan.

    Attributes:
        code_items: Skills and enabled plugins found in Claude Code.
        desktop_items: Extensions found in Claude Desktop.
        code_mcp_servers: ``mcpServers`` from Claude Code settings.
        desktop_mcp_servers: ``mcpServers`` from the Claude Desktop config.
    """

    code_items: list[ScannedItem] = field(default_factory=list)
    desktop_items: list[ScannedItem] = field(default_factory=list)
    code_mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)
    desktop_mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)

    def items_for(self, app: AppType) -> list[ScannedItem]:
        return self.code_items if app is AppType.CODE else self.desktop_items

    def mcp_servers_for(self, app: AppType) -> dict[str, McpServerConfig]:
        return self.code_mcp_servers if app is AppType.CODE else self.desktop_mcp_servers

    def source_items(self, direction: SyncDirection) -> list[ScannedItem]:
        return self.items_for(direction.source)

    def source_mcp_servers(self, direction: SyncDirection) -> dict[str, McpServerConfig]:
        return self.mcp_servers_for(direction.source)

    def target_mcp_servers(self, direction: SyncDirection) -> dict[str, McpServerConfig]:
        return self.mcp_servers_for(direction.target)

    def count(self, app: AppType, kind: ItemKind) -> int:
        """Number of items of ``kind`` found in ``app``."""
        return sum(1 for item in self.items_for(app) if item.kind is kind)
