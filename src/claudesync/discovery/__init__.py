"""Environment discovery for Claude Code and Claude Desktop.

Resolves the well-known on-disk layout of both applications, reads their
settings through typed schemas, and inventories skills, plugins,
extensions, and MCP servers.

Public API::

    from claudesync.discovery import EnvironmentScanner, SyncPaths

    scanner = EnvironmentScanner(SyncPaths.for_home())
    result = scanner.scan()
    for item in result.code_items:
        print(item.id, item.hash)
"""

from __future__ import annotations

from claudesync.discovery.environment_scanner import EnvironmentScanner
from claudesync.discovery.models import EnvironmentStatus, ScanResult
from claudesync.discovery.paths import SyncPaths

__all__ = [
    "EnvironmentScanner",
    "EnvironmentStatus",
    "ScanResult",
    "SyncPaths",
]
