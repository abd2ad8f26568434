"""Result type of a sync run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SyncResult:
    """Per-item outcome of one sync run.

    Attributes:
        success: True when ``errors`` is empty.
        synced: Identifiers written to the target, including ``mcp:<name>``
            entries for MCP servers.
        skipped: ``(id, reason)`` pairs for items deliberately not synced.
        errors: ``(id, message)`` pairs. The id is ``backup`` when the
            pre-sync backup failed and ``mcp`` for MCP settings writes.
        registry_recommendations: ``(id, extension_id)`` pairs for plugins
            with an official registry counterpart.
        backup_path: Directory of the backup taken before the run, if any.
    """

    success: bool = True
    synced: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)
    registry_recommendations: list[tuple[str, str]] = field(default_factory=list)
    backup_path: str | None = None
