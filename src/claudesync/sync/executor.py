"""Sync execution: backup, convert, record.

``SyncExecutor.execute`` is the only place that mutates either environment.
Its contract:

1. The sync manifest is loaded once and threaded through the run as a value.
2. A backup of both environments is taken first. If it fails, the run stops
   with a single ``backup`` error: nothing else is written, including the
   manifest.
3. Each selected item is processed independently. A failure is recorded
   against that item and the loop continues.
4. MCP servers that are missing or different in the target are written in
   one settings update.
5. The manifest is saved with the backup record, every successfully synced
   item, and the run time, whether or not items failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping

from claudesync.backup.create import create_backup
from claudesync.convert.dxt_to_skill import DxtToSkillConverter
from claudesync.convert.mcp_settings import add_mcp_server_to_settings, sync_mcp_servers
from claudesync.convert.registry import lookup_in_registry
from claudesync.convert.skill_to_dxt import SkillToDxtConverter
from claudesync.core.differ import get_mcp_server_diff
from claudesync.core.manifest import SyncItem, SyncManifest, load_manifest, save_manifest
from claudesync.core.models import (
    ItemKind,
    ItemStatus,
    McpServerConfig,
    ScannedItem,
    SyncDirection,
)
from claudesync.discovery.paths import SyncPaths
from claudesync.exceptions import BackupError
from claudesync.sync.models import SyncResult

logger = logging.getLogger(__name__)

PLUGIN_REGISTRY_REASON = "Official extension available; install from registry"
PLUGIN_LOCAL_REASON = "Plugins cannot be converted locally"
MCP_ERROR_ID = "mcp"
BACKUP_ERROR_ID = "backup"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class _ItemOutcome:
    """What processing one item produced, before it is recorded."""

    target_path: str | None = None
    skip_reason: str | None = None
    error: str | None = None


class SyncExecutor:
    """Applies a selection of changes from one environment to the other.

    Args:
        paths: Filesystem layout.
        skill_converter: Code-to-Desktop converter. Defaults to a
            ``SkillToDxtConverter`` on ``paths``.
        extension_converter: Desktop-to-Code converter. Defaults to a
            ``DxtToSkillConverter`` on ``paths``.
        clock: Returns the ISO-8601 timestamp recorded for the run.
    """

    def __init__(
        self,
        paths: SyncPaths,
        skill_converter: SkillToDxtConverter | None = None,
        extension_converter: DxtToSkillConverter | None = None,
        clock: Callable[[], str] = _utc_now,
    ) -> None:
        self.paths = paths
        self.skill_converter = skill_converter or SkillToDxtConverter(paths)
        self.extension_converter = extension_converter or DxtToSkillConverter(paths)
        self.clock = clock

    def execute(
        self,
        direction: SyncDirection,
        selected_items: Iterable[ScannedItem],
        source_mcp_servers: Mapping[str, McpServerConfig] | None = None,
        target_mcp_servers: Mapping[str, McpServerConfig] | None = None,
    ) -> SyncResult:
        """Run one sync.

        Args:
            direction: Which environment is the source.
            selected_items: Items to sync, from a scan of the source.
            source_mcp_servers: MCP servers of the source environment.
            target_mcp_servers: MCP servers of the target environment.

        Returns:
            The per-item outcome. ``success`` is False if anything errored.

        Raises:
            ManifestError: If the updated manifest cannot be saved.
        """
        items = list(selected_items)
        result = SyncResult()
        manifest = load_manifest(self.paths.manifest)

        try:
            backup = create_backup(self.paths, direction, [item.id for item in items])
        except BackupError as exc:
            logger.error("Sync aborted: %s", exc)
            result.errors.append((BACKUP_ERROR_ID, str(exc)))
            result.success = False
            return result
        manifest = manifest.with_backup(backup)
        result.backup_path = backup.path

        for item in items:
            manifest = self._sync_item(item, direction, manifest, result)

        self._sync_mcp(direction, source_mcp_servers or {}, target_mcp_servers or {}, result)

        save_manifest(manifest.with_last_sync(self.clock()), self.paths.manifest)
        result.success = not result.errors
        logger.info(
            "Sync %s finished: %d synced, %d skipped, %d error(s)",
            direction.value, len(result.synced), len(result.skipped), len(result.errors),
        )
        return result

    # -- Items ---------------------------------------------------------------

    def _sync_item(
        self,
        item: ScannedItem,
        direction: SyncDirection,
        manifest: SyncManifest,
        result: SyncResult,
    ) -> SyncManifest:
        try:
            if direction is SyncDirection.CODE_TO_DESKTOP:
                outcome = self._code_to_desktop(item, result)
            else:
                outcome = self._desktop_to_code(item)
        except Exception as exc:
            logger.warning("Sync of %s failed", item.id, exc_info=True)
            outcome = _ItemOutcome(error=str(exc))

        if outcome.error is not None:
            result.errors.append((item.id, outcome.error))
            return manifest
        if outcome.skip_reason is not None:
            result.skipped.append((item.id, outcome.skip_reason))
            return manifest

        linked = manifest.get_item_by_name(item.name, direction.target)
        record = SyncItem(
            id=item.id,
            kind=item.kind,
            name=item.name,
            display_name=item.display_name,
            source_app=direction.source,
            source_path=str(item.path),
            source_hash=item.hash,
            target_app=direction.target,
            target_path=outcome.target_path,
            status=ItemStatus.SYNCED,
            last_synced=self.clock(),
            linked_to=linked.id if linked is not None else None,
        )
        result.synced.append(item.id)
        return manifest.with_item(record)

    def _code_to_desktop(self, item: ScannedItem, result: SyncResult) -> _ItemOutcome:
        if item.kind is ItemKind.SKILL:
            converted = self.skill_converter.convert(item)
            if converted.skipped:
                return _ItemOutcome(skip_reason=converted.skip_reason or "Skipped")
            if not converted.success:
                return _ItemOutcome(error=converted.error or "Conversion failed")
            return _ItemOutcome(target_path=str(converted.output_path))

        if item.kind is ItemKind.PLUGIN:
            lookup = lookup_in_registry(item.name)
            if lookup.found and lookup.recommend_install_from_registry and lookup.extension_id:
                result.registry_recommendations.append((item.id, lookup.extension_id))
                return _ItemOutcome(skip_reason=PLUGIN_REGISTRY_REASON)
            return _ItemOutcome(skip_reason=PLUGIN_LOCAL_REASON)

        return _ItemOutcome(skip_reason=self._unsupported(item, SyncDirection.CODE_TO_DESKTOP))

    def _desktop_to_code(self, item: ScannedItem) -> _ItemOutcome:
        if item.kind is not ItemKind.EXTENSION:
            return _ItemOutcome(skip_reason=self._unsupported(item, SyncDirection.DESKTOP_TO_CODE))

        converted = self.extension_converter.convert(item)
        if not converted.success:
            return _ItemOutcome(error=converted.error or "Conversion failed")
        if converted.mcp_registration is not None:
            add_mcp_server_to_settings(
                self.paths.code_settings,
                converted.mcp_registration.name,
                converted.mcp_registration.config,
            )
        target = converted.skill_path
        return _ItemOutcome(target_path=str(target) if target is not None else None)

    @staticmethod
    def _unsupported(item: ScannedItem, direction: SyncDirection) -> str:
        return f"Cannot sync {item.kind.value} items {direction.value}"

    # -- MCP servers -----------------------------------------------------------

    def _sync_mcp(
        self,
        direction: SyncDirection,
        source: Mapping[str, McpServerConfig],
        target: Mapping[str, McpServerConfig],
        result: SyncResult,
    ) -> None:
        diff = get_mcp_server_diff(source, target)
        servers = {name: source[name] for name in diff.to_sync}
        if not servers:
            return
        synced, errors = sync_mcp_servers(self.paths, direction, servers)
        result.synced.extend(f"mcp:{name}" for name in synced)
        result.errors.extend((MCP_ERROR_ID, message) for message in errors)


def execute_sync(
    paths: SyncPaths,
    direction: SyncDirection,
    selected_items: Iterable[ScannedItem],
    source_mcp_servers: Mapping[str, McpServerConfig] | None = None,
    target_mcp_servers: Mapping[str, McpServerConfig] | None = None,
) -> SyncResult:
    """Run a sync with the default converters."""
    return SyncExecutor(paths).execute(
        direction, selected_items, source_mcp_servers, target_mcp_servers,
    )
