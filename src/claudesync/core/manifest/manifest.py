"""The sync manifest: claudesync's persisted ledger of synced items and backups.

``SyncManifest`` is an immutable value. Every change returns a new manifest,
so the executor threads one value through load, update, and save without any
shared mutable state::

    manifest = load_manifest(paths.manifest)
    manifest = manifest.with_backup(record)
    manifest = manifest.with_item(sync_item)
    save_manifest(manifest.with_last_sync(now), paths.manifest)

Invariants:

- Every ``SyncItem.id`` equals its key in ``items``.
- ``backups`` is only ever appended to, never reordered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from claudesync.core.manifest.models import BackupRecord, SyncItem
from claudesync.core.models import AppType, ItemStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncManifest:
    """Persisted record of previously synced items and backup history.

    Attributes:
        version: Manifest format version.
        last_sync: ISO-8601 timestamp of the last completed sync run.
        items: Read-only mapping of identifier to ``SyncItem``.
        backups: Backup records in creation order.
    """

    MANIFEST_VERSION = 1

    version: int = MANIFEST_VERSION
    last_sync: str | None = None
    items: Mapping[str, SyncItem] = field(default_factory=lambda: MappingProxyType({}))
    backups: tuple[BackupRecord, ...] = ()

    # -- Immutable updates -------------------------------------------------

    def with_item(self, item: SyncItem) -> SyncManifest:
        """Return a manifest with ``item`` added or replaced under its id."""
        items = dict(self.items)
        items[item.id] = item
        return replace(self, items=MappingProxyType(items))

    def with_backup(self, record: BackupRecord) -> SyncManifest:
        """Return a manifest with ``record`` appended to the backup history."""
        return replace(self, backups=self.backups + (record,))

    def with_last_sync(self, timestamp: str) -> SyncManifest:
        return replace(self, last_sync=timestamp)

    # -- Lookups -----------------------------------------------------------

    def get_item(self, item_id: str) -> SyncItem | None:
        return self.items.get(item_id)

    def get_item_by_name(self, name: str, app: AppType) -> SyncItem | None:
        """Return the item named ``name`` whose source is ``app``."""
        for item in self.items.values():
            if item.name == name and item.source_app is app:
                return item
        return None

    def synced_count(self) -> int:
        return sum(1 for item in self.items.values() if item.status is ItemStatus.SYNCED)

    # -- Serialization -----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``manifest.json`` shape."""
        out: dict[str, Any] = {"version": self.version}
        if self.last_sync is not None:
            out["lastSync"] = self.last_sync
        out["items"] = {key: item.to_dict() for key, item in self.items.items()}
        out["backups"] = [record.to_dict() for record in self.backups]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncManifest:
        """Deserialize a manifest, dropping entries that cannot be parsed.

        Malformed item or backup entries are logged and skipped; the rest
        of the manifest still loads.
        """
        items: dict[str, SyncItem] = {}
        raw_items = data.get("items", {})
        if isinstance(raw_items, dict):
            for key, entry in raw_items.items():
                try:
                    items[key] = SyncItem.from_dict(entry, item_id=key)
                except (KeyError, ValueError, TypeError, AttributeError):
                    logger.warning("Dropping unreadable manifest item %r", key)

        backups: list[BackupRecord] = []
        raw_backups = data.get("backups", [])
        if isinstance(raw_backups, list):
            for entry in raw_backups:
                try:
                    backups.append(BackupRecord.from_dict(entry))
                except (KeyError, ValueError, TypeError, AttributeError):
                    logger.warning("Dropping unreadable backup record: %r", entry)

        version = data.get("version", cls.MANIFEST_VERSION)
        return cls(
            version=version if isinstance(version, int) else cls.MANIFEST_VERSION,
            last_sync=data.get("lastSync"),
            items=MappingProxyType(items),
            backups=tuple(backups),
        )
