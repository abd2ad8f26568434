"""Sync manifest data models: SyncItem and BackupRecord.

Both serialize to the camelCase JSON keys used by ``manifest.json`` and
``metadata.json`` so that state written by earlier releases keeps loading.
Unknown keys are ignored and missing optional keys take their defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from claudesync.core.models import AppType, ItemKind, ItemStatus, SyncDirection


# ---------------------------------------------------------------------------
# SyncItem: one previously synced artifact
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SyncItem:
    """A manifest record of an item that has been synced at least once.

    Attributes:
        id: Kind-prefixed identifier; always equal to its manifest key.
        kind: Artifact kind.
        name: Artifact name in the source environment.
        display_name: Human-readable name.
        source_app: Environment the item was synced from.
        source_path: Location in the source environment.
        source_hash: Fingerprint of the source at sync time. Drift is any
            difference between this and a fresh scan.
        target_app: Environment the item was synced into.
        target_path: Location written in the target, if any.
        target_hash: Fingerprint of the written target, if computed.
        registry_id: Registry package recommended in place of this item.
        registry_version: Version of the registry package, if known.
        status: Last recorded status.
        last_synced: ISO-8601 timestamp of the last successful sync.
        skip_reason: Why the item was last skipped.
        linked_to: Identifier of the counterpart item with the same name in
            the other environment.
    """

    id: str
    kind: ItemKind
    name: str
    display_name: str
    source_app: AppType
    source_path: str
    source_hash: str
    target_app: AppType | None = None
    target_path: str | None = None
    target_hash: str | None = None
    registry_id: str | None = None
    registry_version: str | None = None
    status: ItemStatus = ItemStatus.SYNCED
    last_synced: str | None = None
    skip_reason: str | None = None
    linked_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the manifest JSON shape, omitting unset fields."""
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "name": self.name,
            "displayName": self.display_name,
            "sourceApp": self.source_app.value,
            "sourcePath": self.source_path,
            "sourceHash": self.source_hash,
        }
        optional: dict[str, Any] = {
            "targetApp": self.target_app.value if self.target_app else None,
            "targetPath": self.target_path,
            "targetHash": self.target_hash,
            "registryId": self.registry_id,
            "registryVersion": self.registry_version,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        out["status"] = self.status.value
        for key, value in (
            ("lastSynced", self.last_synced),
            ("skipReason", self.skip_reason),
            ("linkedTo", self.linked_to),
        ):
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, item_id: str | None = None) -> SyncItem:
        """Deserialize a manifest entry.

        Args:
            data: The JSON object stored under the item's key.
            item_id: The manifest key. When given it wins over ``data["id"]``
                so that identifiers always match their keys.

        Raises:
            ValueError: If a required field is missing or an enum value is
                unknown.
        """
        ident = item_id if item_id is not None else data.get("id")
        if not ident:
            raise ValueError("sync item has no id")
        target_app = data.get("targetApp")
        return cls(
            id=str(ident),
            kind=ItemKind(data["type"]),
            name=str(data.get("name", "")),
            display_name=str(data.get("displayName") or data.get("name", "")),
            source_app=AppType(data["sourceApp"]),
            source_path=str(data.get("sourcePath", "")),
            source_hash=str(data.get("sourceHash", "")),
            target_app=AppType(target_app) if target_app else None,
            target_path=data.get("targetPath"),
            target_hash=data.get("targetHash"),
            registry_id=data.get("registryId"),
            registry_version=data.get("registryVersion"),
            status=ItemStatus(data.get("status", ItemStatus.SYNCED.value)),
            last_synced=data.get("lastSynced"),
            skip_reason=data.get("skipReason"),
            linked_to=data.get("linkedTo"),
        )


# ---------------------------------------------------------------------------
# BackupRecord: one pre-sync snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BackupRecord:
    """A snapshot taken before a sync attempt. Immutable once created.

    Attributes:
        timestamp: Filesystem-safe, lexically sortable UTC timestamp; also
            the backup directory name.
        path: Absolute path of the backup directory.
        direction: Direction of the sync the backup preceded.
        items_synced: Identifiers selected for that sync attempt.
    """

    timestamp: str
    path: str
    direction: SyncDirection
    items_synced: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "path": self.path,
            "direction": self.direction.value,
            "itemsSynced": list(self.items_synced),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackupRecord:
        return cls(
            timestamp=str(data["timestamp"]),
            path=str(data["path"]),
            direction=SyncDirection(data["direction"]),
            items_synced=[str(i) for i in data.get("itemsSynced", [])],
        )
