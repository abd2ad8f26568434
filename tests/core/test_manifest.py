"""Tests for the sync manifest value, its JSON form, and persistence.

Verifies:
    - Updates return new manifests and leave the original untouched.
    - Lookups by source path, name, and linked counterpart.
    - camelCase JSON shape and tolerant loading.
    - Atomic save and empty fallback on load.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from claudesync.core.manifest import (
    BackupRecord,
    SyncItem,
    SyncManifest,
    load_manifest,
    save_manifest,
)
from claudesync.core.models import AppType, ItemKind, ItemStatus, SyncDirection
from claudesync.exceptions import ManifestError


def make_sync_item(
    name: str = "pdf",
    app: AppType = AppType.CODE,
    kind: ItemKind = ItemKind.SKILL,
    source_hash: str = "aaaaaaaaaaaa",
    status: ItemStatus = ItemStatus.SYNCED,
) -> SyncItem:
    return SyncItem(
        id=f"{kind.value}:{name}",
        kind=kind,
        name=name,
        display_name=name.title(),
        source_app=app,
        source_path=f"/src/{app.value}/{name}",
        source_hash=source_hash,
        status=status,
    )


class TestImmutableUpdates:
    """with_item / with_backup / with_last_sync."""

    def test_with_item_returns_new_value(self) -> None:
        """The original manifest is unchanged after with_item."""
        empty = SyncManifest()
        updated = empty.with_item(make_sync_item())
        assert len(empty.items) == 0
        assert "skill:pdf" in updated.items

    def test_with_item_replaces_same_id(self) -> None:
        """A second record under the same id replaces the first."""
        m = SyncManifest().with_item(make_sync_item(source_hash="111111111111"))
        m = m.with_item(make_sync_item(source_hash="222222222222"))
        assert len(m.items) == 1
        assert m.items["skill:pdf"].source_hash == "222222222222"

    def test_items_mapping_is_read_only(self) -> None:
        """items cannot be mutated in place."""
        m = SyncManifest().with_item(make_sync_item())
        with pytest.raises(TypeError):
            m.items["skill:x"] = make_sync_item("x")  # type: ignore[index]

    def test_with_backup_appends(self) -> None:
        """Backups are appended in order."""
        r1 = BackupRecord("t1", "/b/t1", SyncDirection.CODE_TO_DESKTOP, ["skill:a"])
        r2 = BackupRecord("t2", "/b/t2", SyncDirection.DESKTOP_TO_CODE, [])
        m = SyncManifest().with_backup(r1).with_backup(r2)
        assert [b.timestamp for b in m.backups] == ["t1", "t2"]

    def test_with_last_sync(self) -> None:
        assert SyncManifest().with_last_sync("2025-01-01T00:00:00Z").last_sync == "2025-01-01T00:00:00Z"


class TestLookups:
    """Manifest query helpers."""

    def test_get_item_by_name_respects_app(self) -> None:
        m = SyncManifest().with_item(make_sync_item("pdf", AppType.CODE))
        assert m.get_item_by_name("pdf", AppType.CODE) is not None
        assert m.get_item_by_name("pdf", AppType.DESKTOP) is None

    def test_synced_count(self) -> None:
        m = (
            SyncManifest()
            .with_item(make_sync_item("a"))
            .with_item(make_sync_item("b", status=ItemStatus.SKIPPED))
        )
        assert m.synced_count() == 1


class TestSerialization:
    """JSON shape of manifest.json."""

    def test_camel_case_keys(self) -> None:
        item = make_sync_item()
        data = SyncManifest().with_item(item).with_last_sync("ts").to_dict()
        entry = data["items"]["skill:pdf"]
        assert data["lastSync"] == "ts"
        assert entry["type"] == "skill"
        assert entry["sourceApp"] == "code"
        assert entry["displayName"] == "Pdf"
        assert "targetPath" not in entry

    def test_round_trip(self) -> None:
        record = BackupRecord("t1", "/b/t1", SyncDirection.CODE_TO_DESKTOP, ["skill:pdf"])
        original = SyncManifest().with_item(make_sync_item()).with_backup(record)
        restored = SyncManifest.from_dict(json.loads(json.dumps(original.to_dict())))
        assert restored == original

    def test_key_wins_over_embedded_id(self) -> None:
        """The manifest key is the item identifier."""
        entry = make_sync_item().to_dict()
        entry["id"] = "skill:other"
        m = SyncManifest.from_dict({"version": 1, "items": {"skill:pdf": entry}})
        assert m.items["skill:pdf"].id == "skill:pdf"

    def test_malformed_entries_dropped(self) -> None:
        """Unreadable items and backups are skipped, the rest loads."""
        data = {
            "version": 1,
            "items": {
                "skill:ok": make_sync_item("ok").to_dict(),
                "skill:bad": {"type": "not-a-kind", "sourceApp": "code"},
            },
            "backups": [{"timestamp": "t"}],
        }
        m = SyncManifest.from_dict(data)
        assert list(m.items) == ["skill:ok"]
        assert m.backups == ()


class TestPersistence:
    """load_manifest / save_manifest."""

    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        m = load_manifest(tmp_path / "manifest.json")
        assert m == SyncManifest()

    def test_corrupt_file_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_manifest(path) == SyncManifest()

    def test_non_object_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_manifest(path) == SyncManifest()

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "manifest.json"
        m = SyncManifest().with_item(make_sync_item()).with_last_sync("ts")
        save_manifest(m, path)
        assert load_manifest(path) == m

    def test_save_writes_indented_json_with_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "manifest.json"
        save_manifest(SyncManifest(), path)
        text = path.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert '\n  "version": 1' in text

    def test_save_leaves_no_temp_files(self, tmp_path: Path) -> None:
        save_manifest(SyncManifest(), tmp_path / "manifest.json")
        assert [p.name for p in tmp_path.iterdir()] == ["manifest.json"]

    def test_save_failure_raises_manifest_error(self, tmp_path: Path) -> None:
        """A parent that is a file cannot hold the manifest."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ManifestError):
            save_manifest(SyncManifest(), blocker / "manifest.json")
