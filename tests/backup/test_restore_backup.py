"""Tests for restoring and listing backups."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from claudesync.backup import create_backup, find_backup, list_backups, restore_backup
from claudesync.core.manifest import BackupRecord
from claudesync.core.models import SyncDirection
from claudesync.discovery import SyncPaths
from claudesync.exceptions import RestoreError
from tests.helpers import (
    create_skill,
    extension_manifest,
    install_extension,
    read_json,
    write_json,
)


class TestRestoreBackup:
    """Putting captured artifacts back."""

    def test_settings_only_backup(self, both_envs: SyncPaths, tmp_path: Path) -> None:
        """A backup holding only settings restores exactly that one artifact."""
        backup_dir = tmp_path / "manual-backup"
        write_json(backup_dir / "claude-code" / "settings.json", {"restored": True})
        write_json(both_envs.code_settings, {"restored": False})
        write_json(both_envs.desktop_config, {"untouched": True})
        create_skill(both_envs, "live")

        record = BackupRecord("t", str(backup_dir), SyncDirection.CODE_TO_DESKTOP, [])
        result = restore_backup(both_envs, record)

        assert result.success
        assert result.restored_items == ["Claude Code settings"]
        assert read_json(both_envs.code_settings) == {"restored": True}
        assert read_json(both_envs.desktop_config) == {"untouched": True}
        assert (both_envs.code_skills / "live" / "SKILL.md").is_file()

    def test_directories_replace_live_tree(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "kept")
        record = create_backup(both_envs, SyncDirection.DESKTOP_TO_CODE, [])
        create_skill(both_envs, "added-later")
        shutil.rmtree(both_envs.code_skills / "kept")

        result = restore_backup(both_envs, record)

        assert "Claude Code skills" in result.restored_items
        assert sorted(p.name for p in both_envs.code_skills.iterdir()) == ["kept"]

    def test_full_labels_in_order(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "s")
        install_extension(both_envs, "e", extension_manifest())
        record = create_backup(both_envs, SyncDirection.CODE_TO_DESKTOP, [])
        result = restore_backup(both_envs, record)
        assert result.restored_items == [
            "Claude Code settings",
            "Claude Code skills",
            "Claude Desktop config",
            "Claude Desktop extensions list",
            "Claude Desktop extensions",
        ]

    def test_missing_backup_directory(self, both_envs: SyncPaths, tmp_path: Path) -> None:
        write_json(both_envs.code_settings, {"live": True})
        record = BackupRecord("t", str(tmp_path / "gone"), SyncDirection.CODE_TO_DESKTOP, [])
        result = restore_backup(both_envs, record)
        assert not result.success
        assert result.restored_items == []
        assert "not found" in (result.error or "")
        assert read_json(both_envs.code_settings) == {"live": True}


class TestListBackups:
    """Enumeration and selection."""

    def test_newest_first(self, both_envs: SyncPaths) -> None:
        first = create_backup(both_envs, SyncDirection.CODE_TO_DESKTOP, ["skill:a"])
        second = create_backup(both_envs, SyncDirection.DESKTOP_TO_CODE, [])
        listed = list_backups(both_envs)
        assert [r.timestamp for r in listed] == [second.timestamp, first.timestamp]
        assert listed[1].items_synced == ["skill:a"]

    def test_unreadable_metadata_skipped(self, both_envs: SyncPaths) -> None:
        create_backup(both_envs, SyncDirection.CODE_TO_DESKTOP, [])
        junk = both_envs.backups / "junk"
        junk.mkdir()
        (junk / "metadata.json").write_text("{", encoding="utf-8")
        assert len(list_backups(both_envs)) == 1

    def test_no_backups_directory(self, paths: SyncPaths) -> None:
        assert list_backups(paths) == []

    def test_find_backup(self, both_envs: SyncPaths) -> None:
        first = create_backup(both_envs, SyncDirection.CODE_TO_DESKTOP, [])
        second = create_backup(both_envs, SyncDirection.CODE_TO_DESKTOP, [])
        assert find_backup(both_envs).timestamp == second.timestamp
        assert find_backup(both_envs, first.timestamp).timestamp == first.timestamp
        with pytest.raises(RestoreError):
            find_backup(both_envs, "1999-01-01T00-00-00-000000Z")

    def test_find_backup_without_any(self, paths: SyncPaths) -> None:
        with pytest.raises(RestoreError):
            find_backup(paths)
