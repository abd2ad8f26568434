"""Restore and enumerate pre-sync backups.

Restoring puts back exactly what the backup captured: captured files
overwrite their live counterparts, captured directories replace the live
directory entirely. Artifacts the backup does not hold are left alone.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from claudesync.backup.models import (
    CODE_DIR,
    CODE_SETTINGS_FILE,
    CODE_SKILLS_DIR,
    DESKTOP_CONFIG_FILE,
    DESKTOP_DIR,
    DESKTOP_EXTENSIONS_DIR,
    DESKTOP_INSTALLATIONS_FILE,
    METADATA_FILE,
    RestoreResult,
)
from claudesync.core.manifest import BackupRecord
from claudesync.core.models import SyncDirection
from claudesync.discovery.paths import SyncPaths
from claudesync.exceptions import RestoreError

logger = logging.getLogger(__name__)


def _restore_plan(paths: SyncPaths, backup_dir: Path) -> list[tuple[str, Path, Path]]:
    code = backup_dir / CODE_DIR
    desktop = backup_dir / DESKTOP_DIR
    return [
        ("Claude Code settings", code / CODE_SETTINGS_FILE, paths.code_settings),
        ("Claude Code skills", code / CODE_SKILLS_DIR, paths.code_skills),
        ("Claude Desktop config", desktop / DESKTOP_CONFIG_FILE, paths.desktop_config),
        (
            "Claude Desktop extensions list",
            desktop / DESKTOP_INSTALLATIONS_FILE,
            paths.desktop_installations,
        ),
        ("Claude Desktop extensions", desktop / DESKTOP_EXTENSIONS_DIR, paths.desktop_extensions),
    ]


def _replace_tree(src: Path, dest: Path) -> None:
    if dest.is_symlink() or dest.is_file():
        dest.unlink()
    elif dest.exists():
        shutil.rmtree(dest)
    shutil.copytree(src, dest, symlinks=True)


def restore_backup(paths: SyncPaths, record: BackupRecord) -> RestoreResult:
    """Put the live environments back to the state captured in ``record``.

    Returns:
        A result listing the restored artifacts. When the backup directory is
        missing nothing is touched and ``success`` is False. A failure part
        way through reports the artifacts restored so far.
    """
    backup_dir = Path(record.path)
    if not backup_dir.is_dir():
        return RestoreResult(success=False, error=f"Backup directory not found: {backup_dir}")

    restored: list[str] = []
    try:
        for label, src, dest in _restore_plan(paths, backup_dir):
            if src.is_dir():
                _replace_tree(src, dest)
            elif src.is_file():
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dest)
            else:
                continue
            restored.append(label)
            logger.debug("Restored %s from %s", label, src)
    except (OSError, shutil.Error) as exc:
        logger.warning("Restore of %s failed", backup_dir, exc_info=True)
        return RestoreResult(success=False, restored_items=restored, error=str(exc))

    logger.info("Restored backup %s (%d item(s))", record.timestamp, len(restored))
    return RestoreResult(success=True, restored_items=restored)


def _read_record(directory: Path) -> BackupRecord | None:
    metadata_path = directory / METADATA_FILE
    if not metadata_path.is_file():
        return None
    try:
        metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
        return BackupRecord(
            timestamp=str(metadata["timestamp"]),
            path=str(directory),
            direction=SyncDirection(metadata["direction"]),
            items_synced=[str(i) for i in metadata.get("itemIds") or []],
        )
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError):
        logger.debug("Skipping unreadable backup %s", directory)
        return None


def list_backups(paths: SyncPaths) -> list[BackupRecord]:
    """Backups found on disk, newest first. Unreadable metadata is skipped."""
    if not paths.backups.is_dir():
        return []
    records: list[BackupRecord] = []
    for entry in paths.backups.iterdir():
        if not entry.is_dir():
            continue
        record = _read_record(entry)
        if record is not None:
            records.append(record)
    records.sort(key=lambda r: r.timestamp, reverse=True)
    return records


def find_backup(paths: SyncPaths, timestamp: str | None = None) -> BackupRecord:
    """Return the backup with ``timestamp``, or the newest when omitted.

    Raises:
        RestoreError: If no matching backup exists.
    """
    backups = list_backups(paths)
    if not backups:
        raise RestoreError("No backups found")
    if timestamp is None:
        return backups[0]
    for record in backups:
        if record.timestamp == timestamp:
            return record
    raise RestoreError(f"No backup with timestamp {timestamp}")
