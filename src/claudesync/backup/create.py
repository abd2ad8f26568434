"""Pre-sync snapshots of both environments.

Layout of one backup directory::

    <backups>/<timestamp>/
        metadata.json
        claude-code/settings.json
        claude-code/skills/...
        claude-desktop/claude_desktop_config.json
        claude-desktop/extensions-installations.json
        claude-desktop/extensions/...

Artifacts that do not exist at backup time are simply absent. Symlinks
inside copied trees are copied as links.
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from claudesync.backup.models import (
    CODE_DIR,
    CODE_SETTINGS_FILE,
    CODE_SKILLS_DIR,
    DESKTOP_CONFIG_FILE,
    DESKTOP_DIR,
    DESKTOP_EXTENSIONS_DIR,
    DESKTOP_INSTALLATIONS_FILE,
    METADATA_FILE,
)
from claudesync.core.manifest import BackupRecord
from claudesync.core.models import SyncDirection
from claudesync.discovery.paths import SyncPaths
from claudesync.exceptions import BackupError

logger = logging.getLogger(__name__)


def backup_timestamp(now: datetime | None = None) -> str:
    """Filesystem-safe, lexically sortable UTC timestamp.

    >>> backup_timestamp(datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
    '2025-01-02T03-04-05-678000Z'
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def _copy_file(src: Path, dest: Path) -> None:
    if src.is_file():
        shutil.copy2(src, dest)


def _copy_tree(src: Path, dest: Path) -> None:
    if src.is_dir():
        shutil.copytree(src, dest, symlinks=True)


def _reserve_directory(backups_root: Path, timestamp: str) -> tuple[str, Path]:
    backups_root.mkdir(parents=True, exist_ok=True)
    name = timestamp
    suffix = 1
    while True:
        candidate = backups_root / name
        try:
            candidate.mkdir()
            return name, candidate
        except FileExistsError:
            name = f"{timestamp}-{suffix}"
            suffix += 1


def create_backup(
    paths: SyncPaths,
    direction: SyncDirection,
    item_ids: Iterable[str],
) -> BackupRecord:
    """Snapshot every artifact a sync may touch.

    Args:
        paths: Filesystem layout.
        direction: Direction of the sync about to run.
        item_ids: Identifiers selected for the sync.

    Returns:
        The record describing the new backup.

    Raises:
        BackupError: If any part of the snapshot cannot be written.
    """
    ids = list(item_ids)
    try:
        timestamp, backup_dir = _reserve_directory(paths.backups, backup_timestamp())
    except OSError as exc:
        raise BackupError(f"Failed to create backup: {exc}") from exc

    try:
        code_dir = backup_dir / CODE_DIR
        desktop_dir = backup_dir / DESKTOP_DIR
        code_dir.mkdir()
        desktop_dir.mkdir()

        _copy_file(paths.code_settings, code_dir / CODE_SETTINGS_FILE)
        _copy_tree(paths.code_skills, code_dir / CODE_SKILLS_DIR)
        _copy_file(paths.desktop_config, desktop_dir / DESKTOP_CONFIG_FILE)
        _copy_file(paths.desktop_installations, desktop_dir / DESKTOP_INSTALLATIONS_FILE)
        _copy_tree(paths.desktop_extensions, desktop_dir / DESKTOP_EXTENSIONS_DIR)

        metadata = {
            "timestamp": timestamp,
            "direction": direction.value,
            "itemIds": ids,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        (backup_dir / METADATA_FILE).write_text(
            json.dumps(metadata, indent=2) + "\n", encoding="utf-8",
        )
    except (OSError, shutil.Error) as exc:
        shutil.rmtree(backup_dir, ignore_errors=True)
        raise BackupError(f"Failed to create backup: {exc}") from exc

    logger.info("Created backup %s", backup_dir)
    return BackupRecord(
        timestamp=timestamp,
        path=str(backup_dir),
        direction=direction,
        items_synced=ids,
    )
