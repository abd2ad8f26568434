"""Pre-sync backups and rollback."""

from claudesync.backup.create import create_backup
from claudesync.backup.models import RestoreResult
from claudesync.backup.restore import find_backup, list_backups, restore_backup

__all__ = [
    "RestoreResult",
    "create_backup",
    "find_backup",
    "list_backups",
    "restore_backup",
]
