"""Sync execution."""

from claudesync.sync.executor import SyncExecutor, execute_sync
from claudesync.sync.models import SyncResult

__all__ = ["SyncExecutor", "SyncResult", "execute_sync"]
