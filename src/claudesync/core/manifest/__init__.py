"""Sync manifest: the persisted ledger behind drift detection.

The package is split into focused submodules:

- ``models``: ``SyncItem`` and ``BackupRecord`` with their JSON forms.
- ``manifest``: the immutable ``SyncManifest`` value and its lookups.
- ``operations``: ``load_manifest`` and ``save_manifest``.

All public names are re-exported here::

    from claudesync.core.manifest import SyncManifest, load_manifest
"""

from claudesync.core.manifest.models import BackupRecord, SyncItem
from claudesync.core.manifest.manifest import SyncManifest
from claudesync.core.manifest.operations import load_manifest, save_manifest

__all__ = [
    "BackupRecord",
    "SyncItem",
    "SyncManifest",
    "load_manifest",
    "save_manifest",
]
