"""Manifest persistence: load with defaults, save atomically.

Loading never fails: a missing or unparsable ``manifest.json`` yields an
empty manifest, the same as a first run. Saving writes to a temporary file
in the same directory and renames it over the target, so a crash mid-write
leaves the previous manifest intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from claudesync.core.manifest.manifest import SyncManifest
from claudesync.exceptions import ManifestError

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> SyncManifest:
    """Read the sync manifest, falling back to an empty one.

    Args:
        path: Location of ``manifest.json``.

    Returns:
        The stored manifest, or a fresh ``SyncManifest()`` if the file is
        absent, unreadable, or not a JSON object.
    """
    if not path.is_file():
        return SyncManifest()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Unreadable sync manifest at %s; starting fresh", path, exc_info=True)
        return SyncManifest()
    if not isinstance(data, dict):
        logger.warning("Sync manifest at %s is not a JSON object; starting fresh", path)
        return SyncManifest()
    return SyncManifest.from_dict(data)


def save_manifest(manifest: SyncManifest, path: Path) -> None:
    """Write the manifest as pretty-printed JSON, atomically.

    Creates parent directories if they do not exist.

    Raises:
        ManifestError: If the file cannot be written.
    """
    text = json.dumps(manifest.to_dict(), indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".manifest-", suffix=".json", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise ManifestError(f"Cannot write sync manifest {path}: {exc}") from exc
    logger.debug("Saved sync manifest with %d item(s) to %s", len(manifest.items), path)
