"""Content fingerprints for drift detection.

Every fingerprint is a SHA-256 digest truncated to 12 hex characters. The
short form is meant for display and local change detection, not for
integrity or security checks.

``hash_directory`` walks a tree in sorted name order at every level so the
result does not depend on filesystem iteration order. Only file bytes feed
the digest: two trees whose files have the same contents in the same sorted
traversal order hash identically even if their directory names differ.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any

DIGEST_LENGTH: int = 12

# Directory names never descended into when hashing a tree.
IGNORED_DIRECTORIES: frozenset[str] = frozenset({".git", "node_modules"})

_CHUNK_SIZE = 64 * 1024


def _truncate(digest: Any) -> str:
    return digest.hexdigest()[:DIGEST_LENGTH]


def _update_from_file(digest: Any, path: Path) -> None:
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)


def hash_file(path: Path) -> str:
    """Return the truncated SHA-256 digest of a file's bytes.

    Args:
        path: File to hash.

    Returns:
        12-character lowercase hex string.

    Raises:
        OSError: If the file cannot be read.
    """
    digest = hashlib.sha256()
    _update_from_file(digest, Path(path))
    return _truncate(digest)


def hash_directory(path: Path) -> str:
    """Return the truncated SHA-256 digest of every file under a directory.

    Entries are visited depth-first in sorted name order. ``.git`` and
    ``node_modules`` directories are skipped wherever they appear.

    Args:
        path: Root of the tree to hash. Symlinks inside the tree are
            followed.

    Returns:
        12-character lowercase hex string.

    Raises:
        OSError: If a directory or file cannot be read.
    """
    digest = hashlib.sha256()

    def _walk(directory: Path) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name in IGNORED_DIRECTORIES:
                continue
            if entry.is_dir():
                _walk(entry)
            else:
                _update_from_file(digest, entry)

    _walk(Path(path))
    return _truncate(digest)


def hash_string(text: str) -> str:
    """Return the truncated SHA-256 digest of a string's UTF-8 bytes."""
    return _truncate(hashlib.sha256(text.encode("utf-8")))
