"""Drift detection against the sync manifest, and MCP-server map diffing.

Item classification
-------------------
``compare_with_manifest`` assigns every scanned item exactly one of
``new``, ``modified``, or ``unchanged`` by identifier, and adds one
``removed`` entry for every manifest record from the current source
environment that the scan no longer finds. Identity is always the
identifier; a name match against a record from the other environment is
only attached to *new* items as a hint that a counterpart already exists.

MCP servers
-----------
``get_mcp_server_diff`` compares whole launch descriptors. Argument order
is significant, so a reordered argument list counts as an update.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping

from claudesync.core.manifest import SyncItem, SyncManifest
from claudesync.core.models import McpServerConfig, ScannedItem, SyncDirection

SKILL_PREVIEW_CHARS = 500


class DiffStatus(str, Enum):
    """Classification of one item relative to the manifest."""

    NEW = "new"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    REMOVED = "removed"


@dataclass
class ComparisonResult:
    """One classified item.

    Attributes:
        item: The scanned item, or for ``removed`` entries a stand-in
            rebuilt from the manifest record.
        status: Classification.
        previous_hash: Fingerprint recorded at the last sync (``modified``
            only).
        linked_item: Manifest record with the same name from the other
            environment (``new`` only).
    """

    item: ScannedItem
    status: DiffStatus
    previous_hash: str | None = None
    linked_item: SyncItem | None = None


@dataclass
class McpServerDiff:
    """Server names from the source map, split by what the target needs.

    Attributes:
        to_add: Absent from the target.
        to_update: Present in the target with a different descriptor.
        existing: Present in the target with an identical descriptor.
    """

    to_add: list[str] = field(default_factory=list)
    to_update: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)

    @property
    def to_sync(self) -> list[str]:
        """Names that must be written to the target, in source order."""
        return self.to_add + self.to_update


@dataclass
class DiffSummary:
    """Identifier lists per classification, for summary reporting."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)


def _removed_stand_in(record: SyncItem) -> ScannedItem:
    return ScannedItem(
        id=record.id,
        kind=record.kind,
        name=record.name,
        display_name=record.display_name,
        path=Path(record.source_path),
        hash=record.source_hash,
        app=record.source_app,
    )


def compare_with_manifest(
    items: Iterable[ScannedItem],
    manifest: SyncManifest,
    direction: SyncDirection,
) -> list[ComparisonResult]:
    """Classify scanned items against the manifest.

    Args:
        items: Fresh scan of the source environment.
        manifest: The current sync manifest.
        direction: Sync direction; its source environment decides which
            manifest records can be reported as removed.

    Returns:
        One result per scanned item, in scan order, followed by one
        ``removed`` result per missing manifest record.
    """
    source_app = direction.source
    scanned = list(items)
    results: list[ComparisonResult] = []

    for item in scanned:
        record = manifest.items.get(item.id)
        if record is None:
            linked = next(
                (
                    other for other in manifest.items.values()
                    if other.name == item.name and other.source_app is not source_app
                ),
                None,
            )
            results.append(ComparisonResult(item=item, status=DiffStatus.NEW, linked_item=linked))
        elif record.source_hash != item.hash:
            results.append(ComparisonResult(
                item=item, status=DiffStatus.MODIFIED, previous_hash=record.source_hash,
            ))
        else:
            results.append(ComparisonResult(item=item, status=DiffStatus.UNCHANGED))

    scanned_ids = {item.id for item in scanned}
    for item_id, record in manifest.items.items():
        if record.source_app is not source_app or item_id in scanned_ids:
            continue
        results.append(ComparisonResult(item=_removed_stand_in(record), status=DiffStatus.REMOVED))

    return results


def get_mcp_server_diff(
    source: Mapping[str, McpServerConfig],
    target: Mapping[str, McpServerConfig],
) -> McpServerDiff:
    """Split source server names into to-add, to-update, and existing."""
    diff = McpServerDiff()
    for name, config in source.items():
        current = target.get(name)
        if current is None:
            diff.to_add.append(name)
        elif current.serialized() != config.serialized():
            diff.to_update.append(name)
        else:
            diff.existing.append(name)
    return diff


def categorize_diffs(comparisons: Iterable[ComparisonResult]) -> DiffSummary:
    """Project comparison results into identifier lists per status."""
    summary = DiffSummary()
    buckets = {
        DiffStatus.NEW: summary.added,
        DiffStatus.REMOVED: summary.removed,
        DiffStatus.MODIFIED: summary.modified,
        DiffStatus.UNCHANGED: summary.unchanged,
    }
    for comparison in comparisons:
        buckets[comparison.status].append(comparison.item.id)
    return summary


# ---------------------------------------------------------------------------
# Content diffs for review
# ---------------------------------------------------------------------------


def _read_for_diff(path: Path) -> str:
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return "[Could not read file]"


def generate_skill_diff(skill_path: Path, previous_content: str | None = None) -> str:
    """Describe how a skill's ``SKILL.md`` changed.

    Args:
        skill_path: Skill directory (symlinks are followed).
        previous_content: ``SKILL.md`` text from before the change. When
            omitted the skill is treated as new and a preview is returned.

    Returns:
        A unified diff, a ``[New skill]`` preview, or a placeholder when
        the marker file is missing.
    """
    skill_md = Path(skill_path) / "SKILL.md"
    if not skill_md.is_file():
        return "[SKILL.md not found]"

    current = _read_for_diff(skill_md)
    if not previous_content:
        preview = current[:SKILL_PREVIEW_CHARS]
        suffix = "..." if len(current) > SKILL_PREVIEW_CHARS else ""
        return f"[New skill]\n\n{preview}{suffix}"

    return "".join(difflib.unified_diff(
        previous_content.splitlines(keepends=True),
        current.splitlines(keepends=True),
        fromfile="a/SKILL.md",
        tofile="b/SKILL.md",
    ))
