"""``claudesync diff DIRECTION``: drift since the last sync.

Classifies every source item as new, modified, unchanged, or removed
relative to the sync manifest, and diffs the MCP server maps.

Exit Codes:
    0 on success.
    2 if either environment is missing.
"""

from __future__ import annotations

from pathlib import Path

import click

from claudesync.backup.models import CODE_DIR, CODE_SKILLS_DIR
from claudesync.cli.common import (
    DIRECTION_CHOICE,
    FORMAT_CHOICE,
    comparisons_to_json,
    mcp_diff_to_json,
    scan_ready_environments,
)
from claudesync.cli.output import print_content_diff, print_diff, print_json
from claudesync.core.differ import (
    ComparisonResult,
    DiffStatus,
    compare_with_manifest,
    generate_skill_diff,
    get_mcp_server_diff,
)
from claudesync.core.manifest import SyncManifest, load_manifest
from claudesync.core.models import ItemKind, SyncDirection
from claudesync.discovery import SyncPaths


def previous_skill_content(manifest: SyncManifest, item_id: str, name: str) -> str | None:
    """``SKILL.md`` as captured by the newest backup taken for ``item_id``."""
    for record in reversed(manifest.backups):
        if item_id not in record.items_synced:
            continue
        captured = Path(record.path) / CODE_DIR / CODE_SKILLS_DIR / name / "SKILL.md"
        try:
            return captured.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
    return None


def _content_diff(manifest: SyncManifest, comp: ComparisonResult) -> str | None:
    if comp.item.kind is not ItemKind.SKILL:
        return None
    if comp.status is DiffStatus.NEW:
        return generate_skill_diff(comp.item.path)
    if comp.status is DiffStatus.MODIFIED:
        previous = previous_skill_content(manifest, comp.item.id, comp.item.name)
        return generate_skill_diff(comp.item.path, previous)
    return None


@click.command("diff")
@click.argument("direction", type=DIRECTION_CHOICE)
@click.option(
    "--format", "output_format",
    type=FORMAT_CHOICE,
    default="text",
    help="Output format.",
)
@click.option(
    "--show-content",
    is_flag=True,
    help="Show SKILL.md diffs for new and modified skills.",
)
@click.pass_obj
def diff_command(paths: SyncPaths, direction: str, output_format: str, show_content: bool) -> None:
    """Show what changed in the source environment since the last sync.

    DIRECTION is code-to-desktop or desktop-to-code.
    """
    sync_direction = SyncDirection(direction)
    scan = scan_ready_environments(paths, output_format)
    manifest = load_manifest(paths.manifest)

    comparisons = compare_with_manifest(scan.source_items(sync_direction), manifest, sync_direction)
    mcp_diff = get_mcp_server_diff(
        scan.source_mcp_servers(sync_direction),
        scan.target_mcp_servers(sync_direction),
    )

    if output_format == "json":
        data = {
            "direction": sync_direction.value,
            "items": comparisons_to_json(comparisons),
            "mcp_servers": mcp_diff_to_json(mcp_diff),
        }
        if show_content:
            for entry, comp in zip(data["items"], comparisons):
                entry["content_diff"] = _content_diff(manifest, comp)
        print_json(data)
        return

    print_diff(sync_direction, comparisons, mcp_diff)
    if show_content:
        for comp in comparisons:
            text = _content_diff(manifest, comp)
            if text is not None:
                print_content_diff(comp.item.id, text)
