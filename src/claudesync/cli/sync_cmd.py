"""``claudesync sync DIRECTION``: apply changes from one environment to the other.

Selects new and modified items (or the ``--item`` identifiers given), takes
a backup of both environments, converts each item, copies missing or changed
MCP servers, and records the run in the sync manifest.

Exit Codes:
    0 when everything selected was synced or deliberately skipped.
    1 when the backup or any item failed.
    2 when there is nothing to sync or an environment is missing.
"""

from __future__ import annotations

import sys

import click

from claudesync.cli.common import DIRECTION_CHOICE, FORMAT_CHOICE, scan_ready_environments
from claudesync.cli.output import print_json, print_sync_result
from claudesync.core.differ import DiffStatus, compare_with_manifest, get_mcp_server_diff
from claudesync.core.manifest import load_manifest
from claudesync.core.models import ScannedItem, SyncDirection
from claudesync.discovery import SyncPaths
from claudesync.exceptions import ClaudeSyncError
from claudesync.sync import SyncExecutor, SyncResult


def _result_to_json(direction: SyncDirection, result: SyncResult) -> dict:
    return {
        "direction": direction.value,
        "success": result.success,
        "synced": result.synced,
        "skipped": [{"id": i, "reason": r} for i, r in result.skipped],
        "errors": [{"id": i, "error": e} for i, e in result.errors],
        "registry_recommendations": [
            {"id": i, "extension_id": ext} for i, ext in result.registry_recommendations
        ],
        "backup_path": result.backup_path,
    }


def _select_items(
    source_items: list[ScannedItem],
    changed: list[ScannedItem],
    requested: tuple[str, ...],
) -> list[ScannedItem]:
    if not requested:
        return changed
    by_id = {item.id: item for item in source_items}
    unknown = [item_id for item_id in requested if item_id not in by_id]
    if unknown:
        raise click.BadParameter(
            f"not found in the source environment: {', '.join(unknown)}",
            param_hint="--item",
        )
    return [by_id[item_id] for item_id in dict.fromkeys(requested)]


@click.command("sync")
@click.argument("direction", type=DIRECTION_CHOICE)
@click.option(
    "--item", "item_ids",
    multiple=True,
    metavar="ID",
    help="Sync only this item (repeatable), e.g. skill:pdf-tools.",
)
@click.option(
    "--all-changed",
    is_flag=True,
    help="Sync every new and modified item (the default without --item).",
)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.option(
    "--format", "output_format",
    type=FORMAT_CHOICE,
    default="text",
    help="Output format.",
)
@click.pass_obj
def sync_command(
    paths: SyncPaths,
    direction: str,
    item_ids: tuple[str, ...],
    all_changed: bool,
    yes: bool,
    output_format: str,
) -> None:
    """Sync changes from one environment into the other.

    DIRECTION is code-to-desktop or desktop-to-code. A backup is taken
    first; use ``claudesync rollback`` to undo.
    """
    if item_ids and all_changed:
        raise click.UsageError("--item and --all-changed are mutually exclusive")

    sync_direction = SyncDirection(direction)
    scan = scan_ready_environments(paths, output_format)
    manifest = load_manifest(paths.manifest)

    source_items = scan.source_items(sync_direction)
    comparisons = compare_with_manifest(source_items, manifest, sync_direction)
    changed = [
        comp.item for comp in comparisons
        if comp.status in (DiffStatus.NEW, DiffStatus.MODIFIED)
    ]
    selected = _select_items(source_items, changed, item_ids)

    source_mcp = scan.source_mcp_servers(sync_direction)
    target_mcp = scan.target_mcp_servers(sync_direction)
    mcp_pending = get_mcp_server_diff(source_mcp, target_mcp).to_sync

    if not selected and not mcp_pending:
        if output_format == "json":
            print_json({"direction": sync_direction.value, "synced": [], "summary": "Nothing to sync"})
        else:
            click.echo("Nothing to sync.")
        sys.exit(2)

    if not yes:
        names = [item.id for item in selected] + [f"mcp:{name}" for name in mcp_pending]
        click.echo(f"{sync_direction.label}: {len(names)} change(s)")
        for name in names:
            click.echo(f"  {name}")
        click.confirm("Proceed?", abort=True)

    try:
        result = SyncExecutor(paths).execute(sync_direction, selected, source_mcp, target_mcp)
    except ClaudeSyncError as exc:
        raise click.ClickException(str(exc)) from exc

    if output_format == "json":
        print_json(_result_to_json(sync_direction, result))
    else:
        print_sync_result(result)
    sys.exit(0 if result.success else 1)
