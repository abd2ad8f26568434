"""Rich output formatting helpers for the claudesync CLI.

Status Color Mapping:
    new = green, modified = yellow, removed = red, unchanged = dim
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from claudesync.backup.models import RestoreResult
from claudesync.convert.registry import registry_install_instructions
from claudesync.core.differ import ComparisonResult, DiffStatus, McpServerDiff, categorize_diffs
from claudesync.core.manifest import BackupRecord, SyncManifest
from claudesync.core.models import AppType, ItemKind, SyncDirection
from claudesync.discovery.models import EnvironmentStatus, ScanResult
from claudesync.sync.models import SyncResult

_STATUS_STYLES: dict[DiffStatus, str] = {
    DiffStatus.NEW: "green",
    DiffStatus.MODIFIED: "yellow",
    DiffStatus.REMOVED: "red",
    DiffStatus.UNCHANGED: "dim",
}

console = Console()


def status_style(status: DiffStatus) -> str:
    """Return the Rich style string for a diff status."""
    return _STATUS_STYLES.get(status, "white")


def _presence(found: bool) -> Text:
    return Text("found", style="green") if found else Text("missing", style="red")


def print_environment_status(
    env: EnvironmentStatus,
    scan: ScanResult | None,
    manifest: SyncManifest,
    backup_count: int,
) -> None:
    """Print the environment probe, inventory counts, and sync history."""
    table = Table(title="Environments", show_header=True, header_style="bold")
    table.add_column("Environment", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Skills", justify="right")
    table.add_column("Plugins", justify="right")
    table.add_column("Extensions", justify="right")
    table.add_column("MCP servers", justify="right")

    for app, found in ((AppType.CODE, env.code_exists), (AppType.DESKTOP, env.desktop_exists)):
        if scan is None:
            counts = ["-", "-", "-", "-"]
        else:
            counts = [
                str(scan.count(app, ItemKind.SKILL)),
                str(scan.count(app, ItemKind.PLUGIN)),
                str(scan.count(app, ItemKind.EXTENSION)),
                str(len(scan.mcp_servers_for(app))),
            ]
        table.add_row(app.label, _presence(found), *counts)

    console.print(table)
    console.print(f"  Synced items:  [bold]{manifest.synced_count()}[/bold]")
    console.print(f"  Last sync:     {manifest.last_sync or '[dim]never[/dim]'}")
    console.print(f"  Backups:       {backup_count}")


def print_diff(
    direction: SyncDirection,
    comparisons: list[ComparisonResult],
    mcp_diff: McpServerDiff,
) -> None:
    """Print a drift table for one direction plus the MCP server diff."""
    console.print(Panel(f"[bold]{direction.label}[/bold]", title="Changes"))

    if comparisons:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Item", style="bold")
        table.add_column("Name")
        table.add_column("Status", justify="center")
        table.add_column("Note", style="dim")
        for comp in comparisons:
            note = ""
            if comp.linked_item is not None:
                note = f"exists in {comp.linked_item.source_app.label}"
            table.add_row(
                comp.item.id,
                comp.item.display_name,
                Text(comp.status.value, style=status_style(comp.status)),
                note,
            )
        console.print(table)
    else:
        console.print("[dim]No items found.[/dim]")

    summary = categorize_diffs(comparisons)
    console.print(
        f"{len(summary.added)} new, {len(summary.modified)} modified, "
        f"{len(summary.removed)} removed, {len(summary.unchanged)} unchanged"
    )

    if mcp_diff.to_add or mcp_diff.to_update or mcp_diff.existing:
        console.print("\n[bold]MCP servers[/bold]")
        for name in mcp_diff.to_add:
            console.print(f"  [green]+ {name}[/green]")
        for name in mcp_diff.to_update:
            console.print(f"  [yellow]~ {name}[/yellow]")
        for name in mcp_diff.existing:
            console.print(f"  [dim]= {name}[/dim]")


def print_content_diff(item_id: str, diff_text: str) -> None:
    """Print a unified diff or preview for one item."""
    console.print(Panel(Text(diff_text or "(no textual changes)"), title=item_id))


def print_sync_result(result: SyncResult) -> None:
    """Print what a sync run did."""
    if result.success:
        console.print(Panel("[bold green]Sync complete[/bold green]", expand=False))
    else:
        console.print(Panel("[bold red]Sync finished with errors[/bold red]", expand=False))

    for item_id in result.synced:
        console.print(f"  [green]synced[/green]   {item_id}")
    for item_id, reason in result.skipped:
        console.print(f"  [yellow]skipped[/yellow]  {item_id}: {reason}")
    for item_id, error in result.errors:
        console.print(f"  [red]error[/red]    {item_id}: {error}")
    for item_id, extension_id in result.registry_recommendations:
        console.print(
            f"  [cyan]registry[/cyan] {item_id}: install [bold]{extension_id}[/bold] "
            "from the Claude Desktop extension registry"
        )
        for line in registry_install_instructions(extension_id).splitlines():
            console.print(f"    [dim]{line}[/dim]")
    if result.backup_path:
        console.print(f"\n[dim]Backup: {result.backup_path}[/dim]")


def print_backups(backups: list[BackupRecord]) -> None:
    """Print the backup list, newest first."""
    if not backups:
        console.print("[dim]No backups found.[/dim]")
        return
    table = Table(title="Backups", show_header=True, header_style="bold")
    table.add_column("Timestamp", style="bold")
    table.add_column("Direction")
    table.add_column("Items", justify="right")
    for record in backups:
        table.add_row(record.timestamp, record.direction.label, str(len(record.items_synced)))
    console.print(table)


def print_restore_result(result: RestoreResult) -> None:
    """Print the artifacts a restore put back."""
    for label in result.restored_items:
        console.print(f"  [green]restored[/green] {label}")
    if result.success:
        if not result.restored_items:
            console.print("[dim]Backup held nothing to restore.[/dim]")
    else:
        console.print(f"[red]Restore failed: {result.error}[/red]")


def print_json(data: Any) -> None:
    """Print data as plain, indented JSON on stdout."""
    click.echo(json.dumps(data, indent=2, default=str))
