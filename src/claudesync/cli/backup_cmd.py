"""``claudesync backups`` and ``claudesync rollback [TIMESTAMP]``.

Exit Codes (rollback):
    0 when the backup was restored.
    1 when no matching backup exists or the restore failed.
"""

from __future__ import annotations

import sys

import click

from claudesync.backup import find_backup, list_backups, restore_backup
from claudesync.cli.common import FORMAT_CHOICE
from claudesync.cli.output import print_backups, print_json, print_restore_result
from claudesync.discovery import SyncPaths
from claudesync.exceptions import RestoreError


@click.command("backups")
@click.option(
    "--format", "output_format",
    type=FORMAT_CHOICE,
    default="text",
    help="Output format.",
)
@click.pass_obj
def backups_command(paths: SyncPaths, output_format: str) -> None:
    """List pre-sync backups, newest first."""
    backups = list_backups(paths)
    if output_format == "json":
        print_json([record.to_dict() for record in backups])
        return
    print_backups(backups)


@click.command("rollback")
@click.argument("timestamp", required=False)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def rollback_command(paths: SyncPaths, timestamp: str | None, yes: bool) -> None:
    """Restore both environments from a backup.

    TIMESTAMP names the backup (see ``claudesync backups``); the newest
    backup is used when it is omitted.
    """
    try:
        record = find_backup(paths, timestamp)
    except RestoreError as exc:
        raise click.ClickException(str(exc)) from exc

    if not yes:
        click.echo(f"Backup {record.timestamp} ({record.direction.label})")
        click.confirm("Overwrite current settings, skills, and extensions?", abort=True)

    result = restore_backup(paths, record)
    print_restore_result(result)
    sys.exit(0 if result.success else 1)
