"""claudesync CLI: keep Claude Code and Claude Desktop in step.

Entry point for the ``claudesync`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    status    Show both environments, item counts, and sync history.
    diff      Show what changed since the last sync in one direction.
    sync      Back up, convert, and record changes in one direction.
    backups   List pre-sync backups, newest first.
    rollback  Restore a backup.

Usage::

    claudesync status
    claudesync diff code-to-desktop
    claudesync sync code-to-desktop --all-changed --yes
    claudesync sync desktop-to-code --item extension:ant.dir.ant.playwright
    claudesync backups
    claudesync rollback 2025-01-02T03-04-05-678000Z
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from claudesync import __version__
from claudesync.cli.backup_cmd import backups_command, rollback_command
from claudesync.cli.diff_cmd import diff_command
from claudesync.cli.status_cmd import status_command
from claudesync.cli.sync_cmd import sync_command
from claudesync.discovery.paths import SyncPaths


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="CLAUDESYNC_HOME",
    default=None,
    help="Home directory holding both environments (default: your home).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, home: Path | None) -> None:
    """claudesync: sync skills, extensions, and MCP servers between
    Claude Code and Claude Desktop.

    Every sync is preceded by a backup of both environments and can be
    rolled back.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    ctx.obj = SyncPaths.for_home(home)


# Register all subcommands
cli.add_command(status_command)
cli.add_command(diff_command)
cli.add_command(sync_command)
cli.add_command(backups_command)
cli.add_command(rollback_command)
