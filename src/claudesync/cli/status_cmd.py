"""``claudesync status``: environments, inventory counts, and sync history.

Exit Codes:
    0 on success, even when an environment is missing.
    1 when the skills directory cannot be listed.
"""

from __future__ import annotations

import click

from claudesync.backup import list_backups
from claudesync.cli.common import FORMAT_CHOICE
from claudesync.cli.output import print_environment_status, print_json
from claudesync.core.manifest import load_manifest
from claudesync.core.models import AppType, ItemKind
from claudesync.discovery import EnvironmentScanner, SyncPaths
from claudesync.exceptions import ScanError


@click.command("status")
@click.option(
    "--format", "output_format",
    type=FORMAT_CHOICE,
    default="text",
    help="Output format.",
)
@click.pass_obj
def status_command(paths: SyncPaths, output_format: str) -> None:
    """Show both environments and what has been synced so far."""
    scanner = EnvironmentScanner(paths)
    env = scanner.check_environments()
    scan = None
    if env.code_exists or env.desktop_exists:
        try:
            scan = scanner.scan()
        except ScanError as exc:
            raise click.ClickException(str(exc)) from exc
    manifest = load_manifest(paths.manifest)
    backup_count = len(list_backups(paths))

    if output_format == "json":
        data: dict = {
            "code": {"found": env.code_exists},
            "desktop": {"found": env.desktop_exists},
            "synced_items": manifest.synced_count(),
            "last_sync": manifest.last_sync,
            "backups": backup_count,
        }
        if scan is not None:
            for key, app in (("code", AppType.CODE), ("desktop", AppType.DESKTOP)):
                data[key].update({
                    kind.value: scan.count(app, kind)
                    for kind in (ItemKind.SKILL, ItemKind.PLUGIN, ItemKind.EXTENSION)
                })
                data[key]["mcp_servers"] = len(scan.mcp_servers_for(app))
        print_json(data)
        return

    print_environment_status(env, scan, manifest, backup_count)
