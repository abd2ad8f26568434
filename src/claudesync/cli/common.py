"""Helpers shared by the claudesync subcommands."""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from claudesync.core.differ import ComparisonResult, McpServerDiff
from claudesync.core.models import SyncDirection
from claudesync.discovery import EnvironmentScanner, ScanResult, SyncPaths
from claudesync.exceptions import EnvironmentNotFoundError, ScanError

DIRECTION_CHOICE = click.Choice([d.value for d in SyncDirection])
FORMAT_CHOICE = click.Choice(["text", "json"])


def scan_ready_environments(paths: SyncPaths, output_format: str) -> ScanResult:
    """Scan both environments, exiting with code 2 if either is missing."""
    scanner = EnvironmentScanner(paths)
    try:
        scanner.require_environments()
    except EnvironmentNotFoundError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(str(exc))
        sys.exit(2)
    try:
        return scanner.scan()
    except ScanError as exc:
        raise click.ClickException(str(exc)) from exc


def comparisons_to_json(comparisons: list[ComparisonResult]) -> list[dict[str, Any]]:
    """Convert comparison results to JSON-serializable dicts."""
    out: list[dict[str, Any]] = []
    for comp in comparisons:
        out.append({
            "id": comp.item.id,
            "kind": comp.item.kind.value,
            "name": comp.item.name,
            "display_name": comp.item.display_name,
            "status": comp.status.value,
            "previous_hash": comp.previous_hash,
            "linked_to": comp.linked_item.id if comp.linked_item else None,
        })
    return out


def mcp_diff_to_json(diff: McpServerDiff) -> dict[str, list[str]]:
    return {
        "to_add": list(diff.to_add),
        "to_update": list(diff.to_update),
        "existing": list(diff.existing),
    }
