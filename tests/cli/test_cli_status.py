"""Tests for ``claudesync status`` and the CLI group options."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from claudesync import __version__
from claudesync.cli.main import cli
from claudesync.discovery import SyncPaths
from tests.helpers import create_skill, enable_plugin, write_json


class TestGroup:
    """Group-level options."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("status", "diff", "sync", "backups", "rollback"):
            assert name in result.output

    def test_home_from_environment(self, runner: CliRunner, home: Path, cli_paths: SyncPaths) -> None:
        result = runner.invoke(
            cli, ["status", "--format", "json"], env={"CLAUDESYNC_HOME": str(home)},
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["code"]["found"] is True


class TestStatus:
    """Environment and inventory summary."""

    def test_json_counts(self, runner: CliRunner, home: Path, cli_paths: SyncPaths) -> None:
        create_skill(cli_paths, "one")
        create_skill(cli_paths, "two")
        enable_plugin(cli_paths, "tool@m", "/p/tool")
        write_json(cli_paths.desktop_config, {"mcpServers": {"fs": {"command": "npx"}}})

        result = runner.invoke(cli, ["--home", str(home), "status", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["code"]["skill"] == 2
        assert data["code"]["plugin"] == 1
        assert data["desktop"]["mcp_servers"] == 1
        assert data["synced_items"] == 0
        assert data["last_sync"] is None
        assert data["backups"] == 0

    def test_missing_environments(self, runner: CliRunner, home: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "status", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["code"] == {"found": False}
        assert data["desktop"] == {"found": False}

    def test_text_output(self, runner: CliRunner, home: Path, cli_paths: SyncPaths) -> None:
        result = runner.invoke(cli, ["--home", str(home), "status"])
        assert result.exit_code == 0
        assert "Synced items" in result.output
        assert "never" in result.output
