"""Tests for SyncExecutor.

Verifies:
    - Successful conversions are recorded in the manifest with a backup.
    - Plugins are skipped, with registry recommendations when available.
    - A failed backup stops the run before anything is written.
    - One failing item does not affect the others.
    - MCP servers are copied and failures are reported under ``mcp``.
"""

from __future__ import annotations

import json
from pathlib import Path

from claudesync.convert.dxt_to_skill import DxtToSkillConverter
from claudesync.convert.models import ExtensionConversionResult
from claudesync.core.differ import DiffStatus, compare_with_manifest
from claudesync.core.manifest import SyncItem, SyncManifest, load_manifest, save_manifest
from claudesync.core.models import (
    AppType,
    ItemKind,
    McpServerConfig,
    ScannedItem,
    SyncDirection,
)
from claudesync.discovery import EnvironmentScanner, SyncPaths
from claudesync.sync import SyncExecutor, execute_sync
from claudesync.sync.executor import PLUGIN_LOCAL_REASON, PLUGIN_REGISTRY_REASON
from tests.helpers import (
    create_skill,
    enable_plugin,
    extension_manifest,
    install_extension,
    read_json,
    write_json,
)

C2D = SyncDirection.CODE_TO_DESKTOP
D2C = SyncDirection.DESKTOP_TO_CODE
FIXED_TIME = "2025-06-01T12:00:00+00:00"


def executor(paths: SyncPaths) -> SyncExecutor:
    return SyncExecutor(paths, clock=lambda: FIXED_TIME)


def code_items(paths: SyncPaths) -> list[ScannedItem]:
    return EnvironmentScanner(paths).scan().code_items


class TestCodeToDesktop:
    """Skills and plugins into Claude Desktop."""

    def test_skill_synced_and_recorded(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "example")
        items = code_items(both_envs)
        result = executor(both_envs).execute(C2D, items)

        assert result.success
        assert result.synced == ["skill:example"]
        assert (both_envs.desktop_extensions / "example" / "manifest.json").is_file()

        manifest = load_manifest(both_envs.manifest)
        record = manifest.items["skill:example"]
        assert record.source_hash == items[0].hash
        assert record.source_app is AppType.CODE
        assert record.target_app is AppType.DESKTOP
        assert record.target_path == str(both_envs.desktop_extensions / "example")
        assert record.last_synced == FIXED_TIME
        assert manifest.last_sync == FIXED_TIME
        assert len(manifest.backups) == 1
        assert manifest.backups[0].items_synced == ["skill:example"]
        assert result.backup_path == manifest.backups[0].path

    def test_incompatible_skill_skipped(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "hooked", content="# Hooked\n\nPreToolUse\n")
        result = executor(both_envs).execute(C2D, code_items(both_envs))
        assert result.success
        assert result.synced == []
        assert result.skipped[0][0] == "skill:hooked"
        assert "skill:hooked" not in load_manifest(both_envs.manifest).items

    def test_plugin_with_registry_counterpart(self, both_envs: SyncPaths) -> None:
        enable_plugin(both_envs, "playwright@official", "/p/playwright")
        result = executor(both_envs).execute(C2D, code_items(both_envs))
        assert result.registry_recommendations == [("plugin:playwright", "ant.dir.ant.playwright")]
        assert result.skipped == [("plugin:playwright", PLUGIN_REGISTRY_REASON)]
        assert result.success

    def test_plugin_without_counterpart(self, both_envs: SyncPaths) -> None:
        enable_plugin(both_envs, "private@corp", "/p/private")
        result = executor(both_envs).execute(C2D, code_items(both_envs))
        assert result.registry_recommendations == []
        assert result.skipped == [("plugin:private", PLUGIN_LOCAL_REASON)]

    def test_extension_in_wrong_direction_skipped(self, both_envs: SyncPaths) -> None:
        install_extension(both_envs, "weather", extension_manifest())
        [ext] = EnvironmentScanner(both_envs).scan_extensions()
        result = executor(both_envs).execute(C2D, [ext])
        assert [i for i, _ in result.skipped] == ["extension:weather"]

    def test_linked_to_counterpart(self, both_envs: SyncPaths) -> None:
        counterpart = SyncItem(
            id="extension:example", kind=ItemKind.EXTENSION, name="example",
            display_name="Example", source_app=AppType.DESKTOP,
            source_path="/d/example", source_hash="1" * 12,
        )
        save_manifest(SyncManifest().with_item(counterpart), both_envs.manifest)
        create_skill(both_envs, "example")
        executor(both_envs).execute(C2D, code_items(both_envs))
        record = load_manifest(both_envs.manifest).items["skill:example"]
        assert record.linked_to == "extension:example"


class TestDesktopToCode:
    """Extensions into Claude Code."""

    def test_extension_becomes_skill_and_server(self, both_envs: SyncPaths) -> None:
        ext_dir = install_extension(
            both_envs, "weather",
            extension_manifest(prompts=[{"name": "p", "description": "d", "text": "t"}]),
        )
        desktop_items = EnvironmentScanner(both_envs).scan().desktop_items
        result = executor(both_envs).execute(D2C, desktop_items)

        assert result.success
        assert result.synced == ["extension:weather"]
        assert (both_envs.code_skills / "weather" / "SKILL.md").is_file()
        server = read_json(both_envs.code_settings)["mcpServers"]["weather"]
        assert server["args"][0] == f"{ext_dir}/server/index.js"
        record = load_manifest(both_envs.manifest).items["extension:weather"]
        assert record.target_path == str(both_envs.code_skills / "weather")

    def test_extension_without_manifest_errors(self, both_envs: SyncPaths) -> None:
        install_extension(both_envs, "bare", None)
        result = executor(both_envs).execute(D2C, EnvironmentScanner(both_envs).scan_extensions())
        assert not result.success
        assert result.errors[0][0] == "extension:bare"

    def test_skill_in_wrong_direction_skipped(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "example")
        result = executor(both_envs).execute(D2C, code_items(both_envs))
        assert [i for i, _ in result.skipped] == ["skill:example"]


class TestBackupBeforeMutate:
    """A failed backup changes nothing."""

    def test_backup_failure_aborts(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "example")
        write_json(both_envs.desktop_config, {"mcpServers": {}})
        both_envs.sync_root.mkdir(parents=True, exist_ok=True)
        both_envs.backups.write_text("blocker", encoding="utf-8")
        config_before = both_envs.desktop_config.read_text(encoding="utf-8")
        source_mcp = {"pg": McpServerConfig.from_dict({"command": "pg"})}

        result = executor(both_envs).execute(C2D, code_items(both_envs), source_mcp, {})

        assert not result.success
        assert [i for i, _ in result.errors] == ["backup"]
        assert result.synced == []
        assert not both_envs.desktop_extensions.exists()
        assert both_envs.desktop_config.read_text(encoding="utf-8") == config_before
        assert not both_envs.manifest.exists()


class TestPartialFailure:
    """Item failures are isolated."""

    def test_middle_item_failure(self, both_envs: SyncPaths) -> None:
        for name in ("alpha", "beta", "gamma"):
            create_skill(both_envs, name)
        items = code_items(both_envs)
        (both_envs.code_skills / "beta" / "SKILL.md").unlink()

        result = executor(both_envs).execute(C2D, items)

        assert not result.success
        assert result.synced == ["skill:alpha", "skill:gamma"]
        assert [i for i, _ in result.errors] == ["skill:beta"]
        manifest = load_manifest(both_envs.manifest)
        assert set(manifest.items) == {"skill:alpha", "skill:gamma"}
        assert len(manifest.backups) == 1

    def test_malformed_extension_beside_valid_one(self, both_envs: SyncPaths) -> None:
        broken = extension_manifest(name="broken", prompts=[{"name": "p", "text": 5}])
        broken["tools"] = 3
        install_extension(both_envs, "broken", broken)
        install_extension(both_envs, "weather", extension_manifest(prompts=[{"name": "p"}]))

        result = executor(both_envs).execute(D2C, EnvironmentScanner(both_envs).scan_extensions())

        assert result.success
        assert result.synced == ["extension:broken", "extension:weather"]
        assert (both_envs.code_skills / "weather" / "SKILL.md").is_file()

    def test_unexpected_exception_is_isolated(self, both_envs: SyncPaths) -> None:
        class FlakyConverter(DxtToSkillConverter):
            def convert(self, item: ScannedItem) -> ExtensionConversionResult:
                if item.name == "first":
                    raise TypeError("unexpected shape")
                return super().convert(item)

        install_extension(both_envs, "first", extension_manifest(name="first"))
        install_extension(both_envs, "second", extension_manifest(name="second"))
        runner = SyncExecutor(
            both_envs,
            extension_converter=FlakyConverter(both_envs),
            clock=lambda: FIXED_TIME,
        )

        result = runner.execute(D2C, EnvironmentScanner(both_envs).scan_extensions())

        assert not result.success
        assert result.errors == [("extension:first", "unexpected shape")]
        assert result.synced == ["extension:second"]
        manifest = load_manifest(both_envs.manifest)
        assert set(manifest.items) == {"extension:second"}
        assert manifest.last_sync == FIXED_TIME


class TestMcpServers:
    """MCP server copying."""

    def test_new_and_changed_servers_written(self, both_envs: SyncPaths) -> None:
        same = McpServerConfig.from_dict({"command": "same"})
        source = {
            "new": McpServerConfig.from_dict({"command": "n"}),
            "same": same,
            "changed": McpServerConfig.from_dict({"command": "c", "args": ["2"]}),
        }
        target = {"same": same, "changed": McpServerConfig.from_dict({"command": "c", "args": ["1"]})}
        write_json(both_envs.desktop_config, {"mcpServers": {k: v.to_dict() for k, v in target.items()}})

        result = executor(both_envs).execute(C2D, [], source, target)

        assert result.synced == ["mcp:new", "mcp:changed"]
        written = read_json(both_envs.desktop_config)["mcpServers"]
        assert written["changed"] == {"command": "c", "args": ["2"]}
        assert written["new"] == {"command": "n"}

    def test_unwritable_target_reports_mcp_error(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "example")
        both_envs.desktop_config.write_text("{broken", encoding="utf-8")
        source = {"pg": McpServerConfig.from_dict({"command": "pg"})}

        result = executor(both_envs).execute(C2D, code_items(both_envs), source, {})

        assert not result.success
        assert result.synced == ["skill:example"]
        assert [i for i, _ in result.errors] == ["mcp"]
        assert "skill:example" in load_manifest(both_envs.manifest).items


class TestIdempotence:
    """A second run sees nothing new."""

    def test_second_run_has_no_changes(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "one")
        create_skill(both_envs, "two", readme="readme\n")
        items = code_items(both_envs)
        execute_sync(both_envs, C2D, items)

        again = compare_with_manifest(
            code_items(both_envs), load_manifest(both_envs.manifest), C2D,
        )
        assert {c.status for c in again} == {DiffStatus.UNCHANGED}

    def test_manifest_file_is_json(self, both_envs: SyncPaths) -> None:
        create_skill(both_envs, "one")
        execute_sync(both_envs, C2D, code_items(both_envs))
        data = json.loads(Path(both_envs.manifest).read_text(encoding="utf-8"))
        assert data["items"]["skill:one"]["status"] == "synced"
