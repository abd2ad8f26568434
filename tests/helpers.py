"""Shared test helpers for building fake Claude Code / Claude Desktop homes.

Every helper writes a minimal but realistic layout under the locations a
``SyncPaths`` points at, so tests exercise the real scanner, converters,
and backup code against a temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from claudesync.discovery.paths import SyncPaths

EXAMPLE_SKILL = "# Example\n\nDoes example things.\n"


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def create_code_env(paths: SyncPaths, settings: dict[str, Any] | None = None) -> None:
    """Create a Claude Code root with a settings file."""
    paths.code_skills.mkdir(parents=True, exist_ok=True)
    write_json(paths.code_settings, settings if settings is not None else {})


def create_desktop_env(paths: SyncPaths, config: dict[str, Any] | None = None) -> None:
    """Create a Claude Desktop root, optionally with a config file."""
    paths.desktop_root.mkdir(parents=True, exist_ok=True)
    if config is not None:
        write_json(paths.desktop_config, config)


def create_skill(
    paths: SyncPaths,
    name: str,
    content: str = EXAMPLE_SKILL,
    readme: str | None = None,
    extra_files: dict[str, str] | None = None,
) -> Path:
    """Create a skill directory with a SKILL.md."""
    skill_dir = paths.code_skills / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
    if readme is not None:
        (skill_dir / "README.md").write_text(readme, encoding="utf-8")
    for rel, text in (extra_files or {}).items():
        target = skill_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return skill_dir


def enable_plugin(
    paths: SyncPaths,
    plugin_id: str,
    install_path: str,
    sha: str | None = "abc123def456",
    version: str = "1.0.0",
) -> None:
    """Enable a plugin in settings and record its installation."""
    settings = read_json(paths.code_settings) if paths.code_settings.exists() else {}
    settings.setdefault("enabledPlugins", {})[plugin_id] = True
    write_json(paths.code_settings, settings)

    registry: dict[str, Any] = {"plugins": {}}
    if paths.code_installed_plugins.exists():
        registry = read_json(paths.code_installed_plugins)
    record: dict[str, Any] = {"installPath": install_path, "version": version}
    if sha:
        record["gitCommitSha"] = sha
    registry["plugins"][plugin_id] = [record]
    write_json(paths.code_installed_plugins, registry)


def extension_manifest(
    name: str = "weather",
    display_name: str | None = "Weather",
    with_server: bool = True,
    prompts: list[dict[str, Any]] | None = None,
    tools: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a package manifest dict for an installed extension."""
    manifest: dict[str, Any] = {
        "dxt_version": "0.1",
        "name": name,
        "version": "2.0.0",
        "description": "Weather forecasts",
    }
    if display_name:
        manifest["display_name"] = display_name
    if with_server:
        manifest["server"] = {
            "type": "node",
            "entry_point": "server/index.js",
            "mcp_config": {
                "command": "node",
                "args": ["${__dirname}/server/index.js", "--verbose"],
                "env": {"API_KEY": "secret"},
            },
        }
    if prompts is not None:
        manifest["prompts"] = prompts
    if tools is not None:
        manifest["tools"] = tools
    return manifest


def install_extension(
    paths: SyncPaths,
    ext_id: str,
    manifest: dict[str, Any] | None,
    hash_value: str | None = "feedbeef0001",
    readme: str | None = None,
) -> Path:
    """Install an extension directory and register it in the installations index."""
    ext_dir = paths.desktop_extensions / ext_id
    ext_dir.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        write_json(ext_dir / "manifest.json", manifest)
    if readme is not None:
        (ext_dir / "README.md").write_text(readme, encoding="utf-8")

    index: dict[str, Any] = {"extensions": {}}
    if paths.desktop_installations.exists():
        index = read_json(paths.desktop_installations)
    entry: dict[str, Any] = {"id": ext_id, "version": "2.0.0"}
    if hash_value:
        entry["hash"] = hash_value
    if manifest is not None:
        entry["manifest"] = manifest
    index["extensions"][ext_id] = entry
    write_json(paths.desktop_installations, index)
    return ext_dir
