"""Inventory scanner for the Claude Code and Claude Desktop environments.

Reads the fixed layout described by ``SyncPaths`` and produces a
``ScanResult``: normalized ``ScannedItem`` lists plus both MCP-server maps.

Discovery Algorithm:
    1. Skills: every non-hidden entry of the skills directory. Symlinks are
       resolved and the entry counts only if ``SKILL.md`` exists at the real
       path. The fingerprint is the directory hash of the real path, so every
       symlink to the same skill hashes identically.
    2. Plugins: every enabled ``name@marketplace`` id in Claude Code settings
       that has an install record in ``installed_plugins.json``. The
       fingerprint is the record's commit sha, or a hash of its install path.
    3. Extensions: every entry of ``extensions-installations.json``, using the
       hash Claude Desktop recorded, or a hash of the serialized entry.
    4. MCP servers: ``mcpServers`` of each environment's settings file.

Missing or malformed files are never fatal; they contribute nothing. Only
an unlistable skills directory raises ``ScanError``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from claudesync.core.fingerprint import hash_directory, hash_string
from claudesync.core.models import AppType, ItemKind, ScannedItem, make_item_id
from claudesync.discovery.models import EnvironmentStatus, ScanResult
from claudesync.discovery.paths import SyncPaths
from claudesync.discovery.settings import (
    CodeSettings,
    DesktopConfig,
    InstallationsIndex,
    InstalledPluginsRegistry,
)
from claudesync.exceptions import EnvironmentNotFoundError, ScanError
from claudesync.parsers.skill_markdown import parse_skill_markdown

logger = logging.getLogger(__name__)

SKILL_MARKER = "SKILL.md"
README_NAME = "README.md"


def skill_display_name(skill_md: Path) -> str | None:
    """Return a skill's display name from its ``SKILL.md``, if it declares one.

    The first level-one heading wins, then the frontmatter ``name``.
    """
    try:
        doc = parse_skill_markdown(skill_md.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return None
    return doc.title or doc.name


class EnvironmentScanner:
    """Scans both environments described by a ``SyncPaths``.

    Usage::

        scanner = EnvironmentScanner(SyncPaths.for_home())
        if scanner.check_environments().ready:
            result = scanner.scan()
    """

    def __init__(self, paths: SyncPaths) -> None:
        self.paths = paths

    def check_environments(self) -> EnvironmentStatus:
        """Probe whether each environment exists. Reads no file contents."""
        paths = self.paths
        return EnvironmentStatus(
            code_exists=paths.code_root.is_dir() and paths.code_settings.is_file(),
            desktop_exists=paths.desktop_root.is_dir(),
        )

    def require_environments(self) -> EnvironmentStatus:
        """Probe both environments, failing unless both are present.

        Raises:
            EnvironmentNotFoundError: Naming every missing environment.
        """
        status = self.check_environments()
        if not status.ready:
            raise EnvironmentNotFoundError(f"Environment not found: {', '.join(status.missing)}")
        return status

    def scan(self) -> ScanResult:
        """Inventory both environments.

        Returns:
            A ``ScanResult`` with items and MCP servers from each side.

        Raises:
            ScanError: If the skills directory exists but cannot be listed.
        """
        code_settings = CodeSettings.load(self.paths.code_settings)
        desktop_config = DesktopConfig.load(self.paths.desktop_config)

        code_items = self.scan_skills()
        code_items.extend(self.scan_plugins(code_settings))
        desktop_items = self.scan_extensions()

        logger.debug(
            "Scanned %d code item(s), %d desktop item(s)",
            len(code_items), len(desktop_items),
        )
        return ScanResult(
            code_items=code_items,
            desktop_items=desktop_items,
            code_mcp_servers=code_settings.mcp_servers,
            desktop_mcp_servers=desktop_config.mcp_servers,
        )

    # -- Claude Code -------------------------------------------------------

    def scan_skills(self) -> list[ScannedItem]:
        """Discover skills under the Claude Code skills directory."""
        skills_root = self.paths.code_skills
        if not skills_root.is_dir():
            return []

        try:
            entries = sorted(skills_root.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise ScanError(f"Cannot list skills in {skills_root}: {exc}") from exc

        items: list[ScannedItem] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            item = self._scan_skill(entry)
            if item is not None:
                items.append(item)
        return items

    def _scan_skill(self, entry: Path) -> ScannedItem | None:
        is_symlink = entry.is_symlink()
        try:
            real_path = entry.resolve(strict=True) if is_symlink else entry
        except (OSError, RuntimeError):
            logger.debug("Skipping dangling skill link %s", entry)
            return None
        if not real_path.is_dir():
            return None

        skill_md = real_path / SKILL_MARKER
        if not skill_md.is_file():
            logger.debug("Skipping %s: no %s", entry, SKILL_MARKER)
            return None

        try:
            fingerprint = hash_directory(real_path)
        except OSError:
            logger.warning("Cannot read skill %s", real_path, exc_info=True)
            return None

        metadata: dict[str, object] = {
            "has_readme": (real_path / README_NAME).is_file(),
            "is_symlink": is_symlink,
        }
        if is_symlink:
            metadata["real_path"] = str(real_path)

        name = entry.name
        return ScannedItem(
            id=make_item_id(ItemKind.SKILL, name),
            kind=ItemKind.SKILL,
            name=name,
            display_name=skill_display_name(skill_md) or name,
            path=entry,
            hash=fingerprint,
            app=AppType.CODE,
            metadata=metadata,
        )

    def scan_plugins(self, settings: CodeSettings | None = None) -> list[ScannedItem]:
        """Discover enabled plugins that have an install record."""
        if settings is None:
            settings = CodeSettings.load(self.paths.code_settings)
        enabled = [pid for pid, on in settings.enabled_plugins.items() if on]
        if not enabled:
            return []

        registry = InstalledPluginsRegistry.load(self.paths.code_installed_plugins)
        items: list[ScannedItem] = []
        for plugin_id in enabled:
            name, _, marketplace = plugin_id.partition("@")
            record = registry.latest(plugin_id)
            if record is None:
                logger.debug("Skipping plugin %s: no install record", plugin_id)
                continue
            items.append(ScannedItem(
                id=make_item_id(ItemKind.PLUGIN, name),
                kind=ItemKind.PLUGIN,
                name=name,
                display_name=name,
                path=Path(record.install_path),
                hash=record.git_commit_sha or hash_string(record.install_path),
                app=AppType.CODE,
                metadata={"marketplace": marketplace, "version": record.version},
            ))
        return items

    # -- Claude Desktop ----------------------------------------------------

    def scan_extensions(self) -> list[ScannedItem]:
        """Discover extensions listed in the installations index."""
        index = InstallationsIndex.load(self.paths.desktop_installations)
        items: list[ScannedItem] = []
        for ext_id, install in index.extensions.items():
            manifest = install.manifest or {}
            display = manifest.get("display_name") or manifest.get("name") or ext_id
            fingerprint = install.hash or hash_string(
                json.dumps(install.raw, separators=(",", ":"))
            )
            items.append(ScannedItem(
                id=make_item_id(ItemKind.EXTENSION, ext_id),
                kind=ItemKind.EXTENSION,
                name=ext_id,
                display_name=str(display),
                path=self.paths.desktop_extensions / ext_id,
                hash=fingerprint,
                app=AppType.DESKTOP,
                metadata={"version": install.version, "manifest": install.manifest},
            ))
        return items
