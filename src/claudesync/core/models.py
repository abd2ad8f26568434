"""Shared item models: environments, directions, kinds, scanned items, MCP servers.

These are pure data holders with no filesystem access, safe to import from
every other module without circular-dependency concerns.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class AppType(str, Enum):
    """The two environments kept in sync."""

    CODE = "code"
    DESKTOP = "desktop"

    @property
    def label(self) -> str:
        return "Claude Code" if self is AppType.CODE else "Claude Desktop"


class SyncDirection(str, Enum):
    """Direction of a sync run. Determines source and target environments."""

    CODE_TO_DESKTOP = "code-to-desktop"
    DESKTOP_TO_CODE = "desktop-to-code"

    @property
    def source(self) -> AppType:
        return AppType.CODE if self is SyncDirection.CODE_TO_DESKTOP else AppType.DESKTOP

    @property
    def target(self) -> AppType:
        return AppType.DESKTOP if self is SyncDirection.CODE_TO_DESKTOP else AppType.CODE

    @property
    def label(self) -> str:
        return f"{self.source.label} → {self.target.label}"


class ItemKind(str, Enum):
    """Artifact kinds. The kind is the prefix of every item identifier."""

    SKILL = "skill"
    PLUGIN = "plugin"
    EXTENSION = "extension"
    MCP_SERVER = "mcp-server"


class ItemStatus(str, Enum):
    """Status recorded for an item in the sync manifest."""

    SYNCED = "synced"
    MODIFIED = "modified"
    NEW = "new"
    REMOVED = "removed"
    SKIPPED = "skipped"


def make_item_id(kind: ItemKind, name: str) -> str:
    """Build the kind-prefixed identifier for an item (e.g. ``skill:pdf``)."""
    return f"{kind.value}:{name}"


@dataclass
class ScannedItem:
    """An artifact discovered by a scan. Never persisted.

    Attributes:
        id: Kind-prefixed identifier, e.g. ``"skill:pdf-tools"``.
        kind: Artifact kind.
        name: Directory, plugin, or extension name.
        display_name: Human-readable name (skill heading, manifest
            ``display_name``), falling back to ``name``.
        path: Filesystem location as discovered (symlinks unresolved).
        hash: Content fingerprint used for drift detection.
        app: Environment the item was found in.
        metadata: Kind-specific extras: ``real_path`` and ``is_symlink``
            for skills, ``marketplace`` and ``version`` for plugins,
            ``version`` and the raw ``manifest`` dict for extensions.
    """

    id: str
    kind: ItemKind
    name: str
    display_name: str
    path: Path
    hash: str
    app: AppType
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class McpServerConfig:
    """An MCP server launch descriptor.

    Compared as a whole value: two configs are equal when their serialized
    JSON forms are identical. Object keys are sorted before comparison, list
    order is not, because launch argument order matters.

    Attributes:
        command: Executable to launch.
        args: Argument list, or None when the source omitted it.
        env: Environment variables, or None when the source omitted it.
        extra: Any other keys found in the source (``type``, ``url``,
            ``cwd``...), carried through unchanged.
    """

    command: str = ""
    args: tuple[str, ...] | None = None
    env: dict[str, str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> McpServerConfig:
        """Build a config from its JSON object form.

        Raises:
            ValueError: If ``data`` is not an object or ``args``/``env``
                have the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"MCP server config must be an object, got {type(data).__name__}")
        args = data.get("args")
        if args is not None and not isinstance(args, list):
            raise ValueError("MCP server 'args' must be a list")
        env = data.get("env")
        if env is not None and not isinstance(env, dict):
            raise ValueError("MCP server 'env' must be an object")
        extra = {k: v for k, v in data.items() if k not in ("command", "args", "env")}
        return cls(
            command=str(data.get("command", "")),
            args=tuple(str(a) for a in args) if args is not None else None,
            env={str(k): str(v) for k, v in env.items()} if env is not None else None,
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the settings-file JSON shape."""
        out: dict[str, Any] = {}
        if self.command:
            out["command"] = self.command
        if self.args is not None:
            out["args"] = list(self.args)
        if self.env is not None:
            out["env"] = dict(self.env)
        for key, value in self.extra.items():
            out.setdefault(key, value)
        return out

    def serialized(self) -> str:
        """Canonical JSON form used for whole-value comparison."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, McpServerConfig):
            return NotImplemented
        return self.serialized() == other.serialized()

    def __hash__(self) -> int:
        return hash(self.serialized())
