"""Schema for Claude Desktop extension package manifests (``manifest.json``).

``DxtManifest.from_dict`` accepts whatever an installed extension recorded,
filling gaps with defaults; ``to_dict`` omits unset fields so generated
manifests stay minimal and stable across runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Placeholder substituted with the extension's install directory.
DIRNAME_PLACEHOLDER = "${__dirname}"


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_text(value: Any) -> str | None:
    """Keep strings, stringify numbers, drop anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


@dataclass
class DxtAuthor:
    name: str
    email: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.email:
            out["email"] = self.email
        if self.url:
            out["url"] = self.url
        return out


@dataclass
class DxtMcpConfig:
    """How Claude Desktop launches the extension's server."""

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"command": self.command, "args": list(self.args)}
        if self.env:
            out["env"] = dict(self.env)
        return out


@dataclass
class DxtServer:
    """Server descriptor: runtime type, entry point, launch config."""

    type: str
    entry_point: str
    mcp_config: DxtMcpConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "entry_point": self.entry_point}
        if self.mcp_config is not None:
            out["mcp_config"] = self.mcp_config.to_dict()
        return out


@dataclass
class DxtTool:
    name: str
    description: str = ""


@dataclass
class DxtPrompt:
    name: str
    description: str = ""
    text: str | None = None
    arguments: list[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.arguments is not None:
            out["arguments"] = list(self.arguments)
        if self.text is not None:
            out["text"] = self.text
        return out


@dataclass
class DxtCompatibility:
    claude_desktop: str | None = None
    platforms: list[str] = field(default_factory=list)
    runtimes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.claude_desktop:
            out["claude_desktop"] = self.claude_desktop
        if self.platforms:
            out["platforms"] = list(self.platforms)
        if self.runtimes:
            out["runtimes"] = dict(self.runtimes)
        return out


@dataclass
class DxtManifest:
    """An extension package descriptor.

    Attributes:
        name: Machine name; also the generated skill directory name when
            converting back to Claude Code.
        version: Package version.
        description: One-line summary.
        display_name: Human-readable name.
        long_description: Full description (a converted skill's content).
        author: Package author.
        icon: Icon file, relative to the package root.
        server: Server descriptor, if the package runs an MCP server.
        tools: Tools the server declares.
        prompts: Prompts the server serves.
        keywords: Search keywords.
        license: License identifier.
        compatibility: Desktop version, platform, and runtime constraints.
        dxt_version: Package format version.
    """

    name: str
    version: str = "0.0.0"
    description: str = ""
    display_name: str | None = None
    long_description: str | None = None
    author: DxtAuthor | None = None
    homepage: str | None = None
    icon: str | None = None
    server: DxtServer | None = None
    tools: list[DxtTool] = field(default_factory=list)
    prompts: list[DxtPrompt] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    license: str | None = None
    compatibility: DxtCompatibility | None = None
    dxt_version: str | None = None

    @property
    def title(self) -> str:
        return self.display_name or self.name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DxtManifest:
        """Parse a manifest object.

        Raises:
            ValueError: If ``data`` is not an object or has no ``name``.
        """
        if not isinstance(data, dict) or not data.get("name"):
            raise ValueError("extension manifest must be an object with a 'name'")

        author = None
        raw_author = data.get("author")
        if isinstance(raw_author, dict) and raw_author.get("name"):
            author = DxtAuthor(
                name=str(raw_author["name"]),
                email=_as_text(raw_author.get("email")),
                url=_as_text(raw_author.get("url")),
            )

        server = None
        raw_server = data.get("server")
        if isinstance(raw_server, dict):
            mcp_config = None
            raw_cfg = raw_server.get("mcp_config")
            if isinstance(raw_cfg, dict) and raw_cfg.get("command"):
                env = raw_cfg.get("env")
                mcp_config = DxtMcpConfig(
                    command=str(raw_cfg["command"]),
                    args=[str(a) for a in _as_list(raw_cfg.get("args"))],
                    env={str(k): str(v) for k, v in env.items()} if isinstance(env, dict) else None,
                )
            server = DxtServer(
                type=str(raw_server.get("type", "")),
                entry_point=str(raw_server.get("entry_point", "")),
                mcp_config=mcp_config,
            )

        tools = [
            DxtTool(name=str(t["name"]), description=_as_text(t.get("description")) or "")
            for t in _as_list(data.get("tools"))
            if isinstance(t, dict) and t.get("name")
        ]
        prompts = [
            DxtPrompt(
                name=str(p["name"]),
                description=_as_text(p.get("description")) or "",
                text=_as_text(p.get("text")),
                arguments=p.get("arguments") if isinstance(p.get("arguments"), list) else None,
            )
            for p in _as_list(data.get("prompts"))
            if isinstance(p, dict) and p.get("name")
        ]

        compatibility = None
        raw_compat = data.get("compatibility")
        if isinstance(raw_compat, dict):
            runtimes = raw_compat.get("runtimes")
            compatibility = DxtCompatibility(
                claude_desktop=_as_text(raw_compat.get("claude_desktop")),
                platforms=[str(p) for p in _as_list(raw_compat.get("platforms"))],
                runtimes=dict(runtimes) if isinstance(runtimes, dict) else {},
            )

        return cls(
            name=str(data["name"]),
            version=str(data.get("version", "0.0.0")),
            description=_as_text(data.get("description")) or "",
            display_name=_as_text(data.get("display_name")),
            long_description=_as_text(data.get("long_description")),
            author=author,
            homepage=_as_text(data.get("homepage")),
            icon=_as_text(data.get("icon")),
            server=server,
            tools=tools,
            prompts=prompts,
            keywords=[str(k) for k in _as_list(data.get("keywords"))],
            license=_as_text(data.get("license")),
            compatibility=compatibility,
            dxt_version=_as_text(data.get("dxt_version")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the conventional ``manifest.json`` key order."""
        out: dict[str, Any] = {}
        if self.dxt_version:
            out["dxt_version"] = self.dxt_version
        out["name"] = self.name
        if self.display_name:
            out["display_name"] = self.display_name
        out["version"] = self.version
        out["description"] = self.description
        if self.long_description is not None:
            out["long_description"] = self.long_description
        if self.author is not None:
            out["author"] = self.author.to_dict()
        if self.homepage:
            out["homepage"] = self.homepage
        if self.icon:
            out["icon"] = self.icon
        if self.server is not None:
            out["server"] = self.server.to_dict()
        if self.tools:
            out["tools"] = [{"name": t.name, "description": t.description} for t in self.tools]
        if self.prompts:
            out["prompts"] = [p.to_dict() for p in self.prompts]
        if self.keywords:
            out["keywords"] = list(self.keywords)
        if self.license:
            out["license"] = self.license
        if self.compatibility is not None:
            out["compatibility"] = self.compatibility.to_dict()
        return out
