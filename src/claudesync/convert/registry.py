"""Lookup of official Claude Desktop extensions that replace Claude Code plugins.

Plugins are never converted locally. When a plugin has a known counterpart
in the extension registry, the user is pointed at it instead.
"""

from __future__ import annotations

from dataclasses import dataclass

# Plugin name (lowercase) -> registry extension id.
KNOWN_MAPPINGS: dict[str, str] = {
    "context7": "context7",
    "playwright": "ant.dir.ant.playwright",
}


@dataclass(frozen=True)
class RegistryLookupResult:
    """Outcome of a registry lookup.

    Attributes:
        found: Whether the plugin has a known registry counterpart.
        extension_id: Registry id of the counterpart, when found.
        recommend_install_from_registry: Whether the user should install the
            counterpart instead of syncing the plugin.
    """

    found: bool
    extension_id: str | None = None
    recommend_install_from_registry: bool = False


def lookup_in_registry(plugin_name: str) -> RegistryLookupResult:
    """Look up a plugin by name, case-insensitively."""
    extension_id = KNOWN_MAPPINGS.get(plugin_name.lower())
    if extension_id is None:
        return RegistryLookupResult(found=False)
    return RegistryLookupResult(
        found=True,
        extension_id=extension_id,
        recommend_install_from_registry=True,
    )


def registry_install_instructions(extension_id: str) -> str:
    """Human-readable steps for installing ``extension_id`` in Claude Desktop."""
    return (
        "To install from the official registry:\n"
        "1. Open Claude Desktop\n"
        "2. Go to Settings > Extensions\n"
        f'3. Search for "{extension_id}"\n'
        "4. Click Install"
    )
