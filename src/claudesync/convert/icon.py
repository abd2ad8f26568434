"""Placeholder SVG icon for generated extension packages.

A rounded square in a colour picked from the package name, with the name's
initials in white.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

COLORS: tuple[str, ...] = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4",
    "#FFEAA7", "#DDA0DD", "#98D8C8", "#F7DC6F",
    "#BB8FCE", "#85C1E9", "#F8B500", "#00CED1",
)


def color_for_name(name: str) -> str:
    """Pick a stable palette colour for ``name`` (djb2-style string hash)."""
    value = 0
    for char in name:
        value = (ord(char) + ((value << 5) - value)) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return COLORS[abs(value) % len(COLORS)]


def initials(name: str) -> str:
    """Two-letter initials: first letters of the first two words, or the first two letters."""
    words = [w for w in re.split(r"[-_\s]+", name) if w]
    if len(words) >= 2:
        return (words[0][0] + words[1][0]).upper()
    return name[:2].upper()


def generate_placeholder_icon(name: str) -> str:
    """Return a 128x128 SVG document for ``name``."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="128" height="128" viewBox="0 0 128 128">\n'
        f'  <rect width="128" height="128" rx="16" fill="{color_for_name(name)}"/>\n'
        '  <text x="64" y="64" font-family="Arial, sans-serif" font-size="48" '
        'font-weight="bold" fill="white" text-anchor="middle" dominant-baseline="central">'
        f"{escape(initials(name))}</text>\n"
        "</svg>\n"
    )
