"""claudesync: Reconcile skills, extensions, and MCP servers between Claude Code and Claude Desktop."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
