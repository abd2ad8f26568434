"""Shared fixtures for CLI tests.

The CLI resolves its layout with ``SyncPaths.for_home(--home)`` on the
running platform, so fixtures build paths the same way.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from claudesync.discovery import SyncPaths
from tests.helpers import create_code_env, create_desktop_env


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    return tmp_path / "home"


@pytest.fixture
def cli_paths(home: Path) -> SyncPaths:
    """Both environments present, laid out as the CLI will resolve them."""
    paths = SyncPaths.for_home(home)
    create_code_env(paths)
    create_desktop_env(paths, {})
    return paths
