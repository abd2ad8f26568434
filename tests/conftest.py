"""Shared fixtures for claudesync tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from claudesync.discovery.paths import SyncPaths
from tests.helpers import create_code_env, create_desktop_env


@pytest.fixture
def paths(tmp_path: Path) -> SyncPaths:
    """A Linux layout rooted at a temporary home directory."""
    return SyncPaths.for_home(tmp_path / "home", platform="linux")


@pytest.fixture
def both_envs(paths: SyncPaths) -> SyncPaths:
    """Both environments present and empty."""
    create_code_env(paths)
    create_desktop_env(paths, {})
    return paths
