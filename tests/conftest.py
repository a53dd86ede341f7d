"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from ovlspace.core.config import (
    CacheTarget,
    HeavyPathSettings,
    LogCleanup,
    OverlayConfig,
    WatchSettings,
)


def _df_output(
    percent: str = "42%",
    filesystem: str = "overlay",
    total_kb: int = 102400000,
    used_kb: int = 43008000,
    available_kb: int = 59392000,
) -> str:
    """Build ``df -kP`` output for a single mount point."""
    return (
        "Filesystem     1024-blocks      Used Available Capacity Mounted on\n"
        f"{filesystem} {total_kb} {used_kb} {available_kb} {percent} /\n"
    )


@pytest.fixture
def make_df_output() -> Callable[..., str]:
    """Factory building df output for arbitrary usage values."""
    return _df_output


@pytest.fixture
def mock_df_output() -> str:
    """Sample df output at 86% usage."""
    return _df_output(
        percent="86%", total_kb=100000 * 1024, used_kb=86000 * 1024, available_kb=14000 * 1024
    )


@pytest.fixture
def overlay_config(tmp_path: Path) -> OverlayConfig:
    """Configuration whose every path lives under tmp_path."""
    home = tmp_path / "root"
    return OverlayConfig(
        mount_point=Path("/"),
        default_target=tmp_path / "EasyData",
        cache_targets=[
            CacheTarget(path=home / ".cache" / "mozilla", remove_directory=True),
            CacheTarget(path=home / ".cache" / "thumbnails"),
            CacheTarget(path=home / ".local/share/Trash/files"),
        ],
        logs=LogCleanup(directory=tmp_path / "log", truncate_above_bytes=16),
        relocation_sources=[home / "Downloads", home / "Music"],
        heavy_paths=HeavyPathSettings(root=home, limit=0),
        watch=WatchSettings(
            interval_seconds=1,
            lock_file=tmp_path / "watch.lock",
            state_file=tmp_path / "watch.state",
        ),
    )
