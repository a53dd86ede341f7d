"""Fixtures shared by the CLI command tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from ovlspace.core.config import OverlayConfig, save_config
from ovlspace.utils.shell import CommandResult


@pytest.fixture
def config_file(tmp_path: Path, overlay_config: OverlayConfig) -> Path:
    """The tmp_path-confined configuration saved as TOML."""
    return save_config(overlay_config, tmp_path / "config.toml")


@pytest.fixture
def home(overlay_config: OverlayConfig) -> Path:
    """Home directory the test configuration points into."""
    return overlay_config.relocation_sources[0].parent


@pytest.fixture
def mock_df(mock_df_output: str) -> Iterator[MagicMock]:
    """Make the usage probe see the overlay at 86%."""
    result = CommandResult(stdout=mock_df_output, stderr="", returncode=0)
    with patch("ovlspace.usage.probe.run_command", return_value=result) as mock_run:
        yield mock_run
