"""Unit tests for well-known file locations."""

import os
from pathlib import Path
from unittest.mock import patch

from ovlspace.core.paths import (
    APP_NAME,
    DEFAULT_LOCK_FILE,
    DEFAULT_STATE_FILE,
    get_config_dir,
    get_config_path,
    get_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_xdg_config_home_ignored(self) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_file_paths_inside_config_dir(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestRuntimeFiles:
    """Tests for the watch loop runtime file defaults."""

    def test_runtime_files_in_tmp(self) -> None:
        assert DEFAULT_LOCK_FILE == Path("/tmp/overlay-space-watch.lock")
        assert DEFAULT_STATE_FILE == Path("/tmp/overlay-space-watch.state")
