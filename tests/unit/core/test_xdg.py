"""Unit tests for XDG path management.

Tests for the xdg module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

from treefs.core.xdg import APP_NAME, get_config_dir, get_config_path, get_theme_path


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ):
            os.environ.pop("XDG_CONFIG_HOME", None)
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_custom_config_dir(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_env_uses_default(self) -> None:
        """An empty XDG_CONFIG_HOME falls back to the default."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME


class TestFilePaths:
    """Tests for config and theme file paths."""

    def test_config_and_theme_paths(self, tmp_path: Path) -> None:
        """Files live in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"

