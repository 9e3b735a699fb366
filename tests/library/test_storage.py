"""
Unit tests for storage path resolution.
"""

from pathlib import Path

import pytest

from llrt_function.storage import paths


@pytest.mark.unit
class TestPaths:
    """Test path resolution functions."""

    def test_get_home_dir_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test get_home_dir defaults to .tmp beside the build definition."""
        monkeypatch.delenv("LLRT_HOME", raising=False)
        monkeypatch.chdir(tmp_path)

        assert paths.get_home_dir() == (tmp_path / ".tmp").resolve()

    def test_get_home_dir_custom(self, mock_storage_env: Path) -> None:
        assert paths.get_home_dir() == mock_storage_env.resolve()

    def test_get_cache_dir_creates_directory(self, mock_storage_env: Path) -> None:
        cache_dir = paths.get_cache_dir()

        assert cache_dir.is_dir()
        assert cache_dir == mock_storage_env.resolve() / "llrt"

    def test_get_cache_dir_env_override(self, mock_storage_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        override = mock_storage_env / "elsewhere"
        monkeypatch.setenv("LLRT_CACHE_DIR", str(override))

        cache_dir = paths.get_cache_dir()

        assert cache_dir == override.resolve()
        assert cache_dir.is_dir()

    def test_get_config_path_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("LLRT_CONFIG_FILE", raising=False)
        monkeypatch.chdir(tmp_path)

        assert paths.get_config_path() == (tmp_path / "llrt.yaml").resolve()

    def test_paths_are_absolute(self, mock_storage_env: Path) -> None:
        assert paths.get_home_dir().is_absolute()
        assert paths.get_cache_dir().is_absolute()
        assert paths.get_config_path().is_absolute()
