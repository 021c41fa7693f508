"""Tests for settings load and save."""

import tomllib
from pathlib import Path

import pytest

from pkgprune.core.settings import Settings, load_settings, save_settings
from pkgprune.errors import SettingsError
from pkgprune.filesystem.models import GlobOptions


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "config.toml")

        assert settings == Settings()
        assert settings.glob.dot is True
        assert settings.assume_yes is False

    def test_partial_file(self, tmp_path: Path) -> None:
        """Values not in the file keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text("assume_yes = true\n\n[glob]\ndot = false\n")

        settings = load_settings(path)

        assert settings.assume_yes is True
        assert settings.glob.dot is False
        assert settings.glob.recursive is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("assume_yes = \n")

        with pytest.raises(SettingsError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("colour = true\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)

    def test_default_path_from_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "pkgprune").mkdir()
        (tmp_path / "pkgprune" / "config.toml").write_text("assume_yes = true\n")

        assert load_settings().assume_yes is True


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        settings = Settings(glob=GlobOptions(dot=False), assume_yes=True)

        result = save_settings(settings, path)

        assert result == path
        data = tomllib.loads(path.read_text())
        assert data == {
            "glob": {"dot": False, "recursive": True, "only_files": True},
            "assume_yes": True,
        }
        assert load_settings(path) == settings

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        save_settings(Settings(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(SettingsError, match="Failed to write settings"):
            save_settings(Settings(), blocker / "config.toml")
