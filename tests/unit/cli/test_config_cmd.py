"""Tests for the config commands."""

import json
import tomllib
from collections.abc import Callable
from pathlib import Path

from typer.testing import CliRunner

from pkgprune.cli.main import app

SettingsWriter = Callable[[str], Path]


class TestConfigShow:
    """Tests for pkgprune config show."""

    def test_defaults(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "built-in defaults" in result.output
        payload = result.output[result.output.index("{") :]
        assert json.loads(payload) == {
            "glob": {"dot": True, "recursive": True, "only_files": True},
            "assume_yes": False,
        }

    def test_from_file(self, runner: CliRunner, write_settings: SettingsWriter) -> None:
        write_settings("[glob]\ndot = false\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "built-in defaults" not in result.output
        assert '"dot": false' in result.output


class TestConfigInit:
    """Tests for pkgprune config init."""

    def test_writes_defaults(self, runner: CliRunner, config_home: Path) -> None:
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Settings written to" in result.output
        path = config_home / "pkgprune" / "config.toml"
        assert tomllib.loads(path.read_text())["assume_yes"] is False

    def test_existing_file_kept(self, runner: CliRunner, write_settings: SettingsWriter) -> None:
        path = write_settings("assume_yes = true\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert path.read_text() == "assume_yes = true\n"

    def test_force_overwrites(self, runner: CliRunner, write_settings: SettingsWriter) -> None:
        path = write_settings("assume_yes = true\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert tomllib.loads(path.read_text())["assume_yes"] is False
