"""Tests for run configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pkgprune.core.config import RunConfig, coerce_glob_options
from pkgprune.filesystem.models import GlobOptions


class TestCoerceGlobOptions:
    """Tests for coerce_glob_options."""

    def test_none_gives_defaults(self) -> None:
        options = coerce_glob_options(None)

        assert options == GlobOptions()
        assert options.dot is True

    def test_instance_passes_through(self) -> None:
        options = GlobOptions(dot=False)

        assert coerce_glob_options(options) is options

    def test_partial_mapping_keeps_defaults(self) -> None:
        """Keys not given keep their default values."""
        options = coerce_glob_options({"recursive": False})

        assert options.recursive is False
        assert options.dot is True
        assert options.only_files is True

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            coerce_glob_options({"follow": True})


class TestRunConfig:
    """Tests for RunConfig model."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = RunConfig(patterns_file=tmp_path / "manifest.txt")

        assert config.root == Path(".")
        assert config.glob == GlobOptions()
        assert config.dry_run is False

    def test_frozen(self, tmp_path: Path) -> None:
        config = RunConfig(patterns_file=tmp_path / "manifest.txt")

        with pytest.raises(ValidationError):
            config.dry_run = True  # type: ignore[misc]

    def test_extra_fields_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            RunConfig(patterns_file=tmp_path / "m.txt", verbose=True)  # type: ignore[call-arg]
