"""User settings for pkgprune.

Settings provide defaults for options the CLI does not receive
explicitly. They are stored in ~/.config/pkgprune/config.toml:

    assume_yes = false

    [glob]
    dot = true
    recursive = true
    only_files = true
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pkgprune.core.paths import get_settings_path
from pkgprune.errors import SettingsError
from pkgprune.filesystem.models import GlobOptions

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Persistent defaults for pkgprune runs.

    Attributes:
        glob: Default glob engine options.
        assume_yes: Skip the confirmation prompt of ``pkgprune clean``.
    """

    model_config = ConfigDict(extra="forbid")

    glob: Annotated[GlobOptions, Field(default_factory=GlobOptions)]
    assume_yes: Annotated[
        bool,
        Field(description="Do not ask before deleting files"),
    ] = False


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file yields the default settings.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file first and moved into place
    with os.replace().

    Args:
        settings: Settings to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = settings.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
