"""Shared types and helpers for CLI commands.

Provides the options common to every pruning command and merges them
with the user's settings.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from pkgprune.core.settings import Settings, load_settings
from pkgprune.errors import SettingsError
from pkgprune.filesystem.models import GlobOptions
from pkgprune.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


PatternsArg = Annotated[
    Path,
    typer.Argument(help="File with one glob pattern per line."),
]
RootOption = Annotated[
    Path,
    typer.Option(
        "--root",
        "-C",
        help="Root of the tree the patterns apply to.",
        file_okay=False,
    ),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the actions instead of performing them."),
]
DotOption = Annotated[
    bool | None,
    typer.Option(
        "--dot/--no-dot",
        help="Let wildcards match names starting with a dot (default from settings).",
        show_default=False,
    ),
]


def require_settings() -> Settings:
    """Load user settings or exit with an error.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def glob_options_for(settings: Settings, dot: bool | None) -> GlobOptions:
    """Merge the --dot flag over the configured glob options.

    Args:
        settings: Loaded user settings.
        dot: Value of --dot/--no-dot, None if not given.

    Returns:
        Effective glob options.
    """
    if dot is None:
        return settings.glob
    return settings.glob.model_copy(update={"dot": dot})
