"""Settings commands.

Shows and initializes the pkgprune settings file.
"""

from typing import Annotated

import typer

from pkgprune.cli.types import require_settings
from pkgprune.core.paths import get_settings_path
from pkgprune.core.settings import Settings, save_settings
from pkgprune.errors import SettingsError
from pkgprune.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the settings file.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    settings = require_settings()
    path = get_settings_path()
    source = str(path) if path.exists() else "built-in defaults"

    console.print(f"[muted]Settings from {source}[/muted]")
    console.print_json(settings.model_dump_json())


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
