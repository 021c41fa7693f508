"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pkgprune import __version__
from pkgprune.cli.commands import clean, config, keep, move
from pkgprune.utils.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="pkgprune",
    help="Strip a file tree down to the files a package manifest names.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pkgprune version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """pkgprune - strip a file tree down to a package.

    Keep only the files matched by the glob patterns of a manifest,
    either by deleting everything else in place or by copying the kept
    files into a new directory.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="clean")(clean.clean_tree)
app.command(name="move")(move.move_tree)
app.command(name="keep")(keep.show_keep_set)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
