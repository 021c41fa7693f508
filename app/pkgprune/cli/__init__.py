"""CLI package for pkgprune.

This package contains the Typer application and all subcommands.
"""

from pkgprune.cli.main import app

__all__ = ["app"]
