"""CLI commands for pkgprune.

This package contains all subcommand implementations.
"""

from pkgprune.cli.commands import clean, config, keep, move

__all__ = ["clean", "config", "keep", "move"]
