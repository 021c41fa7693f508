"""Move command implementation.

Copies the files the patterns file keeps into a new directory, leaving
the source tree untouched.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgprune.cli.display import print_run_summary
from pkgprune.cli.types import (
    DotOption,
    DryRunOption,
    PatternsArg,
    RootOption,
    glob_options_for,
    require_settings,
)
from pkgprune.core.workflow import move
from pkgprune.utils.formatting import print_action_line


def move_tree(
    patterns: PatternsArg,
    output: Annotated[
        Path,
        typer.Argument(help="Directory to copy the kept files into."),
    ],
    root: RootOption = Path("."),
    dry_run: DryRunOption = False,
    dot: DotOption = None,
) -> None:
    """Copy the files matched by PATTERNS from ROOT into OUTPUT."""
    settings = require_settings()

    report = move(
        patterns,
        output,
        glob_options_for(settings, dot),
        dry_run,
        root=root,
        report=print_action_line,
    )
    print_run_summary(report)

    if not report.success:
        raise typer.Exit(code=1)
