"""Clean command implementation.

Deletes every file and directory under the root that the patterns file
does not keep, plus kept files that are empty.
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
from pkgprune.core.workflow import clean
from pkgprune.utils.formatting import print_action_line, print_info


def _confirm_clean(root: Path) -> bool:
    """Prompt user to confirm the deletion.

    Args:
        root: Root of the tree about to be pruned.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(
        f"Delete everything under {root.resolve()} that the patterns do not keep?",
        default=False,
    )


def clean_tree(
    patterns: PatternsArg,
    root: RootOption = Path("."),
    dry_run: DryRunOption = False,
    dot: DotOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete everything under ROOT not matched by the PATTERNS file."""
    settings = require_settings()
    glob_options = glob_options_for(settings, dot)

    if not dry_run and not (yes or settings.assume_yes) and not _confirm_clean(root):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    report = clean(
        patterns,
        glob_options,
        dry_run,
        root=root,
        report=print_action_line,
    )
    print_run_summary(report)

    if not report.success:
        raise typer.Exit(code=1)
