"""Shared Rich display functions for run reports.

Provides the summary and failure table printed after clean and move.
"""

from rich.table import Table

from pkgprune.core.workflow import RunReport
from pkgprune.filesystem.models import ActionType
from pkgprune.utils.formatting import console, print_error, print_success, print_warning


def create_errors_table(report: RunReport) -> Table:
    """Create a Rich table listing every failure of a run.

    Args:
        report: Report of the run.

    Returns:
        Rich Table with one row per collected error.
    """
    table = Table(
        title="Failures",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Operation", width=10)
    table.add_column("Path", no_wrap=True)
    table.add_column("Error")

    for error in report.errors:
        detail = str(error.cause) if error.cause is not None else str(error)
        table.add_row(
            f"[error]{error.operation}[/error]",
            error.path,
            f"[muted]{detail}[/muted]",
        )

    return table


def print_run_summary(report: RunReport) -> None:
    """Print the outcome of a clean or move run.

    Args:
        report: Report of the run.
    """
    if report.fatal is not None:
        print_error(f"{report.mode.capitalize()} aborted: {report.fatal}")
        return

    if report.errors:
        console.print(create_errors_table(report))

    keep = report.keep
    kept = len(keep.files) if keep is not None else 0
    done = [r for r in report.results if r.success and not r.skipped]

    if report.mode == "clean":
        deleted = sum(
            1 for r in done if r.action in (ActionType.DELETE_FILE, ActionType.DELETE_TREE)
        )
        verb = "would be deleted" if report.dry_run else "deleted"
        message = f"{kept} file(s) kept, {deleted} path(s) {verb}."
    else:
        copied = sum(1 for r in done if r.action == ActionType.COPY)
        verb = "would be copied" if report.dry_run else "copied"
        message = f"{copied} of {kept} kept file(s) {verb}."

    if report.success:
        print_success(message)
    else:
        console.print(message)
        print_warning(f"{len(report.errors)} operation(s) failed.")
