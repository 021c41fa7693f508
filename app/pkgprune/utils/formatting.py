"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table

from pkgprune.core.theme import get_theme
from pkgprune.filesystem.models import ActionType


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

# Longest verbs first so "rm -rf" is not taken for "rm"
_VERB_STYLES: list[tuple[str, str]] = sorted(
    ((action.verb, f"action.{action.value}") for action in ActionType),
    key=lambda item: len(item[0]),
    reverse=True,
)


def create_path_table(title: str) -> Table:
    """Create a pre-configured table for listing paths.

    Args:
        title: Table title.

    Returns:
        Rich Table with a single path column.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Path", style="text", no_wrap=True)
    return table


def print_action_line(line: str) -> None:
    """Print a planned action, colored by its shell verb."""
    style = next((s for verb, s in _VERB_STYLES if line.startswith(f"{verb} ")), "text")
    console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
