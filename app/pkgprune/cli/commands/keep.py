"""Keep command implementation.

Shows which files and directories a patterns file keeps without
changing anything.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer

from pkgprune.cli.types import (
    DotOption,
    OutputFormat,
    PatternsArg,
    RootOption,
    glob_options_for,
    require_settings,
)
from pkgprune.errors import ConfigError, ResolutionError
from pkgprune.filesystem.models import GlobOptions, KeepSet
from pkgprune.filesystem.patterns import load_patterns
from pkgprune.filesystem.resolver import resolve
from pkgprune.utils.formatting import console, create_path_table, print_error, print_warning


async def _resolve(patterns_file: Path, root: Path, options: GlobOptions) -> KeepSet:
    patterns = await load_patterns(patterns_file)
    return await resolve(patterns, options, root)


def show_keep_set(
    patterns: PatternsArg,
    root: RootOption = Path("."),
    dirs: Annotated[
        bool,
        typer.Option("--dirs", help="Also list the directories that are kept."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    dot: DotOption = None,
) -> None:
    """List the files under ROOT that the PATTERNS file keeps."""
    options = glob_options_for(require_settings(), dot)
    try:
        keep = asyncio.run(_resolve(patterns, root, options))
    except (ConfigError, ResolutionError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        data: dict[str, list[str]] = {
            "patterns": list(keep.patterns),
            "files": keep.sorted_files(),
        }
        if dirs:
            data["dirs"] = keep.sorted_dirs()
        console.print_json(json.dumps(data))
        return

    if keep.is_empty:
        print_warning("No files match the patterns; clean would delete everything.")
        return

    table = create_path_table(f"Kept Files ({len(keep.files)})")
    for path in keep.sorted_files():
        table.add_row(path)
    console.print(table)

    if dirs:
        dir_table = create_path_table(f"Kept Directories ({len(keep.dirs)})")
        for path in keep.sorted_dirs():
            dir_table.add_row(f"{path}/")
        console.print(dir_table)
