"""Empty-file sweep.

A file that matched a keep pattern but holds no bytes is not worth
shipping, so it is queued for deletion alongside the scanner's results.
"""

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from pkgprune.errors import StatError
from pkgprune.filesystem.models import KeepSet, SweepResult
from pkgprune.filesystem.paths import join_root, parent_dir
from pkgprune.filesystem.resolver import get_dirs_to_keep

logger = logging.getLogger(__name__)


async def _file_size(root: Path | str, path: str) -> int:
    stat = await asyncio.to_thread(os.stat, join_root(root, path))
    return stat.st_size


async def find_empty_files(root: Path | str, files: Iterable[str]) -> SweepResult:
    """Stat every kept file and collect the zero-byte ones.

    A failed stat only affects its own file: it is logged, recorded as a
    StatError and the file is not queued.

    Args:
        root: Root of the working tree.
        files: Normalized root-relative paths of kept files.

    Returns:
        SweepResult with empty files in sorted order and stat errors.
    """
    paths = sorted(files)
    sizes = await asyncio.gather(
        *(_file_size(root, p) for p in paths),
        return_exceptions=True,
    )

    result = SweepResult()
    for path, size in zip(paths, sizes, strict=True):
        if isinstance(size, OSError):
            logger.warning("Cannot stat kept file %s: %s", path, size)
            result.errors.append(StatError(path, size))
        elif isinstance(size, BaseException):
            raise size
        elif size == 0:
            logger.debug("Kept file %s is empty", path)
            result.empty_files.append(path)

    if result.empty_files:
        logger.info("Found %d empty kept file(s)", len(result.empty_files))
    return result


def find_emptied_dirs(keep: KeepSet, empty_files: Iterable[str]) -> list[str]:
    """Find kept directories left without any non-empty kept file.

    Once the empty files are gone these directories only hold empty
    directories, so they are removed as a whole. Only the outermost
    such directories are returned.

    Args:
        keep: Resolved keep-set of the run.
        empty_files: Kept files the sweep queued for deletion.

    Returns:
        Sorted outermost directories to delete.
    """
    remaining = keep.files.difference(empty_files)
    emptied = keep.dirs - get_dirs_to_keep(remaining)
    return sorted(d for d in emptied if parent_dir(d) not in emptied)
