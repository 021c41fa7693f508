"""Tree scanner with keep-set guard.

Walks the working tree depth-first and queues every entry that is not
protected by the keep-set. Directories that are queued are not
descended into: their whole subtree goes with them.
"""

import asyncio
import logging
import os
from pathlib import Path

from pkgprune.errors import ScanError
from pkgprune.filesystem.models import KeepSet, ScanResult
from pkgprune.filesystem.paths import ROOT, join_root

logger = logging.getLogger(__name__)


def is_protected(path: str, is_dir: bool, keep: KeepSet) -> bool:
    """Decide whether an entry survives the clean.

    Args:
        path: Normalized root-relative path of the entry.
        is_dir: True if the entry is a real directory (not a symlink).
        keep: Resolved keep-set of the run.

    Returns:
        True if the entry must be kept, False if it should be deleted.
    """
    if path == ROOT:
        return True
    if is_dir:
        return path in keep.dirs
    return path in keep.files


def _list_entries(path: str) -> list[tuple[str, bool]]:
    """List a directory as sorted (name, is_dir) pairs (blocking).

    Symlinks are reported as non-directories so they are never followed.
    """
    with os.scandir(path) as it:
        return sorted((entry.name, entry.is_dir(follow_symlinks=False)) for entry in it)


class TreeScanner:
    """Walks a tree and collects paths not protected by a keep-set.

    Args:
        root: Root of the working tree.
        keep: Resolved keep-set of the run.
    """

    def __init__(self, root: Path | str, keep: KeepSet) -> None:
        self._root = root
        self._keep = keep
        self._visited = 0

    @property
    def visited(self) -> int:
        """Number of entries classified by the guard so far."""
        return self._visited

    async def scan(self) -> ScanResult:
        """Walk the whole tree.

        Failures to list a directory are isolated to that branch and
        returned in ``ScanResult.errors``; paths queued by other branches
        are still returned.

        Returns:
            ScanResult with sorted paths to delete and scan errors.
        """
        result = ScanResult()
        await self._walk(ROOT, result)
        result.paths_to_delete.sort()

        logger.info(
            "Scanned %d entries, %d queued for deletion",
            self._visited,
            len(result.paths_to_delete),
        )
        return result

    async def _walk(self, directory: str, result: ScanResult) -> None:
        try:
            entries = await asyncio.to_thread(
                _list_entries, join_root(self._root, directory)
            )
        except OSError as e:
            logger.warning("Cannot scan directory %s: %s", directory, e)
            result.errors.append(ScanError(directory, e))
            return

        subdirs: list[str] = []
        for name, is_dir in entries:
            path = name if directory == ROOT else f"{directory}/{name}"
            self._visited += 1

            if is_protected(path, is_dir, self._keep):
                if is_dir:
                    subdirs.append(path)
                continue

            logger.debug("Queued %s%s", path, "/" if is_dir else "")
            result.paths_to_delete.append(path)

        if subdirs:
            await asyncio.gather(*(self._walk(d, result) for d in subdirs))


async def scan_tree(root: Path | str, keep: KeepSet) -> ScanResult:
    """Walk ``root`` and collect paths not protected by ``keep``.

    Args:
        root: Root of the working tree.
        keep: Resolved keep-set of the run.

    Returns:
        ScanResult with paths to delete and per-branch errors.
    """
    return await TreeScanner(root, keep).scan()
