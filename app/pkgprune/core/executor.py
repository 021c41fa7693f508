"""Action execution for delete and copy phases.

Dispatches queued paths to an operator. All actions of a phase are
issued together and awaited as a group; a failing path only fails its
own ActionResult, never its siblings.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pkgprune.filesystem.models import ActionResult, ActionType
from pkgprune.filesystem.paths import ROOT, join_root, parent_dir

if TYPE_CHECKING:
    from pathlib import Path

    from pkgprune.filesystem.operator import Copier, Deleter, DirMaker, Operator

logger = logging.getLogger(__name__)


def _lstat_is_dir(path: str) -> bool | None:
    """Return whether ``path`` is a real directory, or None if it is gone."""
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return None
    return stat.S_ISDIR(mode)


def _failed(
    action: ActionType,
    path: str,
    error: OSError,
    target: str | None = None,
) -> ActionResult:
    logger.warning("%s failed for %s: %s", action.verb, path, error)
    return ActionResult(action=action, path=path, target=target, success=False, error=str(error))


async def _delete_one(path: str, root: Path | str, operator: Deleter, dry_run: bool) -> ActionResult:
    full = join_root(root, path)

    try:
        is_dir = await asyncio.to_thread(_lstat_is_dir, full)
    except OSError as e:
        return _failed(ActionType.DELETE_FILE, full, e)

    if is_dir is None:
        logger.debug("Already gone: %s", full)
        return ActionResult(action=ActionType.DELETE_FILE, path=full, dry_run=dry_run, skipped=True)

    action = ActionType.DELETE_TREE if is_dir else ActionType.DELETE_FILE
    try:
        if is_dir:
            await operator.delete_tree(full)
        else:
            await operator.delete_file(full)
    except FileNotFoundError:
        # Removed by an enclosing tree deletion in the meantime
        return ActionResult(action=action, path=full, dry_run=dry_run, skipped=True)
    except OSError as e:
        return _failed(action, full, e)

    return ActionResult(action=action, path=full, dry_run=dry_run)


async def delete_paths(
    paths: Iterable[str],
    root: Path | str,
    operator: Operator,
) -> list[ActionResult]:
    """Delete every queued path.

    Directories are removed recursively, everything else with a single
    unlink. Paths that no longer exist count as skipped successes.

    Args:
        paths: Root-relative paths to delete. Duplicates are ignored.
        root: Root of the working tree.
        operator: Operator performing (or reporting) the deletions.

    Returns:
        One ActionResult per distinct path, in queue order.
    """
    unique = list(dict.fromkeys(paths))
    results = await asyncio.gather(
        *(_delete_one(p, root, operator, operator.dry_run) for p in unique)
    )

    failed = sum(1 for r in results if r.failed)
    logger.info("Delete phase: %d path(s), %d failed", len(results), failed)
    return list(results)


async def _make_dir(path: str, operator: DirMaker, dry_run: bool) -> ActionResult:
    try:
        await operator.make_tree(path)
    except OSError as e:
        return _failed(ActionType.MAKE_DIR, path, e)
    return ActionResult(action=ActionType.MAKE_DIR, path=path, dry_run=dry_run)


async def _copy_one(source: str, target: str, operator: Copier, dry_run: bool) -> ActionResult:
    try:
        await operator.copy_file(source, target)
    except OSError as e:
        return _failed(ActionType.COPY, source, e, target=target)
    return ActionResult(action=ActionType.COPY, path=source, target=target, dry_run=dry_run)


async def copy_files(
    files: Iterable[str],
    root: Path | str,
    out_dir: Path | str,
    operator: Operator,
) -> list[ActionResult]:
    """Copy kept files into ``out_dir`` preserving their relative layout.

    Every distinct parent directory is created first; copies start only
    after all directory creations have finished. ``out_dir`` itself is
    expected to exist already.

    Args:
        files: Normalized root-relative paths of kept files.
        root: Root of the working tree.
        out_dir: Destination root.
        operator: Operator performing (or reporting) the actions.

    Returns:
        ActionResults for the directory creations followed by the copies.
    """
    out = str(out_dir)
    paths = sorted(set(files))
    dirs = sorted({parent_dir(p) for p in paths} - {ROOT})

    dir_results = await asyncio.gather(
        *(_make_dir(os.path.join(out, d), operator, operator.dry_run) for d in dirs)
    )
    copy_results = await asyncio.gather(
        *(
            _copy_one(join_root(root, p), os.path.join(out, p), operator, operator.dry_run)
            for p in paths
        )
    )

    results = [*dir_results, *copy_results]
    failed = sum(1 for r in results if r.failed)
    logger.info(
        "Copy phase: %d director(ies), %d file(s), %d failed",
        len(dir_results),
        len(copy_results),
        failed,
    )
    return results
