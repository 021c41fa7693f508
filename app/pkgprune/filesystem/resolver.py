"""Keep-set resolution.

Expands the manifest patterns against the working tree with the
standard library glob engine and derives the directories that must
survive because they contain kept files.
"""

import asyncio
import fnmatch
import glob
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from pkgprune.errors import ResolutionError
from pkgprune.filesystem.models import GlobOptions, KeepSet
from pkgprune.filesystem.paths import ROOT, ancestor_dirs, is_outside_root, normalize_path

logger = logging.getLogger(__name__)


def get_dirs_to_keep(files: Iterable[str]) -> frozenset[str]:
    """Collect every ancestor directory of the kept files.

    Args:
        files: Normalized root-relative file paths.

    Returns:
        Set closed under "parent-of" for every file, root excluded.
    """
    dirs: set[str] = set()
    for path in files:
        dirs.update(ancestor_dirs(path))
    return frozenset(dirs)


def _is_real_dir(path: str) -> bool:
    """Check for a directory without following symlinks."""
    return os.path.isdir(path) and not os.path.islink(path)


def _raise_error(error: OSError) -> None:
    raise error


def _subdirs(path: str, segment: str, dot: bool) -> list[str]:
    """List the directories below ``path`` whose name matches ``segment``.

    Raises:
        OSError: If ``path`` cannot be listed.
    """
    skip_hidden = not dot and not segment.startswith(".")
    with os.scandir(path) as it:
        return [
            entry.path
            for entry in it
            if entry.is_dir()
            and not (skip_hidden and entry.name.startswith("."))
            and fnmatch.fnmatch(entry.name, segment)
        ]


def _walk_readable(path: str, dot: bool) -> None:
    """Walk every directory below ``path``, failing on the first unreadable one."""
    for _dirpath, dirnames, _filenames in os.walk(path, onerror=_raise_error):
        if not dot:
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]


def _check_readable(pattern: str, options: GlobOptions, root: str) -> None:
    """Fail if a directory the glob engine lists for ``pattern`` is unreadable.

    The glob engine itself skips such directories silently.

    Raises:
        OSError: If a directory the pattern reaches cannot be listed.
    """
    parts = pattern.replace(os.sep, "/").split("/")
    first_magic = next((i for i, p in enumerate(parts) if glob.has_magic(p)), None)
    if first_magic is None:
        return

    prefix = "/".join(parts[:first_magic])
    if not prefix:
        prefix = "/" if pattern.startswith("/") else ROOT
    base = os.path.join(root, prefix)
    if not os.path.isdir(base):
        return

    dirs = [base]
    remaining = parts[first_magic:]
    for index, segment in enumerate(remaining):
        if options.recursive and segment == "**":
            for directory in dirs:
                _walk_readable(directory, options.dot)
            return
        if index == len(remaining) - 1:
            if glob.has_magic(segment):
                for directory in dirs:
                    _subdirs(directory, segment, options.dot)
            return
        if glob.has_magic(segment):
            dirs = [d for directory in dirs for d in _subdirs(directory, segment, options.dot)]
        else:
            dirs = [p for p in (os.path.join(d, segment) for d in dirs) if os.path.isdir(p)]


def _glob_matches(patterns: list[str], options: GlobOptions, root: str) -> list[str]:
    """Run the glob engine for every pattern (blocking)."""
    matches: dict[str, None] = {}
    for pattern in patterns:
        _check_readable(pattern, options, root)
        found = glob.glob(
            pattern,
            root_dir=root,
            recursive=options.recursive,
            include_hidden=options.dot,
        )
        logger.debug("Pattern %r matched %d path(s)", pattern, len(found))
        for match in found:
            if os.path.isabs(match):
                match = os.path.relpath(match, root)
            matches.setdefault(match, None)

    if options.only_files:
        return [m for m in matches if not _is_real_dir(os.path.join(root, m))]
    return list(matches)


async def expand_patterns(
    patterns: list[str],
    options: GlobOptions,
    root: Path | str = ROOT,
) -> list[str]:
    """Expand patterns into the union of matching root-relative paths.

    Args:
        patterns: Glob patterns from the manifest.
        options: Glob engine options.
        root: Root of the working tree.

    Returns:
        Matching paths, deduplicated, in discovery order.

    Raises:
        ResolutionError: If the glob engine fails or a directory it has to
            list cannot be read.
    """
    try:
        return await asyncio.to_thread(_glob_matches, patterns, options, str(root))
    except (OSError, ValueError) as e:
        msg = f"Failed to expand patterns in {root}: {e}"
        raise ResolutionError(msg) from e


async def resolve(
    patterns: list[str],
    options: GlobOptions | None = None,
    root: Path | str = ROOT,
) -> KeepSet:
    """Resolve patterns into the run's keep-set.

    Every match is treated as a file; directories only enter the
    keep-set as ancestors of kept files. Matches outside the root are
    skipped with a warning.

    Args:
        patterns: Glob patterns from the manifest.
        options: Glob engine options. Defaults to GlobOptions().
        root: Root of the working tree.

    Returns:
        Immutable KeepSet for the rest of the run.

    Raises:
        ResolutionError: If the glob engine fails or a directory it has to
            list cannot be read.
    """
    options = options or GlobOptions()
    matches = await expand_patterns(patterns, options, root)

    files: set[str] = set()
    for match in matches:
        path = normalize_path(match)
        if is_outside_root(path):
            logger.warning("Ignoring match outside %s: %s", root, match)
            continue
        files.add(path)

    dirs = get_dirs_to_keep(files)
    logger.info("Keeping %d file(s) in %d director(ies)", len(files), len(dirs))

    return KeepSet(patterns=tuple(patterns), files=frozenset(files), dirs=dirs)
