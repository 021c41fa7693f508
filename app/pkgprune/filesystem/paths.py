"""Root-relative path helpers.

All paths exchanged between phases are relative to the run's root, use
``/`` as the only separator and contain no ``.`` or ``..`` segments, so
keep-set membership is a plain string comparison.
"""

import os
import posixpath
from collections.abc import Iterable
from pathlib import Path

ROOT = "."


def normalize_path(path: str) -> str:
    """Normalize a root-relative path to its canonical form.

    Args:
        path: Path as returned by the glob engine or built during the walk.

    Returns:
        Path with collapsed ``.``/``..`` segments and ``/`` separators.
        The root itself normalizes to ``"."``.
    """
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return posixpath.normpath(path) if path else ROOT


def ancestor_dirs(path: str) -> list[str]:
    """Return every proper ancestor directory of a file path.

    Ancestors are derived from the directory portion of the file path
    and listed outermost first, e.g. ``a/b/c.txt`` gives ``["a", "a/b"]``.
    The root is not included.

    Args:
        path: Normalized root-relative file path.

    Returns:
        Ancestor directories, outermost first.
    """
    parent = posixpath.dirname(normalize_path(path))
    if not parent or parent == ROOT:
        return []

    dirs: list[str] = []
    current = ""
    for segment in parent.split("/"):
        current = f"{current}/{segment}" if current else segment
        dirs.append(current)
    return dirs


def parent_dir(path: str) -> str:
    """Return the normalized parent directory of a file path."""
    return normalize_path(posixpath.dirname(normalize_path(path)))


def join_root(root: Path | str, path: str) -> str:
    """Join a root-relative path onto the run root.

    Paths under the current directory are returned unchanged so that
    reported actions read the same as the manifest entries.

    Args:
        root: Root of the working tree.
        path: Normalized root-relative path.

    Returns:
        Path usable with filesystem primitives.
    """
    root_str = str(root)
    if root_str in ("", ROOT):
        return path
    if path == ROOT:
        return root_str
    return os.path.join(root_str, path)


def is_outside_root(path: str) -> bool:
    """Check if a normalized path points above or outside the root."""
    return path == ".." or path.startswith("../") or posixpath.isabs(path)


def is_within(path: str, dirs: Iterable[str]) -> bool:
    """Check if ``path`` is one of ``dirs`` or lies below one of them."""
    return any(path == d or path.startswith(f"{d}/") for d in dirs)
