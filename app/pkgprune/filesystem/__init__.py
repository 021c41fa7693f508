"""Filesystem phases of a pruning run.

This package provides pattern loading, keep-set resolution, the guarded
tree walk, the empty-file sweep and the operators that act on the tree.
"""

from pkgprune.filesystem.models import (
    ActionResult,
    ActionType,
    GlobOptions,
    KeepSet,
    ScanResult,
    SweepResult,
)
from pkgprune.filesystem.operator import (
    Copier,
    Deleter,
    DirMaker,
    DryRunOperator,
    FilesystemOperator,
    Operator,
    get_operator,
)
from pkgprune.filesystem.patterns import load_patterns, parse_patterns
from pkgprune.filesystem.resolver import get_dirs_to_keep, resolve
from pkgprune.filesystem.scanner import TreeScanner, is_protected, scan_tree
from pkgprune.filesystem.sweep import find_emptied_dirs, find_empty_files

__all__ = [
    "ActionResult",
    "ActionType",
    "Copier",
    "Deleter",
    "DirMaker",
    "DryRunOperator",
    "FilesystemOperator",
    "GlobOptions",
    "KeepSet",
    "Operator",
    "ScanResult",
    "SweepResult",
    "TreeScanner",
    "find_emptied_dirs",
    "find_empty_files",
    "get_dirs_to_keep",
    "get_operator",
    "is_protected",
    "load_patterns",
    "parse_patterns",
    "resolve",
    "scan_tree",
]
