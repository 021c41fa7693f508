"""Filesystem domain models for keep-set resolution and pruning.

This module defines the data structures passed between the phases of a
run: glob options, the resolved keep-set, scan and sweep results, and
the outcome of each filesystem action.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pkgprune.errors import ScanError, StatError


class GlobOptions(BaseModel):
    """Options forwarded to the glob engine.

    Attributes:
        dot: Let wildcards match names starting with a dot.
        recursive: Let ``**`` match any number of directories.
        only_files: Drop directory matches from the result.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dot: Annotated[bool, Field(description="Wildcards match dot-files")] = True
    recursive: Annotated[bool, Field(description="'**' spans directories")] = True
    only_files: Annotated[bool, Field(description="Ignore directory matches")] = True


class ActionType(Enum):
    """Type of filesystem action performed by an operator.

    Attributes:
        DELETE_FILE: Remove a single file or symlink.
        DELETE_TREE: Remove a directory and everything below it.
        COPY: Copy a file to a new location.
        MAKE_DIR: Create a directory including missing parents.
    """

    DELETE_FILE = "delete_file"
    DELETE_TREE = "delete_tree"
    COPY = "copy"
    MAKE_DIR = "make_dir"

    @property
    def verb(self) -> str:
        """Shell command equivalent of this action."""
        return _VERBS[self]


_VERBS: dict[ActionType, str] = {
    ActionType.DELETE_FILE: "rm",
    ActionType.DELETE_TREE: "rm -rf",
    ActionType.COPY: "cp",
    ActionType.MAKE_DIR: "mkdir",
}


@dataclass(frozen=True, slots=True)
class KeepSet:
    """Files and directories a run must not delete.

    Computed once per run and never mutated afterwards.

    Attributes:
        patterns: Patterns the keep-set was resolved from.
        files: Normalized root-relative paths of files to keep.
        dirs: Every proper ancestor directory of a file in ``files``.
    """

    patterns: tuple[str, ...]
    files: frozenset[str]
    dirs: frozenset[str]

    def sorted_files(self) -> list[str]:
        """Files to keep in deterministic order."""
        return sorted(self.files)

    def sorted_dirs(self) -> list[str]:
        """Directories to keep in deterministic order."""
        return sorted(self.dirs)

    @property
    def is_empty(self) -> bool:
        """Check if nothing matched the patterns."""
        return not self.files


@dataclass(slots=True)
class ScanResult:
    """Outcome of walking the tree with the guard.

    Attributes:
        paths_to_delete: Unprotected paths found during the walk.
        errors: Branches that could not be listed.
    """

    paths_to_delete: list[str] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)


@dataclass(slots=True)
class SweepResult:
    """Outcome of the empty-file sweep.

    Attributes:
        empty_files: Kept files with zero size.
        errors: Files whose size could not be determined.
    """

    empty_files: list[str] = field(default_factory=list)
    errors: list[StatError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of a single filesystem action.

    Attributes:
        action: Kind of action performed.
        path: Path that was operated on (the source for copies).
        target: Destination path for copies, None otherwise.
        success: Whether the action completed successfully.
        error: Error message if the action failed, None otherwise.
        dry_run: Whether the action was only reported.
        skipped: Whether the path was already gone, which counts as success.
    """

    action: ActionType
    path: str
    target: str | None = None
    success: bool = True
    error: str | None = None
    dry_run: bool = False
    skipped: bool = False

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
