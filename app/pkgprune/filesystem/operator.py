"""Filesystem operators.

Operators perform the mutating filesystem actions of a run. Each
capability (deleting, copying, creating directories) is a small
interface; the real operator implements them with standard library
primitives, the dry-run operator only reports the equivalent shell
command.
"""

import asyncio
import logging
import os
import shutil
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from pkgprune.filesystem.models import ActionType

logger = logging.getLogger(__name__)

ReportCallback = Callable[[str], None]


class Deleter(ABC):
    """Removes files and directory trees."""

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """Remove a single file or symlink.

        Raises:
            OSError: If the file cannot be removed.
        """

    @abstractmethod
    async def delete_tree(self, path: str) -> None:
        """Remove a directory and everything below it.

        Raises:
            OSError: If the directory cannot be removed.
        """


class Copier(ABC):
    """Copies files."""

    @abstractmethod
    async def copy_file(self, source: str, target: str) -> None:
        """Copy ``source`` to ``target``, overwriting an existing target.

        Raises:
            OSError: If the file cannot be copied.
        """


class DirMaker(ABC):
    """Creates directories."""

    @abstractmethod
    async def make_tree(self, path: str) -> None:
        """Create a directory including missing parents.

        An existing directory is not an error.

        Raises:
            OSError: If the directory cannot be created.
        """


class Operator(Deleter, Copier, DirMaker, ABC):
    """Full set of capabilities an executor depends on.

    Example:
        >>> operator = get_operator(dry_run=True, report=print)
        >>> asyncio.run(operator.delete_file("README.md"))
        rm README.md
    """

    @property
    @abstractmethod
    def dry_run(self) -> bool:
        """Check if the operator only reports actions."""


class FilesystemOperator(Operator):
    """Performs actions on the real filesystem.

    Blocking primitives run in worker threads so independent actions of
    a phase can proceed concurrently.
    """

    @property
    def dry_run(self) -> bool:
        return False

    async def delete_file(self, path: str) -> None:
        await asyncio.to_thread(os.unlink, path)

    async def delete_tree(self, path: str) -> None:
        await asyncio.to_thread(shutil.rmtree, path)

    async def copy_file(self, source: str, target: str) -> None:
        await asyncio.to_thread(shutil.copy2, source, target)

    async def make_tree(self, path: str) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)


class DryRunOperator(Operator):
    """Reports actions as shell commands without touching the filesystem.

    Args:
        report: Called with every reported line. Defaults to logging
            the line at INFO level.

    Attributes:
        lines: Every line reported so far, in order.
    """

    def __init__(self, report: ReportCallback | None = None) -> None:
        self._report = report or _log_line
        self.lines: list[str] = []

    @property
    def dry_run(self) -> bool:
        return True

    def _emit(self, action: ActionType, *paths: str) -> None:
        line = " ".join((action.verb, *paths))
        self.lines.append(line)
        self._report(line)

    async def delete_file(self, path: str) -> None:
        self._emit(ActionType.DELETE_FILE, path)

    async def delete_tree(self, path: str) -> None:
        self._emit(ActionType.DELETE_TREE, path)

    async def copy_file(self, source: str, target: str) -> None:
        self._emit(ActionType.COPY, source, target)

    async def make_tree(self, path: str) -> None:
        self._emit(ActionType.MAKE_DIR, path)


def _log_line(line: str) -> None:
    logger.info("Dry-run: %s", line)


def get_operator(dry_run: bool = False, report: ReportCallback | None = None) -> Operator:
    """Create the operator for a run.

    Args:
        dry_run: If True, return a reporting operator.
        report: Line callback for the reporting operator.

    Returns:
        DryRunOperator in dry-run mode, FilesystemOperator otherwise.
    """
    if dry_run:
        return DryRunOperator(report)
    return FilesystemOperator()
