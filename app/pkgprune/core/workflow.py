"""Clean and move workflows.

Composes the filesystem phases into the two public workflows:

- clean: load patterns, resolve the keep-set, scan the tree, sweep
  empty kept files, delete everything queued.
- move: create the output root, load patterns, resolve the keep-set,
  copy the kept files into the output root.

Each phase finishes completely before the next one starts. Errors that
are isolated to a single path are collected on the RunReport; fatal
errors abort the workflow and are logged by the synchronous entry
points, which never raise.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pkgprune.core.config import RunConfig, coerce_glob_options
from pkgprune.core.executor import copy_files, delete_paths
from pkgprune.errors import ActionError, EntryError
from pkgprune.filesystem.models import ActionResult, ActionType, GlobOptions, KeepSet
from pkgprune.filesystem.operator import Operator, ReportCallback, get_operator
from pkgprune.filesystem.patterns import ensure_patterns_file, load_patterns
from pkgprune.filesystem.resolver import resolve
from pkgprune.filesystem.scanner import scan_tree
from pkgprune.filesystem.paths import is_within
from pkgprune.filesystem.sweep import find_emptied_dirs, find_empty_files

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunReport:
    """Outcome of a clean or move run.

    Attributes:
        mode: "clean" or "move".
        dry_run: Whether actions were only reported.
        keep: Resolved keep-set, None if the run aborted before resolution.
        paths_to_delete: Paths queued by the scan and the empty-file sweep.
        results: One ActionResult per executed action.
        errors: Isolated errors collected from every phase.
        fatal: Error that aborted the run, if any.
    """

    mode: str
    dry_run: bool = False
    keep: KeepSet | None = None
    paths_to_delete: list[str] = field(default_factory=list)
    results: list[ActionResult] = field(default_factory=list)
    errors: list[EntryError] = field(default_factory=list)
    fatal: BaseException | None = None

    @property
    def success(self) -> bool:
        """Check if the run completed without any failure."""
        return self.fatal is None and not self.errors

    @property
    def failed_results(self) -> list[ActionResult]:
        """Actions that failed."""
        return [r for r in self.results if r.failed]

    def add_results(self, results: list[ActionResult]) -> None:
        """Record action results and collect an ActionError per failure."""
        self.results.extend(results)
        for r in results:
            if r.failed:
                self.errors.append(ActionError(r.path, r.action, r.error))


class PackagePruner:
    """Runs the clean and move workflows for one configuration.

    The patterns file is checked on construction, before any async work
    is started.

    Args:
        config: Run configuration.
        operator: Operator for mutating actions. Defaults to the real or
            dry-run operator according to ``config.dry_run``.
        report: Line callback for the dry-run operator.

    Raises:
        NotFoundError: If the patterns file does not exist.
    """

    def __init__(
        self,
        config: RunConfig,
        operator: Operator | None = None,
        report: ReportCallback | None = None,
    ) -> None:
        ensure_patterns_file(config.patterns_file)
        self._config = config
        self._operator = operator or get_operator(config.dry_run, report)

    @property
    def config(self) -> RunConfig:
        return self._config

    @property
    def operator(self) -> Operator:
        return self._operator

    async def resolve_keep_set(self) -> KeepSet:
        """Load the patterns and resolve them against the root.

        Raises:
            ConfigError: If the patterns file cannot be read.
            ResolutionError: If the glob engine fails.
        """
        patterns = await load_patterns(self._config.patterns_file)
        return await resolve(patterns, self._config.glob, self._config.root)

    async def clean(self) -> RunReport:
        """Delete everything under the root that is not kept.

        Returns:
            RunReport of the run.

        Raises:
            ConfigError: If the patterns file cannot be read.
            ResolutionError: If the glob engine fails.
        """
        root = self._config.root
        report = RunReport(mode="clean", dry_run=self._operator.dry_run)

        keep = await self.resolve_keep_set()
        report.keep = keep

        scan = await scan_tree(root, keep)
        report.errors.extend(scan.errors)

        sweep = await find_empty_files(root, keep.files)
        report.errors.extend(sweep.errors)

        # Directories whose kept files are all empty go as a whole
        emptied = find_emptied_dirs(keep, sweep.empty_files)
        queued = [*scan.paths_to_delete, *sweep.empty_files]
        report.paths_to_delete = sorted(
            [*(p for p in queued if not is_within(p, emptied)), *emptied]
        )
        report.add_results(await delete_paths(report.paths_to_delete, root, self._operator))
        return report

    async def move(self, output_dir: Path | str) -> RunReport:
        """Copy the kept files into ``output_dir``.

        The working tree is left untouched.

        Args:
            output_dir: Destination root, created if missing.

        Returns:
            RunReport of the run.

        Raises:
            ActionError: If the output root cannot be created.
            ConfigError: If the patterns file cannot be read.
            ResolutionError: If the glob engine fails.
        """
        out = str(output_dir)
        report = RunReport(mode="move", dry_run=self._operator.dry_run)

        try:
            await self._operator.make_tree(out)
        except OSError as e:
            raise ActionError(out, ActionType.MAKE_DIR, e) from e
        report.add_results(
            [ActionResult(action=ActionType.MAKE_DIR, path=out, dry_run=self._operator.dry_run)]
        )

        keep = await self.resolve_keep_set()
        report.keep = keep

        report.add_results(
            await copy_files(keep.files, self._config.root, out, self._operator)
        )
        return report


def _make_config(
    patterns_file: Path | str,
    root: Path | str,
    glob_options: GlobOptions | Mapping[str, bool] | None,
    dry_run: bool,
) -> RunConfig:
    return RunConfig(
        patterns_file=Path(patterns_file),
        root=Path(root),
        glob=coerce_glob_options(glob_options),
        dry_run=dry_run,
    )


def _run(
    mode: str,
    dry_run: bool,
    build: Callable[[], Coroutine[Any, Any, RunReport]],
) -> RunReport:
    """Build a workflow coroutine and run it, logging instead of raising.

    ``build`` runs before the event loop starts, so configuration errors
    surface without any async work being scheduled.
    """
    try:
        workflow = build()
        return asyncio.run(workflow)
    except Exception as e:
        logger.exception("%s aborted: %s", mode.capitalize(), e)
        return RunReport(mode=mode, dry_run=dry_run, fatal=e)


def clean(
    patterns_file: Path | str,
    glob_options: GlobOptions | Mapping[str, bool] | None = None,
    dry_run: bool = False,
    *,
    root: Path | str = ".",
    report: ReportCallback | None = None,
) -> RunReport:
    """Prune the tree under ``root`` down to the files the patterns keep.

    Args:
        patterns_file: File listing the glob patterns to keep.
        glob_options: Glob engine options; ``dot`` defaults to True.
        dry_run: Report deletions instead of performing them.
        root: Root of the working tree.
        report: Line callback for dry-run output.

    Returns:
        RunReport of the run. Failures are reported, never raised.
    """

    def build() -> Coroutine[Any, Any, RunReport]:
        config = _make_config(patterns_file, root, glob_options, dry_run)
        return PackagePruner(config, report=report).clean()

    return _run("clean", dry_run, build)


def move(
    patterns_file: Path | str,
    output_dir: Path | str,
    glob_options: GlobOptions | Mapping[str, bool] | None = None,
    dry_run: bool = False,
    *,
    root: Path | str = ".",
    report: ReportCallback | None = None,
) -> RunReport:
    """Copy the files the patterns keep from ``root`` into ``output_dir``.

    Args:
        patterns_file: File listing the glob patterns to keep.
        output_dir: Destination root, created if missing.
        glob_options: Glob engine options; ``dot`` defaults to True.
        dry_run: Report actions instead of performing them.
        root: Root of the working tree.
        report: Line callback for dry-run output.

    Returns:
        RunReport of the run. Failures are reported, never raised.
    """

    def build() -> Coroutine[Any, Any, RunReport]:
        config = _make_config(patterns_file, root, glob_options, dry_run)
        return PackagePruner(config, report=report).move(output_dir)

    return _run("move", dry_run, build)
