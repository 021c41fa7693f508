"""Unit tests for delete and copy execution."""

import asyncio
import os
from pathlib import Path
from unittest.mock import patch

from pkgprune.core.executor import copy_files, delete_paths
from pkgprune.filesystem.models import ActionType
from pkgprune.filesystem.operator import DryRunOperator, FilesystemOperator


class _FailingOperator(FilesystemOperator):
    """Real operator that fails for paths containing a marker."""

    def __init__(self, marker: str) -> None:
        self._marker = marker

    async def delete_file(self, path: str) -> None:
        if self._marker in path:
            raise PermissionError(f"denied: {path}")
        await super().delete_file(path)

    async def copy_file(self, source: str, target: str) -> None:
        if self._marker in source:
            raise PermissionError(f"denied: {source}")
        await super().copy_file(source, target)

    async def make_tree(self, path: str) -> None:
        if self._marker in path:
            raise PermissionError(f"denied: {path}")
        await super().make_tree(path)


class TestDeletePaths:
    """Tests for delete_paths coroutine."""

    def test_deletes_files_and_directories(self, package_tree: Path) -> None:
        """Directories are removed recursively, files individually."""
        results = asyncio.run(
            delete_paths(["README.md", "docs"], package_tree, FilesystemOperator())
        )

        assert [r.action for r in results] == [ActionType.DELETE_FILE, ActionType.DELETE_TREE]
        assert all(r.success for r in results)
        assert not (package_tree / "README.md").exists()
        assert not (package_tree / "docs").exists()

    def test_missing_path_is_skipped_success(self, package_tree: Path) -> None:
        """Deleting a path that is already gone is a no-op."""
        results = asyncio.run(delete_paths(["nope.txt"], package_tree, FilesystemOperator()))

        assert results[0].success is True
        assert results[0].skipped is True

    def test_nested_path_removed_by_parent(self, package_tree: Path) -> None:
        """A queued child of a queued directory does not fail the run."""
        results = asyncio.run(
            delete_paths(["docs", "docs/guide/intro.md"], package_tree, FilesystemOperator())
        )

        assert all(r.success for r in results)
        assert not (package_tree / "docs").exists()

    def test_duplicates_are_ignored(self, package_tree: Path) -> None:
        """Each distinct path is acted on once."""
        results = asyncio.run(
            delete_paths(["README.md", "README.md"], package_tree, FilesystemOperator())
        )

        assert len(results) == 1

    def test_failure_is_isolated(self, package_tree: Path) -> None:
        """One failing path does not stop the others."""
        results = asyncio.run(
            delete_paths(
                ["README.md", "src/b.txt", "package.json"],
                package_tree,
                _FailingOperator("b.txt"),
            )
        )

        failed = [r for r in results if r.failed]
        assert len(failed) == 1
        assert failed[0].path.endswith("b.txt")
        assert "denied" in (failed[0].error or "")
        assert not (package_tree / "README.md").exists()
        assert not (package_tree / "package.json").exists()
        assert (package_tree / "src" / "b.txt").exists()

    def test_symlink_to_directory_is_unlinked(self, package_tree: Path) -> None:
        """A symlink to a directory is removed as a file."""
        (package_tree / "link").symlink_to(package_tree / "src", target_is_directory=True)

        results = asyncio.run(delete_paths(["link"], package_tree, FilesystemOperator()))

        assert results[0].action == ActionType.DELETE_FILE
        assert not (package_tree / "link").is_symlink()
        assert (package_tree / "src" / "a.js").exists()

    def test_lstat_failure(self, package_tree: Path) -> None:
        """A path that cannot be inspected fails on its own."""
        with patch("pkgprune.core.executor.os.lstat", side_effect=PermissionError("denied")):
            results = asyncio.run(
                delete_paths(["README.md"], package_tree, FilesystemOperator())
            )

        assert results[0].failed
        assert (package_tree / "README.md").exists()

    def test_dry_run_reports_without_deleting(self, package_tree: Path) -> None:
        """The dry-run operator reports rm and rm -rf lines."""
        op = DryRunOperator(report=lambda _line: None)
        results = asyncio.run(delete_paths(["README.md", "docs"], package_tree, op))

        assert sorted(op.lines) == [
            f"rm -rf {os.path.join(package_tree, 'docs')}",
            f"rm {os.path.join(package_tree, 'README.md')}",
        ]
        assert all(r.dry_run for r in results)
        assert (package_tree / "README.md").exists()
        assert (package_tree / "docs").exists()


class TestCopyFiles:
    """Tests for copy_files coroutine."""

    def test_copies_preserving_layout(self, package_tree: Path, tmp_path: Path) -> None:
        """Kept files land at the same relative path under the output root."""
        out = tmp_path / "out"
        out.mkdir()
        files = ["package.json", "src/a.js", "src/lib/util.js"]

        results = asyncio.run(copy_files(files, package_tree, out, FilesystemOperator()))

        assert all(r.success for r in results)
        for rel in files:
            assert (out / rel).read_bytes() == (package_tree / rel).read_bytes()
        assert not (out / "README.md").exists()

    def test_directories_created_before_copies(self, package_tree: Path, tmp_path: Path) -> None:
        """Each distinct parent is created once, before any copy."""
        op = DryRunOperator(report=lambda _line: None)
        out = tmp_path / "out"

        asyncio.run(copy_files(["src/a.js", "src/lib/util.js", "package.json"], package_tree, out, op))

        verbs = [line.split(" ", 1)[0] for line in op.lines]
        assert verbs == ["mkdir", "mkdir", "cp", "cp", "cp"]
        assert op.lines[:2] == [f"mkdir {out / 'src'}", f"mkdir {out / 'src' / 'lib'}"]
        assert not out.exists()

    def test_failures_are_isolated(self, package_tree: Path, tmp_path: Path) -> None:
        """A failing copy does not stop the other copies."""
        out = tmp_path / "out"
        out.mkdir()

        results = asyncio.run(
            copy_files(
                ["package.json", "src/a.js"],
                package_tree,
                out,
                _FailingOperator("a.js"),
            )
        )

        failed = [r for r in results if r.failed]
        assert len(failed) == 1
        assert failed[0].action == ActionType.COPY
        assert failed[0].target == os.path.join(out, "src/a.js")
        assert (out / "package.json").exists()

    def test_mkdir_failure_reported(self, package_tree: Path, tmp_path: Path) -> None:
        """A failing directory creation is reported for that directory."""
        out = tmp_path / "out"
        out.mkdir()

        results = asyncio.run(
            copy_files(["src/lib/util.js"], package_tree, out, _FailingOperator("lib"))
        )

        mkdir_failures = [r for r in results if r.failed and r.action == ActionType.MAKE_DIR]
        assert len(mkdir_failures) == 1
