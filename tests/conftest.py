"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeFactory = Callable[[dict[str, str]], Path]


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (and their parent directories) under root.

    Keys ending with "/" create empty directories.
    """
    for rel, content in files.items():
        target = root / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root


def list_tree(root: Path) -> dict[str, bytes | None]:
    """Snapshot a tree as {relative path: content}, None for directories."""
    snapshot: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        snapshot[rel] = None if path.is_dir() else path.read_bytes()
    return snapshot


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Factory building a working tree under tmp_path/tree."""
    root = tmp_path / "tree"
    root.mkdir()

    def _make(files: dict[str, str]) -> Path:
        return write_tree(root, files)

    return _make


@pytest.fixture
def package_tree(make_tree: TreeFactory) -> Path:
    """Small source tree with files inside and outside the manifest."""
    return make_tree(
        {
            "package.json": '{"name": "demo"}\n',
            "README.md": "# demo\n",
            "src/a.js": "module.exports = 1;\n",
            "src/b.txt": "notes\n",
            "src/lib/util.js": "exports.util = true;\n",
            "src/lib/.hidden.js": "secret\n",
            "test/a.test.js": "test();\n",
            "docs/guide/intro.md": "intro\n",
        }
    )


@pytest.fixture
def patterns_file(tmp_path: Path) -> Path:
    """Manifest keeping JavaScript sources and package.json."""
    path = tmp_path / "manifest.txt"
    path.write_text("src/**/*.js\n\npackage.json\n   \n")
    return path


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Function snapshotting a tree for before/after comparisons."""
    return list_tree
