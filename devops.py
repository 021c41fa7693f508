"""Development tasks for pkgprune.

Usage: python devops.py <task>
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys
from collections.abc import Callable


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format app/ and tests/ with Ruff and apply safe fixes."""
    _run(
        [
            ["ruff", "format", "app", "tests", "devops.py"],
            ["ruff", "check", "--fix", "app", "tests", "devops.py"],
        ]
    )


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _run(
        [
            ["ruff", "format", "--check", "app", "tests", "devops.py"],
            ["ruff", "check", "app", "tests", "devops.py"],
        ]
    )


def test() -> None:
    """Run the test suite."""
    _run([[sys.executable, "-m", "pytest", "-q"]])


def clean() -> None:
    """Remove caches and build artifacts."""
    _run(
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["find", ".", "-type", "f", "-name", "*.pyc", "-delete"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", "dist", "build"],
        ]
    )


TASKS: dict[str, Callable[[], None]] = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
