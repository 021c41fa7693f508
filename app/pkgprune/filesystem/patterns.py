"""Pattern file loading.

A patterns file lists one glob per line. Lines are trimmed and blank
lines dropped; there is no comment syntax.
"""

import asyncio
import logging
from pathlib import Path

from pkgprune.errors import NotFoundError, ReadError

logger = logging.getLogger(__name__)


def parse_patterns(content: str) -> list[str]:
    """Split patterns file content into an ordered list of patterns.

    Args:
        content: Raw text of the patterns file.

    Returns:
        Trimmed, non-empty lines in file order.
    """
    return [line.strip() for line in content.split("\n") if line.strip()]


def ensure_patterns_file(path: Path) -> Path:
    """Check that the patterns file exists.

    Args:
        path: Path to the patterns file.

    Returns:
        The same path, for chaining.

    Raises:
        NotFoundError: If the path does not exist or is not a file.
    """
    if not path.is_file():
        msg = f'File with patterns "{path}" does not exist'
        raise NotFoundError(msg)
    return path


async def load_patterns(path: Path) -> list[str]:
    """Read and parse a patterns file.

    Args:
        path: Path to the UTF-8 patterns file.

    Returns:
        Ordered list of patterns. Empty if the file only holds blank lines.

    Raises:
        NotFoundError: If the file does not exist.
        ReadError: If the file cannot be read or decoded.
    """
    ensure_patterns_file(path)

    try:
        content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except FileNotFoundError as e:
        msg = f'File with patterns "{path}" does not exist'
        raise NotFoundError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read patterns from {path}: {e}"
        raise ReadError(msg) from e

    patterns = parse_patterns(content)
    if not patterns:
        logger.warning("No patterns in %s, every file is eligible for deletion", path)
    else:
        logger.debug("Loaded %d pattern(s) from %s", len(patterns), path)
    return patterns
