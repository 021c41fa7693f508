"""Exception hierarchy for pkgprune.

Fatal errors (ConfigError, ResolutionError) abort a run before or during
keep-set resolution. Per-entry errors (ScanError, StatError, ActionError)
are collected while a phase runs and reported once it has completed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pkgprune.filesystem.models import ActionType


class PruneError(Exception):
    """Base exception for all pkgprune errors."""


class ConfigError(PruneError):
    """Raised when run configuration cannot be loaded."""


class NotFoundError(ConfigError):
    """Raised when the patterns file does not exist."""


class ReadError(ConfigError):
    """Raised when the patterns file exists but cannot be read."""


class SettingsError(ConfigError):
    """Raised when the settings file is malformed or cannot be written."""


class ResolutionError(PruneError):
    """Raised when the glob engine fails to expand the patterns."""


class EntryError(PruneError):
    """Base for errors isolated to a single filesystem path.

    Attributes:
        path: Root-relative path the error applies to.
        operation: Short name of the failed operation.
        cause: Underlying exception, if any.
    """

    operation = "access"

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot {self.operation} {path}{detail}")


class ScanError(EntryError):
    """Raised when a directory cannot be listed during the tree walk."""

    operation = "scan"


class StatError(EntryError):
    """Raised when a kept file cannot be stat'ed by the empty-file sweep."""

    operation = "stat"


class ActionError(EntryError):
    """Raised when a delete, copy or mkdir action fails."""

    def __init__(
        self,
        path: str,
        action: ActionType,
        cause: BaseException | str | None = None,
    ) -> None:
        self.action = action
        self.operation = action.verb
        if isinstance(cause, str):
            cause = OSError(cause)
        super().__init__(path, cause)
