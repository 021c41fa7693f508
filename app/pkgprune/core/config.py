"""Per-invocation run configuration."""

from collections.abc import Mapping
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pkgprune.filesystem.models import GlobOptions


def coerce_glob_options(options: GlobOptions | Mapping[str, bool] | None) -> GlobOptions:
    """Build GlobOptions from user input.

    Keys not given keep their defaults, so ``dot`` stays True unless it
    is explicitly switched off.

    Args:
        options: Existing options, a mapping of option names, or None.

    Returns:
        Validated GlobOptions.

    Raises:
        pydantic.ValidationError: If the mapping has unknown keys or bad values.
    """
    if options is None:
        return GlobOptions()
    if isinstance(options, GlobOptions):
        return options
    return GlobOptions.model_validate(dict(options))


class RunConfig(BaseModel):
    """Immutable configuration of a single run.

    Attributes:
        patterns_file: File listing the glob patterns to keep.
        root: Root of the working tree the patterns apply to.
        glob: Options for the glob engine.
        dry_run: Report mutating actions instead of performing them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    patterns_file: Annotated[Path, Field(description="Patterns file path")]
    root: Annotated[Path, Field(description="Working tree root")] = Path(".")
    glob: Annotated[GlobOptions, Field(default_factory=GlobOptions)]
    dry_run: Annotated[bool, Field(description="Only report actions")] = False
