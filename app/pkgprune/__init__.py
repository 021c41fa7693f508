"""pkgprune - strip a file tree down to the files a package manifest names.

Reads glob patterns from a manifest file and either deletes everything
else from the working tree (``clean``) or copies only the matching files
into a fresh output directory (``move``).
"""

__version__ = "0.1.0"

from pkgprune.core.workflow import PackagePruner, RunReport, clean, move  # noqa: E402

__all__ = ["PackagePruner", "RunReport", "__version__", "clean", "move"]
