"""Utility modules for pkgprune.

This module exports commonly used utility functions.
"""

from pkgprune.utils.formatting import (
    console,
    create_path_table,
    err_console,
    print_action_line,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pkgprune.utils.log import setup_logging

__all__ = [
    "console",
    "create_path_table",
    "err_console",
    "print_action_line",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
