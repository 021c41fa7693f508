"""Logging setup for the command line.

Library modules only create loggers; handlers are installed here, once,
when the CLI starts.
"""

import logging

from rich.logging import RichHandler

from pkgprune.utils.formatting import err_console


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route pkgprune log records to stderr through Rich.

    Args:
        verbose: Log everything down to DEBUG.
        quiet: Only log errors. Ignored when ``verbose`` is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger("pkgprune")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
