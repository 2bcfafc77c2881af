"""Logging setup for the CLI.

Diagnostics go to stderr through a Rich handler; regular command output
is printed through the console helpers in btrfsctl.utils.formatting.
"""

import logging

from rich.logging import RichHandler

from btrfsctl.utils.formatting import err_console

LOGGER_NAME = "btrfsctl"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; each call replaces the Rich handler so the
    layout follows the latest verbosity.

    Args:
        verbose: Enable debug-level logging.
        quiet: Only show errors. Ignored when verbose is set.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for existing in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(existing)

    handler = RichHandler(
        console=err_console,
        level=level,
        show_path=verbose,
        show_time=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
