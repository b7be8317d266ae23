"""
Logging setup for the CLI.

Library modules only create loggers; the CLI decides where records go.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "exsconvert"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Route exsconvert log records through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING
        console: Console to render on (stderr console when omitted)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
