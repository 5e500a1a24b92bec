"""
Logging configuration for a11y-insight.

Library modules only call ``get_logger(__name__)``; handlers are installed
by the CLI through ``setup_logging``. Scan progress goes to stderr so that
json/csv/quiet reports on stdout stay machine-readable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "a11y_insight"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach a rich stderr handler (and optionally a file handler) to the
    a11y_insight logger.

    Calling it again replaces the handlers from the previous call, so one
    process can run several scans with different verbosity.

    Args:
        verbose: Show per-detector DEBUG messages
        quiet: Only report errors; takes precedence over ``verbose``
        log_file: Optional file path that also receives every message

    Returns:
        The configured a11y_insight logger
    """
    verbosity = "quiet" if quiet else "verbose" if verbose else "normal"
    level = VERBOSITY_LEVELS[verbosity]

    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_time=verbosity == "verbose",
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if log_file else level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the a11y_insight namespace (the root one when ``name`` is None)."""
    if name is None:
        return logging.getLogger(_ROOT_LOGGER)

    if not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
