"""Logging configuration for the application."""

import logging
import sys

from restaurant_backend.core.config import get_settings


def setup_logging(debug: bool | None = None) -> None:
    """Configure application-wide logging.

    Level is DEBUG when debug (or settings.debug when not given) is True,
    otherwise INFO. Output goes to stdout. httpx request lines are kept at
    WARNING unless debugging.
    """
    if debug is None:
        debug = get_settings().debug
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
