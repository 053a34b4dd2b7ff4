"""
Logging setup for the CLI and viewer.

Library modules only create `logging.getLogger(__name__)` loggers and
never configure handlers; the entry point calls setup_logging once.
"""
import logging
import sys
from typing import Iterable, Optional

PACKAGE_LOGGER = "lightning_fx"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _attach(logger: logging.Logger, handlers: Iterable[logging.Handler], level: int) -> None:
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  entry_name: Optional[str] = None) -> None:
    """
    Route package logs to stdout, and to `log_file` when given.

    Args:
        level: Threshold for the package loggers (DEBUG shows spawn/strike events)
        log_file: Optional path; truncated on each run
        entry_name: __name__ of the calling entry module. Under `python -m`
            it is "__main__", outside the package namespace, so it gets
            the same handlers.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    _attach(logging.getLogger(PACKAGE_LOGGER), handlers, level)
    if entry_name and not entry_name.startswith(PACKAGE_LOGGER + "."):
        _attach(logging.getLogger(entry_name), handlers, level)
