"""Logging setup for **linkcount**.

One project logger, :data:`logger`, shared by all modules::

    from linkcount.logger import logger
    logger.info("Crawl started")

The CLI calls :func:`init_logging` once. Console output goes to *stderr*,
*stdout* is reserved for the ranking.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "linkcount"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send project logs to stderr and, if *log_file* is given, to a rotating file.

    Calling it again replaces the handlers installed by the previous call.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


__all__ = ["logger", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
