"""Logging utilities for vlbuild commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "vlbuild"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the vlbuild hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the vlbuild logger with a stderr handler and optional file sink.

    Console output stays off stdout so documents printed there remain parseable.
    Calling this again replaces the handlers installed by a previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    # The file sink always records DEBUG; the console handler filters by verbosity.
    logger_level = logging.DEBUG if log_file is not None else level
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logger_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[vlbuild] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
