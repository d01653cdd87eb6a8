"""Logging - diagnostics for the command-line runner.

Everything below the ``tissuesim`` logger is written to stderr, and
optionally to a file, so stdout carries nothing but statistics lines.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: str | None = None,
) -> None:
    """Route ``tissuesim`` records to stderr and an optional log file.

    Calling this again replaces the handlers installed by the previous
    call.

    Args:
        level: Level number or name, e.g. ``logging.INFO`` or ``"debug"``.
        log_file: Path of a file to mirror the records into, truncated
            on open.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("tissuesim")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging to %s", log_file or "stderr")
