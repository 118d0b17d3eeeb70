"""
Logging for box calc.

Every boxcalc module logs through a child of the ``boxcalc`` logger, e.g.
``boxcalc.box_stats.algorithms.precomputed`` warns once per precomputed row
that fails the q1 <= median <= q3 check, and ``boxcalc.box_stats.calc``
reports per-trace box counts and value ranges at DEBUG.

The package only installs a NullHandler (see ``boxcalc/__init__.py``), so a
host application that configures logging sees these records through its own
handlers. Scripts that run box calc on their own call configure_logging():

    from boxcalc.utils.logging import configure_logging
    configure_logging(level="DEBUG")  # or BOXCALC_LOG_LEVEL=DEBUG

Library modules only ever do:

    from boxcalc.utils.logging import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

# Default format for boxcalc logs
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAME = "boxcalc"
LOG_LEVEL_ENV = "BOXCALC_LOG_LEVEL"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Level from the argument, else BOXCALC_LOG_LEVEL, else INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _has_stderr_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
        for h in logger.handlers
    )


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Send boxcalc log records to stderr.

    Only the ``boxcalc`` logger is touched, never root.

    Parameters
    ----------
    level:
        Level name or number. Defaults to the BOXCALC_LOG_LEVEL env var, or
        "INFO"; unknown names fall back to INFO.
    fmt, datefmt:
        Formatter settings; default to DEFAULT_FMT / DEFAULT_DATEFMT.
    force:
        Drop existing handlers first. Without it a second call only updates
        the level and keeps the existing stderr handler.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    elif _has_stderr_handler(logger):
        return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger ``name``, or the package logger ``boxcalc`` when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
