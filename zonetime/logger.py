"""Logging setup for the zonetime and timeline packages.

Library modules only call ``logger`` from loguru; entry points (the CLI and
the REST service) call :func:`configure_logging` once at startup.
"""
from __future__ import annotations

import os
import sys
import typing as t

from loguru import logger

LOG_LEVEL = os.getenv("PZB_LOG_LEVEL", "INFO")
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def configure_logging(level: t.Optional[str] = None, sink: t.Any = None) -> None:
    """Replace loguru's default handler with a single formatted one.

    :param level: Log level name, defaults to ``PZB_LOG_LEVEL`` or INFO.
    :param sink: Any loguru sink, defaults to stderr.
    """
    resolved_level = (level or LOG_LEVEL).upper()

    logger.remove()
    logger.add(
        sink if sink is not None else sys.stderr,
        level=resolved_level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.debug("Logging configured at level {}", resolved_level)
