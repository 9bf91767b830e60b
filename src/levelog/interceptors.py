"""
Bridge from the standard library ``logging`` module into a levelog Logger.
"""

from __future__ import annotations

import logging
from typing import Optional

from .core import Logger
from .options import SeverityLevel
from .prefix import CallSite


def severity_for(levelno: int) -> SeverityLevel:
    """Map a stdlib numeric level onto a severity label."""
    if levelno >= logging.ERROR:
        return SeverityLevel.ERROR
    if levelno >= logging.WARNING:
        return SeverityLevel.WARN
    if levelno >= logging.INFO:
        return SeverityLevel.INFO
    if levelno >= logging.DEBUG:
        return SeverityLevel.DEBUG
    return SeverityLevel.TRACE


class SeverityHandler(logging.Handler):
    """
    Route stdlib log records to the matching severity writer.

    The record's own pathname and line number are used as the call site, so
    file:line prefixes point at the ``logging`` call rather than at this
    handler.
    """

    def __init__(self, target: Logger, level: int = logging.NOTSET):
        super().__init__(level)
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        # Our own diagnostics (e.g. a failing sink) must not loop back into the sink.
        if record.name == "levelog" or record.name.startswith("levelog."):
            return
        try:
            msg = self.format(record)
            writer = self.target[severity_for(record.levelno)]
            writer.output(0, msg, caller=CallSite(record.pathname, record.lineno))
        except Exception:
            self.handleError(record)


def redirect_stdlib_logging(
    target: Logger,
    name: Optional[str] = None,
    level: int = logging.DEBUG,
) -> SeverityHandler:
    """
    Replace the handlers of a stdlib logger with a SeverityHandler.

    Args:
        target: Logger receiving the records.
        name: Stdlib logger name (None = root).
        level: Level set on the stdlib logger.

    Returns:
        The installed handler.
    """
    handler = SeverityHandler(target)
    std_logger = logging.getLogger(name)
    std_logger.handlers = []
    std_logger.setLevel(level)
    std_logger.addHandler(handler)
    return handler
