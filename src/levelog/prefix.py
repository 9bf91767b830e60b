"""
Prefix construction.

A prefix is the literal text placed before every message. It is assembled
from the enabled ``FormatOptions`` segments, each followed by one space:

    2024-05-01 12:00:00 INFO main.py:42 <message>
"""

from __future__ import annotations

import inspect
import os
from datetime import datetime
from types import FrameType
from typing import NamedTuple, Optional

from .options import FormatOptions, SeverityLevel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Frames between a severity writer's public method and the user's call site:
# build_prefix <- SeverityWriter.output <- SeverityWriter.printf <- caller.
CALLER_DEPTH = 2


class CallSite(NamedTuple):
    """A resolved source location."""

    filename: str
    lineno: int


def resolve_caller(frame: Optional[FrameType], caller_depth: int) -> Optional[CallSite]:
    """Walk ``caller_depth`` frames up from ``frame`` and return its location.

    Returns None when the stack is not deep enough.
    """
    for _ in range(caller_depth):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return None
    return CallSite(frame.f_code.co_filename, frame.f_lineno)


def build_prefix(
    options: FormatOptions,
    level: SeverityLevel,
    caller_depth: int = CALLER_DEPTH,
    *,
    caller: Optional[CallSite] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the prefix for one log line.

    Args:
        options: Segments to include.
        level: Severity whose label is embedded.
        caller_depth: Frames to skip above the function calling build_prefix
            (0 reports that function itself).
        caller: Explicit call site; skips the stack walk when given.
        now: Timestamp to render instead of the current local time.

    Returns:
        The prefix, or an empty string when no option is set.
    """
    prefix = ""

    if options & FormatOptions.DATE_TIME:
        prefix += (now or datetime.now()).strftime(TIMESTAMP_FORMAT) + " "

    if options & FormatOptions.LOG_LEVEL:
        prefix += level.label + " "

    if options.wants_file:
        if caller is None:
            current = inspect.currentframe()
            if current is not None:
                caller = resolve_caller(current.f_back, caller_depth)
        # Best effort: no recoverable call site means no file segment.
        if caller is not None:
            filename = caller.filename
            if options & FormatOptions.SHORT_FILE_NAME:
                filename = os.path.basename(filename)
            prefix += f"{filename}:{caller.lineno} "

    return prefix
