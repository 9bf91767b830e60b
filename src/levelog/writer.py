"""
Severity writers.

Each writer is bound to one level and one shared ``MultiSink``. Lines go
through a one-processor structlog pipeline onto a ``structlog.WriteLogger``,
which emits ``line + "\\n"`` as a single write under a lock held per sink,
so lines from concurrent threads never interleave.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NoReturn, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from .options import FormatOptions, SeverityLevel
from .prefix import CALLER_DEPTH, CallSite, build_prefix

if TYPE_CHECKING:
    from .io import LineStream
    from .sinks import MultiSink


def render_line(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Join prefix and message into the final line (newline added by the logger)."""
    return event_dict.get("prefix", "") + str(event_dict.get("event", ""))


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    try:
        # Same convention as logging.LogRecord: a lone mapping feeds %(name)s keys.
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            return fmt % args[0]
        return fmt % args
    except (TypeError, ValueError, KeyError):
        # Log calls never raise; keep the raw format and the arguments.
        return f"{fmt} {args!r}"


class SeverityWriter:
    """Writer bound to a single severity level.

    Args:
        level: Label embedded by the LOG_LEVEL option.
        options: Prefix segments to render.
        sink: Shared fan-out destination.
        prefix: Precomputed prefix. When given it is reused for every line;
            otherwise the prefix is rebuilt per call.
    """

    def __init__(
        self,
        level: SeverityLevel,
        options: FormatOptions,
        sink: MultiSink,
        *,
        prefix: Optional[str] = None,
    ):
        self._level = level
        self._options = options
        self._sink = sink
        self._prefix = prefix
        self._logger = structlog.wrap_logger(
            structlog.WriteLogger(file=sink),  # type: ignore[arg-type]
            processors=[render_line],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @property
    def level(self) -> SeverityLevel:
        return self._level

    @property
    def options(self) -> FormatOptions:
        return self._options

    @property
    def sink(self) -> MultiSink:
        return self._sink

    @property
    def prefix(self) -> Optional[str]:
        """The frozen prefix, or None when it is computed per call."""
        return self._prefix

    def output(self, calldepth: int, message: str, *, caller: Optional[CallSite] = None) -> None:
        """
        Write one line.

        Args:
            calldepth: Frames to skip when locating the call site; 1 reports
                the caller of ``output``.
            message: Line body. One trailing newline is dropped.
            caller: Explicit call site, used instead of the stack walk.
        """
        prefix = self._prefix
        if prefix is None:
            prefix = build_prefix(self._options, self._level, calldepth, caller=caller)
        if message.endswith("\n"):
            message = message[:-1]
        self._logger.msg(message, prefix=prefix)

    def printf(self, fmt: str, *args: Any) -> None:
        self.output(CALLER_DEPTH, _format(fmt, args))

    def println(self, *args: Any) -> None:
        self.output(CALLER_DEPTH, " ".join(str(arg) for arg in args))

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        """printf followed by ``sys.exit(1)``."""
        self.output(CALLER_DEPTH, _format(fmt, args))
        sys.exit(1)

    def fatalln(self, *args: Any) -> NoReturn:
        """println followed by ``sys.exit(1)``."""
        self.output(CALLER_DEPTH, " ".join(str(arg) for arg in args))
        sys.exit(1)

    def stream(self) -> LineStream:
        """Return a file-like object writing each complete line to this level."""
        from .io import LineStream

        return LineStream(self)

    def __repr__(self) -> str:
        return f"SeverityWriter({self._level.label}, {self._sink!r})"
