"""
Log sink abstractions and the fan-out sink.
"""

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from .exceptions import FilesystemError
from .io import LineStream

_log = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for line destinations."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write already-rendered text (newline included)."""
        ...

    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        """Release resources held by the sink."""
        ...


class StdioSink(BaseSink):
    """Console sink.

    Args:
        stream: Output stream. None resolves ``sys.stdout`` at write time so
            redirections made after construction are honoured.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        stream = self._stream if self._stream is not None else sys.stdout
        # A redirected stdout would feed lines back into the writer holding the sink lock.
        while isinstance(stream, LineStream):
            stream = stream.original_stream
        return stream

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"StdioSink({getattr(self.stream, 'name', self.stream)!r})"


class FileSink(BaseSink):
    """Append-only file sink.

    Missing parent directories are created. Existing content is never
    truncated.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._ensure_parent_dir()
        try:
            fd = os.open(self._path, os.O_APPEND | os.O_CREAT | os.O_WRONLY, FILE_MODE)
        except OSError as exc:
            raise FilesystemError(operation="open", path=str(self._path), reason=exc) from exc
        self._file = os.fdopen(fd, "a", encoding="utf-8")

    def _ensure_parent_dir(self) -> None:
        parent = self._path.parent
        try:
            parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(operation="create directory", path=str(parent), reason=exc) from exc

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write(self, text: str) -> None:
        self._file.write(text)

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __repr__(self) -> str:
        return f"FileSink({str(self._path)!r})"


# =============================================================================
# Fan-out
# =============================================================================


class MultiSink:
    """File-like object duplicating every write to all of its sinks.

    A sink that fails is reported on the ``levelog.sinks`` logger and skipped;
    the remaining sinks still receive the text.
    """

    def __init__(self, *sinks: BaseSink):
        self._sinks: tuple[BaseSink, ...] = sinks

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return self._sinks

    def write(self, text: str) -> int:
        for sink in self._sinks:
            try:
                sink.write(text)
            except (OSError, ValueError) as exc:
                _log.warning("Dropped log line for %r: %s", sink, exc)
        return len(text)

    def flush(self) -> None:
        for sink in self._sinks:
            try:
                sink.flush()
            except (OSError, ValueError) as exc:
                _log.warning("Flush failed for %r: %s", sink, exc)

    def close(self) -> None:
        for sink in self._sinks:
            sink.close()

    def __repr__(self) -> str:
        return f"MultiSink({', '.join(repr(s) for s in self._sinks)})"
