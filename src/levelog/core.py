"""
Logger configuration and construction.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .exceptions import FilenameRequired, FilesystemError
from .options import DEFAULT_OPTIONS, FormatOptions, SeverityLevel
from .prefix import build_prefix
from .sinks import FileSink, MultiSink, StdioSink
from .writer import SeverityWriter

_log = logging.getLogger(__name__)

_SEPARATORS = "/" + os.sep + (os.altsep or "")

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class LoggerConfig:
    """
    File logging configuration, consumed once by ``new_logger``.

    Attributes:
        directory: Directory under the working directory ("" = the working
            directory itself).
        filename: Log file name. Required.
        stdout: Also write every line to the console.
        include: Prefix segments.
        freeze_prefix: Build each level's prefix once at construction
            (timestamp and call site frozen) instead of on every call.
    """

    directory: str = ""
    filename: str = ""
    stdout: bool = False
    include: FormatOptions = FormatOptions(0)
    freeze_prefix: bool = False


class Logger(Mapping[SeverityLevel, SeverityWriter]):
    """Read-only mapping of severity level to its writer.

    Owns the fan-out sink (and the file handle inside it) for its lifetime.
    """

    def __init__(self, writers: Mapping[SeverityLevel, SeverityWriter], sink: MultiSink):
        self._writers = dict(writers)
        self._sink = sink

    def __getitem__(self, level: SeverityLevel | str) -> SeverityWriter:
        try:
            return self._writers[SeverityLevel(level)]
        except ValueError:
            raise KeyError(level) from None

    def __iter__(self) -> Iterator[SeverityLevel]:
        return iter(self._writers)

    def __len__(self) -> int:
        return len(self._writers)

    @property
    def debug(self) -> SeverityWriter:
        return self._writers[SeverityLevel.DEBUG]

    @property
    def info(self) -> SeverityWriter:
        return self._writers[SeverityLevel.INFO]

    @property
    def warn(self) -> SeverityWriter:
        return self._writers[SeverityLevel.WARN]

    @property
    def error(self) -> SeverityWriter:
        return self._writers[SeverityLevel.ERROR]

    @property
    def trace(self) -> SeverityWriter:
        return self._writers[SeverityLevel.TRACE]

    @property
    def sink(self) -> MultiSink:
        return self._sink

    def close(self) -> None:
        """Close the underlying sinks. Never called by levelog itself."""
        self._sink.close()

    def __repr__(self) -> str:
        return f"Logger({self._sink!r})"


def resolve_log_path(directory: str, filename: str, cwd: PathLike | None = None) -> Path:
    """Join working directory, directory and filename.

    Leading separators on ``directory`` and ``filename`` are ignored; ``..``
    components are resolved, so they can still climb out of ``cwd``.
    """
    if cwd is None:
        try:
            cwd = os.getcwd()
        except OSError as exc:
            raise FilesystemError(operation="resolve working directory", path=".", reason=exc) from exc
    joined = os.path.join(os.fspath(cwd), directory.lstrip(_SEPARATORS), filename.lstrip(_SEPARATORS))
    return Path(os.path.normpath(joined))


def new_logger(config: LoggerConfig | None = None, *, cwd: PathLike | None = None) -> Logger:
    """
    Build a Logger with one writer per severity level.

    Args:
        config: File logging configuration. None gives a console-only logger
            with a timestamp, level and short file prefix.
        cwd: Base directory for the log path (default: process working directory).

    Returns:
        The constructed Logger.

    Raises:
        ConfigError: ``config.filename`` is empty.
        FilesystemError: The directory cannot be created or the file cannot be opened.
    """
    if config is None:
        sink = MultiSink(StdioSink())
        writers = {level: SeverityWriter(level, DEFAULT_OPTIONS, sink) for level in SeverityLevel}
        _log.debug("Created console-only logger")
        return Logger(writers, sink)

    if not config.filename:
        raise FilenameRequired()

    path = resolve_log_path(config.directory, config.filename, cwd)
    file_sink = FileSink(path)
    sink = MultiSink(StdioSink(), file_sink) if config.stdout else MultiSink(file_sink)

    writers = {}
    for level in SeverityLevel:
        # Depth 1 is our caller: a frozen file:line points at the new_logger call.
        prefix = build_prefix(config.include, level, 1) if config.freeze_prefix else None
        writers[level] = SeverityWriter(level, config.include, sink, prefix=prefix)

    _log.debug("Created logger for %s (stdout=%s, include=%r)", path, config.stdout, config.include)
    return Logger(writers, sink)
