"""
Levelog: leveled, prefixed line logging to the console, a file, or both.

Usage:
    from levelog import FormatOptions, LoggerConfig, new_logger

    log = new_logger(LoggerConfig(directory="logs", filename="app.log", stdout=True,
                                  include=FormatOptions.LOG_LEVEL))
    log.info.println("started")          # -> "INFO started"
    log.error.printf("failed: %s", err)
"""

from .core import Logger, LoggerConfig, new_logger
from .exceptions import ConfigError, FilesystemError, LevelogError
from .options import FormatOptions, SeverityLevel
from .prefix import CallSite, build_prefix
from .sinks import BaseSink, FileSink, MultiSink, StdioSink
from .writer import SeverityWriter

__version__ = "0.1.0"

__all__ = [
    "new_logger",
    "Logger",
    "LoggerConfig",
    "SeverityWriter",
    "FormatOptions",
    "SeverityLevel",
    "CallSite",
    "build_prefix",
    "BaseSink",
    "StdioSink",
    "FileSink",
    "MultiSink",
    "LevelogError",
    "ConfigError",
    "FilesystemError",
]
