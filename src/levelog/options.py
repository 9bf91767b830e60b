"""
Format options and severity levels.
"""

from __future__ import annotations

from enum import Enum, IntFlag

from .exceptions import UnknownFormatOption


class FormatOptions(IntFlag):
    """Bitmask selecting which segments make up a line prefix.

    Segments always appear in the order timestamp, level, file:line. When both
    file flags are set the short (basename) form wins.
    """

    DATE_TIME = 1
    LOG_LEVEL = 2
    SHORT_FILE_NAME = 4
    LONG_FILE_NAME = 8

    @classmethod
    def parse(cls, names: str) -> "FormatOptions":
        """Build options from a comma-separated list of flag names.

        Matching ignores case, underscores and dashes, so ``datetime``,
        ``date_time`` and ``DateTime`` all select ``DATE_TIME``.
        """
        lookup = {member.name.replace("_", ""): member for member in cls}
        options = cls(0)
        for raw in names.split(","):
            name = raw.strip()
            if not name:
                continue
            key = name.upper().replace("_", "").replace("-", "")
            if key not in lookup:
                raise UnknownFormatOption(name=name, known=[m.name for m in cls])
            options |= lookup[key]
        return options

    @property
    def wants_file(self) -> bool:
        return bool(self & (FormatOptions.SHORT_FILE_NAME | FormatOptions.LONG_FILE_NAME))


# Prefix used when no config is supplied at all.
DEFAULT_OPTIONS = FormatOptions.DATE_TIME | FormatOptions.LOG_LEVEL | FormatOptions.SHORT_FILE_NAME


class SeverityLevel(str, Enum):
    """Severity labels. Levels carry no ordering; every level always emits."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    TRACE = "TRACE"

    @property
    def label(self) -> str:
        return self.value
