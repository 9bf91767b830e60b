"""
Levelog exception hierarchy.

Every error is raised while a logger is being constructed; individual log
writes never raise. Errors are split into configuration problems (the caller
asked for something invalid) and filesystem problems (the platform refused).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LevelogError(Exception):
    """Base class for all levelog errors.

    Carries a stable machine-readable ``code`` and a ``details`` mapping so
    callers can pick a fallback without parsing messages.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(LevelogError):
    """Invalid logger configuration."""

    pass


class FilenameRequired(ConfigError):
    """Raised when a config is supplied without a log filename."""

    def __init__(self) -> None:
        super().__init__("filename is required", code="FILENAME_REQUIRED")


class UnknownFormatOption(ConfigError, ValueError):
    """Raised when a format option name cannot be resolved."""

    def __init__(self, *, name: str, known: list[str]) -> None:
        message = f"Unknown format option '{name}' (expected one of: {', '.join(known)})"
        super().__init__(
            message,
            code="UNKNOWN_FORMAT_OPTION",
            details={"name": name, "known": known},
        )


# =============================================================================
# Filesystem Errors
# =============================================================================


class FilesystemError(LevelogError):
    """Directory creation, file open or working-directory lookup failed.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, *, operation: str, path: str, reason: OSError) -> None:
        message = f"Cannot {operation} '{path}': {reason.strerror or reason}"
        super().__init__(
            message,
            code="FILESYSTEM_ERROR",
            details={"operation": operation, "path": path, "errno": reason.errno},
        )
        self.operation = operation
        self.path = path
