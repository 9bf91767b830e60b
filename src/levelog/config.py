"""
Environment-driven logger settings.

Opt-in: ``new_logger`` never reads the environment on its own.

Usage:
    from levelog import new_logger
    from levelog.config import LoggerSettings

    log = new_logger(LoggerSettings().to_config())
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core import LoggerConfig
from .options import FormatOptions


class LoggerSettings(BaseSettings):
    """File logging configuration loaded from ``LEVELOG_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEVELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    directory: str = Field(default="", description="Log directory, relative to the working directory")
    filename: str = Field(default="", description="Log file name")
    stdout: bool = Field(default=False, description="Also log to standard output")
    include: str = Field(
        default="",
        description="Comma-separated prefix options (date_time, log_level, short_file_name, long_file_name)",
    )
    freeze_prefix: bool = Field(default=False, description="Compute prefixes once at construction")

    @field_validator("include")
    @classmethod
    def _validate_include(cls, value: str) -> str:
        FormatOptions.parse(value)
        return value

    @property
    def format_options(self) -> FormatOptions:
        return FormatOptions.parse(self.include)

    def to_config(self) -> LoggerConfig:
        return LoggerConfig(
            directory=self.directory,
            filename=self.filename,
            stdout=self.stdout,
            include=self.format_options,
            freeze_prefix=self.freeze_prefix,
        )
