"""Configuration loading and validation.

This module is responsible for:

- Loading `.env` into the process environment (without overriding existing vars).
- Converting environment variables into a strongly-typed Pydantic model.
- Validating fields and providing actionable error messages.
"""

from __future__ import annotations

import os
from pathlib import Path

import dotenv
from pydantic import BaseModel, Field, field_validator

from .crash import DEFAULT_CRASH_REPORTER, parse_target

_DISABLED = {"", "none", "off", "false", "0"}


def _get_env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    normalized = raw.strip().lower()
    if normalized in {"true", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean (true/false). Got: {raw!r}")


def _get_env_optional(name: str, default: str | None) -> str | None:
    """Read an optional string env var; disabling words map to None."""
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in _DISABLED:
        return None
    return raw.strip()


class LoggerConfig(BaseModel):
    """Configuration for the logging context."""

    directory: Path | None = Field(default=None, description="Directory holding the log file")
    debug: bool = Field(default=False, description="Enable VERBOSE/DEBUG output and the log file")
    file_name: str = Field(default="log.txt", description="Log file name inside `directory`")
    crash_reporter: str | None = Field(
        default=DEFAULT_CRASH_REPORTER,
        description="Optional crash hook as 'module:attribute'",
    )

    @field_validator("file_name")
    def validate_file_name(cls, v: str) -> str:
        """File name must be a bare name, not a path."""
        if not v or Path(v).name != v:
            raise ValueError(f"ASYNCLOG_FILE_NAME must be a bare file name. Got: {v!r}")
        return v

    @field_validator("crash_reporter")
    def validate_crash_reporter(cls, v: str | None) -> str | None:
        """Crash reporter must look like 'module:attribute'."""
        if v is not None:
            parse_target(v)
        return v

    @property
    def log_path(self) -> Path | None:
        """Full path of the log file, if a directory is configured."""
        if self.directory is None:
            return None
        return self.directory / self.file_name


def load_config() -> LoggerConfig:
    """Load logger configuration from environment variables.

    Notes:
    - Calls `dotenv.load_dotenv()` so local `.env` values are visible to the process.
    - Raises `ValueError` with actionable messages for malformed values.
    """
    dotenv.load_dotenv()

    raw_dir = os.getenv("ASYNCLOG_DIR", "").strip()
    return LoggerConfig(
        directory=Path(raw_dir).expanduser() if raw_dir else None,
        debug=_get_env_bool("ASYNCLOG_DEBUG", False),
        file_name=os.getenv("ASYNCLOG_FILE_NAME", "").strip() or "log.txt",
        crash_reporter=_get_env_optional("ASYNCLOG_CRASH_REPORTER", DEFAULT_CRASH_REPORTER),
    )
