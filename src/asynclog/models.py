"""Log record models.

Records are designed to be:
- Immutable once built (only the producing thread ever writes them).
- Fully resolved at the call site (message formatted, caller captured).
- Consumed exactly once by the background worker, then discarded.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


def local_now() -> datetime:
    """Return the current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


class Severity(enum.IntEnum):
    """Ordered log severities (ordering drives gating and crash reporting)."""

    VERBOSE = 2
    DEBUG = 3
    INFO = 4
    WARN = 5
    ERROR = 6
    FATAL = 7

    @property
    def code(self) -> str:
        """Single-character code used in the log file (e.g. ``D`` for DEBUG)."""
        return self.name[0]

    @property
    def stdlib_level(self) -> int:
        """The matching stdlib `logging` level."""
        return _STDLIB_LEVELS[self]


_STDLIB_LEVELS = {
    Severity.VERBOSE: 5,
    Severity.DEBUG: 10,
    Severity.INFO: 20,
    Severity.WARN: 30,
    Severity.ERROR: 40,
    Severity.FATAL: 50,
}


class LogEvent(BaseModel):
    """One log event as captured at the call site."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    severity: Severity

    # Attached failure; its traceback is rendered by the sinks.
    error: BaseException | None = None

    # Already formatted; never re-evaluated on the worker thread.
    message: str

    # Short call-site identifiers (e.g. "OrderBook", "refresh").
    caller_type: str
    caller_method: str

    timestamp: datetime = Field(default_factory=local_now)
