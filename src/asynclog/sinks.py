"""Log sinks (output backends)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from .crash import CrashReporter
from .formatting import render_body
from .models import LogEvent, Severity

RUN_SEPARATOR = "================"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogSink(Protocol):
    """A synchronous sink for log events.

    Sinks are intentionally synchronous and unlocked: only the worker thread
    ever calls them.
    """

    def write(self, event: LogEvent) -> None:
        """Output a single event."""

    def close(self) -> None:
        """Close any underlying resources."""


class PlatformLog(Protocol):
    """The host log facility: accepts a severity, a tag and a text."""

    def println(self, severity: Severity, tag: str, message: str) -> None:
        """Emit one message; the return value is ignored."""


class StdlibPlatformLog:
    """Platform facility backed by the standard `logging` package.

    Each tag maps to the logger of the same name.
    """

    def __init__(self, prefix: str | None = None) -> None:
        """Create the facility; `prefix` nests tag loggers under one parent."""
        self._prefix = prefix
        logging.addLevelName(Severity.VERBOSE.stdlib_level, "VERBOSE")

    def println(self, severity: Severity, tag: str, message: str) -> None:
        name = f"{self._prefix}.{tag}" if self._prefix else tag
        logging.getLogger(name).log(severity.stdlib_level, message)


class SystemSink:
    """Forwards events to the platform log facility, tagged by caller type."""

    def __init__(self, facility: PlatformLog) -> None:
        self.facility = facility

    def write(self, event: LogEvent) -> None:
        body = render_body(event.caller_method, event.message, event.error)
        self.facility.println(event.severity, event.caller_type, body)

    def close(self) -> None:  # noqa: D401 - keep interface consistent
        """No-op."""


def format_timestamp(event: LogEvent) -> str:
    """Format the event time as ``yyyy-MM-dd HH:mm:ss.SSS``."""
    ts = event.timestamp
    return f"{ts.strftime(TIMESTAMP_FORMAT)}.{ts.microsecond // 1000:03d}"


def format_file_line(event: LogEvent) -> str:
    """Build one log-file entry (may span lines when a stack trace is attached)."""
    body = render_body(event.caller_method, event.message, event.error)
    return f"{format_timestamp(event)} {event.severity.code}/{event.caller_type}: {body}"


@dataclass(frozen=True)
class FileSinkOptions:
    path: Path
    encoding: str = "utf-8"


class FileSink:
    """Append-only text file sink.

    Every entry is flushed as soon as it is written so the last lines survive
    a crash.
    """

    def __init__(self, *, path: str | Path, encoding: str = "utf-8") -> None:
        """Open `path` for appending (creating it if needed)."""
        self._opts = FileSinkOptions(path=Path(path), encoding=encoding)
        self._stream: TextIO = self._opts.path.open("a", encoding=self._opts.encoding)

    @classmethod
    def open_existing(cls, path: str | Path) -> FileSink:
        """Open an already existing log file and mark the start of a new run.

        Raises:
            FileNotFoundError: `path` does not exist.
            OSError: the file cannot be opened for appending.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"log file does not exist: {path}")
        sink = cls(path=path)
        sink._write_line(RUN_SEPARATOR)
        return sink

    @property
    def path(self) -> Path:
        return self._opts.path

    def _write_line(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()

    def write(self, event: LogEvent) -> None:
        """Append a single entry and flush it."""
        self._write_line(format_file_line(event))

    def close(self) -> None:
        """Close the underlying file."""
        self._stream.close()


class CrashSink:
    """Reports attached errors of ERROR-and-above events to a crash reporter."""

    def __init__(self, reporter: CrashReporter, *, threshold: Severity = Severity.ERROR) -> None:
        self.reporter = reporter
        self.threshold = threshold

    def write(self, event: LogEvent) -> None:
        if event.severity < self.threshold or event.error is None:
            return
        self.reporter(event.error)

    def close(self) -> None:  # noqa: D401 - keep interface consistent
        """No-op."""


class InMemoryLogSink:
    """In-memory sink for tests and local debugging."""

    def __init__(self) -> None:
        """Create an empty in-memory sink."""
        self._lock = threading.Lock()
        self._events: list[LogEvent] = []

    def write(self, event: LogEvent) -> None:
        """Append an event to the in-memory list (thread-safe)."""
        with self._lock:
            self._events.append(event)

    def close(self) -> None:  # noqa: D401 - keep interface consistent
        """No-op."""

    def snapshot(self) -> Sequence[LogEvent]:
        """Return a point-in-time copy of all recorded events."""
        with self._lock:
            return list(self._events)
