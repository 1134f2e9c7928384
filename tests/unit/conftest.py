from __future__ import annotations

import threading
from collections.abc import Callable, Iterator

import pytest

from asynclog.context import LoggingContext
from asynclog.models import LogEvent, Severity


class RecordingPlatformLog:
    """Platform facility that remembers every line it was given."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[tuple[Severity, str, str]] = []

    def println(self, severity: Severity, tag: str, message: str) -> None:
        with self._lock:
            self._lines.append((severity, tag, message))

    @property
    def lines(self) -> list[tuple[Severity, str, str]]:
        with self._lock:
            return list(self._lines)

    def tagged(self, tag: str) -> list[tuple[Severity, str, str]]:
        return [line for line in self.lines if line[1] == tag]


class RaisingSink:
    """Sink whose writes always fail."""

    def write(self, event: LogEvent) -> None:
        raise OSError("disk full")

    def close(self) -> None:
        pass


class CountingReporter:
    """Crash hook stand-in."""

    def __init__(self) -> None:
        self.calls: list[BaseException] = []

    def __call__(self, error: BaseException) -> None:
        self.calls.append(error)


@pytest.fixture
def facility() -> RecordingPlatformLog:
    return RecordingPlatformLog()


@pytest.fixture
def reporter() -> CountingReporter:
    return CountingReporter()


@pytest.fixture
def raising_sink() -> RaisingSink:
    return RaisingSink()


@pytest.fixture
def make_context(facility: RecordingPlatformLog) -> Iterator[Callable[[], LoggingContext]]:
    """Build isolated contexts; their workers are stopped after the test."""
    contexts: list[LoggingContext] = []

    def _make() -> LoggingContext:
        ctx = LoggingContext(facility=facility)
        contexts.append(ctx)
        return ctx

    yield _make

    for ctx in contexts:
        ctx.interrupt()
        if ctx.worker is not None:
            ctx.worker.join(timeout=5.0)
        for sink in ctx.sinks:
            sink.close()
