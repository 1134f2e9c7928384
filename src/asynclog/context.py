"""Process-wide logging context and its one-time initialization.

A `LoggingContext` owns the hand-off queue, the emitter, the sink registry and
the worker. It is initialized once and never torn down; a second `init` call
is a silent no-op. One default context exists per process (`get_context()`),
and independent contexts can be built and injected where needed (tests).
"""

from __future__ import annotations

import threading
from pathlib import Path

from .config import LoggerConfig
from .crash import DEFAULT_CRASH_REPORTER, CrashReporter, CrashReporterDiscoveryError, discover_crash_reporter
from .emitter import LogEmitter
from .formatting import render_body
from .handoff import HandoffQueue
from .models import Severity
from .sinks import CrashSink, FileSink, LogSink, PlatformLog, StdlibPlatformLog, SystemSink
from .worker import LogWorker

DEFAULT_FILE_NAME = "log.txt"


class LoggingContext:
    """Wires sinks, starts the worker, and exposes the emitter."""

    def __init__(self, *, facility: PlatformLog | None = None) -> None:
        """Create an uninitialized context.

        Events emitted before `init` are queued and delivered once it runs.
        """
        self._facility: PlatformLog = facility or StdlibPlatformLog()
        self._queue = HandoffQueue()
        self._lock = threading.Lock()
        self._debug = False
        self._worker: LogWorker | None = None
        self.emitter = LogEmitter(queue=self._queue, debug_enabled=self._is_debug)

    def _is_debug(self) -> bool:
        return self._debug

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def started(self) -> bool:
        return self._worker is not None

    @property
    def queue(self) -> HandoffQueue:
        return self._queue

    @property
    def worker(self) -> LogWorker | None:
        return self._worker

    @property
    def sinks(self) -> tuple[LogSink, ...]:
        """The sink registry in dispatch order (empty before init)."""
        if self._worker is None:
            return ()
        return self._worker.sinks

    def init(
        self,
        directory: str | Path | None,
        debug: bool,
        *,
        file_name: str = DEFAULT_FILE_NAME,
        crash_reporter: CrashReporter | None = None,
        crash_reporter_target: str | None = DEFAULT_CRASH_REPORTER,
    ) -> None:
        """Initialize the context once; later calls do nothing.

        Args:
            directory: Where the log file lives. The file is only written when
                `debug` is true and ``directory/file_name`` already exists.
            debug: Enables VERBOSE/DEBUG output and the log file.
            file_name: Log file name inside `directory`.
            crash_reporter: Explicit crash hook; skips discovery when given.
            crash_reporter_target: ``"module:attribute"`` looked up when no
                explicit hook is given; None disables discovery.
        """
        with self._lock:
            if self._worker is not None:
                return

            self._debug = debug

            system_sink = SystemSink(self._facility)
            sinks: list[LogSink] = [system_sink]

            file_sink = self._open_file_sink(directory, file_name) if debug else None
            if file_sink is not None:
                sinks.append(file_sink)

            reporter = crash_reporter
            if reporter is None and crash_reporter_target:
                reporter = self._discover_crash_reporter(crash_reporter_target)
            if reporter is not None:
                sinks.append(CrashSink(reporter))

            worker = LogWorker(queue=self._queue, system_sink=system_sink, sinks=sinks)
            self._worker = worker
            worker.start()

    def init_from_config(self, config: LoggerConfig) -> None:
        """Initialize from a loaded `LoggerConfig`."""
        self.init(
            config.directory,
            config.debug,
            file_name=config.file_name,
            crash_reporter_target=config.crash_reporter,
        )

    def interrupt(self) -> None:
        """Stop the worker after it has dispatched everything queued so far."""
        if self._worker is not None:
            self._worker.interrupt()

    def _warn(self, method: str, message: str, error: BaseException | None = None) -> None:
        self._facility.println(Severity.WARN, "Log", render_body(method, message, error))

    def _open_file_sink(self, directory: str | Path | None, file_name: str) -> FileSink | None:
        if directory is None:
            self._warn("init", "no log directory given; file logging disabled")
            return None
        path = Path(directory) / file_name
        if not path.exists():
            return None
        try:
            return FileSink.open_existing(path)
        except OSError as exc:
            self._warn("init", f"cannot open {path}", exc)
            return None

    def _discover_crash_reporter(self, target: str) -> CrashReporter | None:
        try:
            return discover_crash_reporter(target)
        except (CrashReporterDiscoveryError, ValueError) as exc:
            self._warn("init", "crash reporter unavailable", exc)
            return None


_default_context = LoggingContext()


def get_context() -> LoggingContext:
    """Return the process-wide default context."""
    return _default_context
