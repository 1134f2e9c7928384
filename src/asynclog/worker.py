"""Background worker that drains the hand-off queue into the sinks."""

from __future__ import annotations

import sys
import threading
import traceback
from collections.abc import Sequence

from .formatting import render_body
from .handoff import HandoffQueue
from .models import LogEvent, Severity
from .sinks import LogSink, SystemSink

WORKER_THREAD_NAME = "asynclog-worker"


class LogWorker:
    """Single consumer thread: pops events and drives every sink in order.

    There is no drain on exit. The thread is a daemon, so events still queued
    when the process terminates are never written.
    """

    def __init__(self, *, queue: HandoffQueue, system_sink: SystemSink, sinks: Sequence[LogSink]) -> None:
        """Create a worker.

        Args:
            queue: Source of events.
            system_sink: Sink used for the worker's own diagnostics.
            sinks: Sinks in dispatch order (system sink first).
        """
        self._queue = queue
        self._system_sink = system_sink
        self._sinks = tuple(sinks)
        self._thread: threading.Thread | None = None
        self._interrupted = threading.Event()

    @property
    def sinks(self) -> tuple[LogSink, ...]:
        return self._sinks

    @property
    def started(self) -> bool:
        return self._thread is not None

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread if it hasn't been started yet."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name=WORKER_THREAD_NAME, daemon=True)
        self._thread.start()

    def interrupt(self) -> None:
        """Ask the worker to stop once it reaches this point in the queue."""
        self._interrupted.set()
        self._queue.push(None)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the thread to terminate (only meaningful after interrupt)."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        """Loop: wait for an event, dispatch it, repeat until interrupted."""
        while True:
            event = self._queue.pop_blocking()
            try:
                if event is None:
                    if self._interrupted.is_set():
                        self._system_sink.facility.println(Severity.DEBUG, "Logger", "interrupted")
                        return
                    continue
                self.dispatch(event)
            finally:
                self._queue.task_done()

    def dispatch(self, event: LogEvent) -> None:
        """Hand one event to every sink; a failing sink does not stop the others."""
        for sink in self._sinks:
            try:
                sink.write(event)
            except Exception as exc:  # noqa: BLE001 - logging must not kill the worker
                self._report_sink_failure(sink, exc)

    def _report_sink_failure(self, sink: LogSink, exc: Exception) -> None:
        body = render_body("dispatch", f"{type(sink).__name__} failed", exc)
        try:
            self._system_sink.facility.println(Severity.WARN, "Log", body)
        except Exception:  # noqa: BLE001 - last resort, same as logging.Handler.handleError
            traceback.print_exc(file=sys.stderr)
