"""Producer API: per-severity entry points that build and enqueue log events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .callsite import CallSite, capture_call_site
from .formatting import format_message, resolve_message
from .handoff import HandoffQueue
from .models import LogEvent, Severity, local_now

# Frames between `capture_call_site` and the user's code:
# user -> LogEmitter.<severity> -> LogEmitter._log -> capture_call_site.
# Every public entry point must call `_log` directly.
_CALLER_DEPTH = 2


class LogEmitter:
    """Builds log events on the calling thread and hands them to the worker.

    Each entry point accepts:
    - ``info("ready")``: the message as-is.
    - ``info("lost connection", error=exc)``: message plus an attached error.
    - ``info("count=%d", n)``: printf-style formatting. A trailing exception
      argument is attached as the error when the format string does not
      consume it.
    """

    def __init__(
        self,
        *,
        queue: HandoffQueue,
        debug_enabled: Callable[[], bool],
        call_site: Callable[[int], CallSite] = capture_call_site,
    ) -> None:
        """Create an emitter.

        Args:
            queue: Destination for built events.
            debug_enabled: Read on every call; VERBOSE/DEBUG are dropped when False.
            call_site: Resolves the caller for a given stack level.
        """
        self._queue = queue
        self._debug_enabled = debug_enabled
        self._call_site = call_site

    def verbose(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.VERBOSE, msg, args, error, stacklevel)

    def debug(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.DEBUG, msg, args, error, stacklevel)

    def info(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.INFO, msg, args, error, stacklevel)

    def warn(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.WARN, msg, args, error, stacklevel)

    def error(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.ERROR, msg, args, error, stacklevel)

    def fatal(self, msg: str, *args: Any, error: BaseException | None = None, stacklevel: int = 1) -> None:
        self._log(Severity.FATAL, msg, args, error, stacklevel)

    def log(
        self,
        severity: Severity,
        msg: str,
        *args: Any,
        error: BaseException | None = None,
        stacklevel: int = 1,
    ) -> None:
        """Emit at an explicit severity."""
        self._log(severity, msg, args, error, stacklevel)

    def _log(
        self,
        severity: Severity,
        msg: str,
        args: tuple[Any, ...],
        error: BaseException | None,
        stacklevel: int,
    ) -> None:
        if severity <= Severity.DEBUG and not self._debug_enabled():
            return

        site = self._call_site(_CALLER_DEPTH + max(stacklevel, 1) - 1)

        if error is not None:
            # Explicit error: no trailing-exception guessing.
            message = format_message(msg, args) if args else str(msg)
        else:
            message, error = resolve_message(msg, args)

        self._queue.push(
            LogEvent(
                severity=severity,
                error=error,
                message=message,
                caller_type=site.type_name,
                caller_method=site.method_name,
                timestamp=local_now(),
            )
        )
