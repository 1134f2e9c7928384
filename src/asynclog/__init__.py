"""In-process asynchronous logging.

Application threads emit leveled records; a single background worker writes
them to the platform log (stdlib `logging`), an optional log file and an
optional crash reporter, so callers never wait on I/O.

Usage:

    import asynclog

    asynclog.init(app_dir, debug=True)
    asynclog.i("started with %d workers", n)
    asynclog.e("sync failed for %s", account, exc)   # exc attached with its traceback

Records still queued when the process exits are not written: there is no
flush on shutdown.
"""

from .config import LoggerConfig, load_config
from .context import LoggingContext, get_context
from .formatting import MissingFormatArgumentError
from .models import LogEvent, Severity
from .sinks import CrashSink, FileSink, InMemoryLogSink, LogSink, PlatformLog, StdlibPlatformLog, SystemSink

_context = get_context()

init = _context.init
init_from_config = _context.init_from_config

# Bound directly to the emitter so the caller's frame sits at the same depth.
verbose = v = _context.emitter.verbose
debug = d = _context.emitter.debug
info = i = _context.emitter.info
warn = w = _context.emitter.warn
error = e = _context.emitter.error
fatal = wtf = _context.emitter.fatal

__all__ = [
    "CrashSink",
    "FileSink",
    "InMemoryLogSink",
    "LogEvent",
    "LogSink",
    "LoggerConfig",
    "LoggingContext",
    "MissingFormatArgumentError",
    "PlatformLog",
    "Severity",
    "StdlibPlatformLog",
    "SystemSink",
    "d",
    "debug",
    "e",
    "error",
    "fatal",
    "get_context",
    "i",
    "info",
    "init",
    "init_from_config",
    "load_config",
    "v",
    "verbose",
    "w",
    "warn",
    "wtf",
]
