"""Demo entrypoint exercising the logging pipeline.

This module contains a small, end-to-end "smoke test" that:

- Loads configuration from environment.
- Configures stdlib `logging` so the platform sink is visible on stderr.
- Initializes the default logging context.
- Emits records from several threads, including one with an attached error.

It is a manual harness, not production wiring.
"""

from __future__ import annotations

import logging
import os
import threading

import asynclog


class _Producer:
    """Emits a fixed number of records from its own thread."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count

    def run(self) -> None:
        for n in range(self.count):
            asynclog.d("producer %d record %d", self.index, n)
        asynclog.i("producer %d done", self.index)


def _fail() -> None:
    raise RuntimeError("demo failure")


def run_demo(*, producers: int = 4, records: int = 5) -> None:
    """Run the demo with `producers` threads emitting `records` entries each."""
    cfg = asynclog.load_config()
    asynclog.init_from_config(cfg)

    asynclog.i("debug=%s log file=%s", cfg.debug, cfg.log_path)

    threads = [
        threading.Thread(target=_Producer(i, records).run, name=f"producer-{i}")
        for i in range(producers)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    try:
        _fail()
    except RuntimeError as exc:
        asynclog.e("operation failed after %d attempts", 3, exc)

    # Let the worker catch up before the interpreter exits (queued records are otherwise lost).
    asynclog.get_context().queue.join()


def main() -> None:
    """CLI entrypoint for `python -m asynclog.main` / the `asynclog-demo` script."""
    logging.basicConfig(
        level=os.getenv("ASYNCLOG_STDLIB_LEVEL", "DEBUG").upper(),
        format="%(levelname)s/%(name)s: %(message)s",
    )
    run_demo()


if __name__ == "__main__":
    main()
