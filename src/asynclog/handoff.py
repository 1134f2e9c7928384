"""Thread-safe hand-off queue between log producers and the worker."""

from __future__ import annotations

import queue

from .models import LogEvent


class HandoffQueue:
    """Unbounded FIFO of log events (many producers -> one worker).

    `push` never blocks on capacity; the only producer wait is the queue's
    internal mutex, held just long enough to append and notify.
    """

    def __init__(self) -> None:
        # maxsize=0: unbounded. Growth while the worker stalls is not limited.
        self._queue: queue.Queue[LogEvent | None] = queue.Queue()

    def push(self, event: LogEvent | None) -> None:
        """Append an event (None is the worker's wake-up marker)."""
        self._queue.put_nowait(event)

    def pop_blocking(self) -> LogEvent | None:
        """Remove and return the oldest entry, waiting while the queue is empty."""
        return self._queue.get()

    def task_done(self) -> None:
        """Mark the most recently popped entry as fully dispatched."""
        self._queue.task_done()

    def join(self) -> None:
        """Wait until every entry pushed so far has been dispatched."""
        self._queue.join()

    def __len__(self) -> int:
        return self._queue.qsize()
