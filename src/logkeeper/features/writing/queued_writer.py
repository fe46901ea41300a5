"""Where: src/logkeeper/features/writing/queued_writer.py
What: Multi-producer, single-consumer queue draining entries to a synchronous writer.
Why: Callers must never block on disk I/O; entries stay in submission order.
Assumptions: - Exactly one worker thread consumes the queue.
Trade-offs: - Worker failures are counted and logged, never raised to producers.
"""

from __future__ import annotations

import math
import queue
import threading
from collections.abc import Iterable
from typing import Final

from logkeeper.config.settings import DEFAULT_FLUSH_TIMEOUT_SECONDS
from logkeeper.domain.entry import LogEntry
from logkeeper.platform.logging import logger

from .ports import EntryWriter

_Batch = tuple[LogEntry, ...]


def should_report_failure(consecutive_failures: int) -> bool:
    """Report the first few failures, then progressively fewer of them."""

    if consecutive_failures < 5:
        return True
    divisor = int(math.ceil(math.log10(consecutive_failures)) * 10)
    return consecutive_failures % divisor == 0


class QueuedLogWriter:
    """Queue entries and persist them on a dedicated daemon thread."""

    def __init__(
        self,
        writer: EntryWriter,
        *,
        flush_timeout_seconds: float = DEFAULT_FLUSH_TIMEOUT_SECONDS,
        thread_name: str = "logkeeper-writer",
    ) -> None:
        self._writer: Final[EntryWriter] = writer
        self._flush_timeout: float = flush_timeout_seconds
        self._queue: Final[queue.SimpleQueue[_Batch | None]] = queue.SimpleQueue()
        self._condition: Final[threading.Condition] = threading.Condition()
        self._pending: int = 0
        self._closed: bool = False

        self._failed_writes: int = 0
        self._consecutive_failures: int = 0
        self._last_error: Exception | None = None
        self._flush_timeouts: int = 0

        self._thread: Final[threading.Thread] = threading.Thread(
            target=self._run, name=thread_name, daemon=True
        )
        self._thread.start()

    @property
    def writer(self) -> EntryWriter:
        return self._writer

    def enqueue(self, entry: LogEntry) -> None:
        """Queue one entry; returns immediately."""

        self.enqueue_batch((entry,))

    def enqueue_batch(self, entries: Iterable[LogEntry]) -> None:
        """Queue ``entries`` as one contiguous batch.

        After ``close`` the entries are written synchronously on the calling
        thread instead, so late messages are not lost.
        """

        batch: _Batch = tuple(entries)
        if not batch:
            return

        with self._condition:
            closed = self._closed
            if not closed:
                self._pending += len(batch)
                self._queue.put(batch)

        if closed:
            for entry in batch:
                self._writer.write(entry)

    def submit(self, entry: LogEntry) -> None:
        self.enqueue(entry)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until the queue is drained.

        Args:
            timeout: Seconds to wait; defaults to the configured flush timeout.

        Returns:
            bool: ``True`` when drained, ``False`` when the wait timed out.
        """

        limit = self._flush_timeout if timeout is None else timeout
        if threading.current_thread() is self._thread:
            return self._pending == 0

        with self._condition:
            drained = self._condition.wait_for(lambda: self._pending == 0, timeout=limit)
            if not drained:
                self._flush_timeouts += 1
                pending = self._pending

        if not drained:
            logger.warning(
                "Timed out after %.1f s waiting for %d queued log message(s) to be written",
                limit,
                pending,
            )
        return drained

    def close(self, timeout: float | None = None) -> None:
        """Drain (bounded by ``timeout``) and stop the worker thread."""

        with self._condition:
            if self._closed:
                return
        _ = self.flush(timeout)
        with self._condition:
            self._closed = True
            self._queue.put(None)
        self._thread.join(self._flush_timeout if timeout is None else timeout)

    def _run(self) -> None:
        while True:
            batch = self._queue.get()
            if batch is None:
                return
            for entry in batch:
                try:
                    self._writer.write(entry)
                except Exception as exc:
                    self._record_failure(exc)
                else:
                    self._consecutive_failures = 0
                finally:
                    with self._condition:
                        self._pending -= 1
                        if self._pending == 0:
                            self._condition.notify_all()

    def _record_failure(self, exc: Exception) -> None:
        with self._condition:
            self._failed_writes += 1
            self._consecutive_failures += 1
            self._last_error = exc
            failures = self._consecutive_failures
            pending = self._pending - 1

        if should_report_failure(failures):
            logger.error(
                "Error writing queued log message (%d pending): %s",
                pending,
                exc,
            )

    # Diagnostics -------------------------------------------------------------

    @property
    def pending(self) -> int:
        with self._condition:
            return self._pending

    @property
    def failed_writes(self) -> int:
        return self._failed_writes

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def flush_timeouts(self) -> int:
        return self._flush_timeouts

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()


__all__ = ["QueuedLogWriter", "should_report_failure"]
