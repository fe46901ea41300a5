"""Summary: Protocols describing the writer strategies.
Why: FileLogger and DatabaseLogger depend on behaviour, not concrete writers.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from logkeeper.domain.entry import LogEntry


@runtime_checkable
class EntryWriter(Protocol):
    """Anything that can persist one entry synchronously."""

    def write(self, entry: LogEntry) -> None:
        """Persist ``entry`` or raise on failure."""
        ...


@runtime_checkable
class LogWriter(Protocol):
    """Writer strategy used by loggers (synchronous or queued)."""

    def submit(self, entry: LogEntry) -> None:
        """Hand ``entry`` to the strategy."""
        ...

    def flush(self, timeout: float | None = None) -> bool:
        """Block until submitted entries are persisted; ``False`` on timeout."""
        ...

    def close(self, timeout: float | None = None) -> None:
        """Release background resources."""
        ...


__all__ = ["EntryWriter", "LogWriter"]
