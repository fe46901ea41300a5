"""Where: src/logkeeper/features/sinks/database.py
What: Post log entries to a database through a ``(level, message) -> bool`` sink.
Why: Some deployments collect warnings and errors centrally besides the local file.
Assumptions: - The sink call is a single parameterised insert; no retries.
Trade-offs: - Entries reuse the queued writer so producers never wait on the database.
"""

from __future__ import annotations

import socket
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol, final

from logkeeper.config.settings import DEFAULT_FLUSH_TIMEOUT_SECONDS
from logkeeper.core.filesystem import ensure_parent_directory
from logkeeper.domain.entry import LogEntry
from logkeeper.domain.formatting import format_exception_detail
from logkeeper.domain.levels import LogLevel, should_emit
from logkeeper.features.writing.queued_writer import QueuedLogWriter
from logkeeper.platform.logging import logger

if TYPE_CHECKING:
    from logkeeper.application.file_logger import FileLogger


class DatabaseSink(Protocol):
    """Remote destination accepting one log message per call."""

    def post_entry(self, log_type: str, message: str, posted_by: str) -> bool:
        """Store a message; return ``False`` when the database rejected it."""
        ...


@final
class SqliteLogSink:
    """``DatabaseSink`` backed by a SQLite table named ``log_entries``."""

    _SCHEMA: Final[str] = """
        CREATE TABLE IF NOT EXISTS log_entries (
            entry_id INTEGER PRIMARY KEY AUTOINCREMENT,
            posted_by TEXT NOT NULL,
            posting_time TEXT NOT NULL,
            type TEXT NOT NULL,
            message TEXT NOT NULL
        )
    """

    def __init__(self, db_path: Path | str) -> None:
        if db_path != ":memory:" and isinstance(db_path, (str, Path)):
            db_path = Path(db_path)
            _ = ensure_parent_directory(db_path)
        self.db_path: Path | str = db_path
        self._lock: Final[threading.Lock] = threading.Lock()
        self.conn: sqlite3.Connection = sqlite3.connect(
            db_path,
            timeout=15.0,
            check_same_thread=False,
        )
        _ = self.conn.execute(self._SCHEMA)
        self.conn.commit()

    def post_entry(self, log_type: str, message: str, posted_by: str) -> bool:
        posting_time = datetime.now(timezone.utc).isoformat(timespec="seconds")
        with self._lock:
            try:
                _ = self.conn.execute(
                    "INSERT INTO log_entries (posted_by, posting_time, type, message) VALUES (?, ?, ?, ?)",
                    (posted_by, posting_time, log_type, message),
                )
                self.conn.commit()
            except sqlite3.Error as exc:
                self.conn.rollback()
                logger.error("Failed to post log entry to %s: %s", self.db_path, exc)
                return False
        return True

    def fetch_entries(self) -> list[tuple[str, str, str]]:
        """Return ``(posted_by, type, message)`` rows in insertion order."""

        with self._lock:
            cursor = self.conn.execute(
                "SELECT posted_by, type, message FROM log_entries ORDER BY entry_id"
            )
            return [(row[0], row[1], row[2]) for row in cursor.fetchall()]

    def close(self) -> None:
        with self._lock:
            self.conn.close()


class DatabasePostError(RuntimeError):
    """Raised inside the writer thread when the sink rejects a message."""


class DatabaseSinkWriter:
    """``EntryWriter`` adapting a ``DatabaseSink``."""

    def __init__(
        self,
        sink: DatabaseSink,
        module_name: str,
        *,
        initial_caps_log_types: bool = True,
    ) -> None:
        self.sink: DatabaseSink = sink
        self.module_name: str = module_name
        self.initial_caps_log_types: bool = initial_caps_log_types

    def write(self, entry: LogEntry) -> None:
        log_type = entry.level.initial_caps if self.initial_caps_log_types else entry.level.name
        message = entry.message
        if entry.exception is not None:
            message = f"{message}; {format_exception_detail(entry.exception)}"
        if not self.sink.post_entry(log_type, message, self.module_name):
            raise DatabasePostError(f"Database sink rejected {log_type} message")


def default_module_name(program: str = "logkeeper") -> str:
    """Return ``<host>:<program>`` as used for the ``posted_by`` column."""

    return f"{socket.gethostname()}:{program}"


class DatabaseLogger:
    """Level-filtered logger posting to a database, optionally echoing to a file."""

    def __init__(
        self,
        sink: DatabaseSink,
        module_name: str | None = None,
        *,
        threshold: LogLevel = LogLevel.INFO,
        file_logger: "FileLogger | None" = None,
        echo_to_file_logger: bool = True,
        initial_caps_log_types: bool = True,
        flush_timeout_seconds: float = DEFAULT_FLUSH_TIMEOUT_SECONDS,
    ) -> None:
        self.threshold: LogLevel = threshold
        self.file_logger: FileLogger | None = file_logger
        self.echo_to_file_logger: bool = echo_to_file_logger
        self._sink_writer: DatabaseSinkWriter = DatabaseSinkWriter(
            sink,
            module_name or default_module_name(),
            initial_caps_log_types=initial_caps_log_types,
        )
        self._writer: QueuedLogWriter = QueuedLogWriter(
            self._sink_writer,
            flush_timeout_seconds=flush_timeout_seconds,
            thread_name="logkeeper-db-writer",
        )

    @property
    def module_name(self) -> str:
        return self._sink_writer.module_name

    @property
    def writer(self) -> QueuedLogWriter:
        return self._writer

    def is_enabled(self, level: LogLevel) -> bool:
        return should_emit(level, self.threshold)

    def log(self, level: LogLevel, message: str, exc: BaseException | None = None) -> bool:
        """Queue ``message`` if it passes the threshold; return whether it was queued."""

        if not self.is_enabled(level):
            return False
        entry = LogEntry.create(level, message, exc)
        self._writer.enqueue(entry)
        if self.echo_to_file_logger and self.file_logger is not None:
            self.file_logger.write_entry(entry)
        return True

    def debug(self, message: str, exc: BaseException | None = None) -> bool:
        return self.log(LogLevel.DEBUG, message, exc)

    def info(self, message: str, exc: BaseException | None = None) -> bool:
        return self.log(LogLevel.INFO, message, exc)

    def warn(self, message: str, exc: BaseException | None = None) -> bool:
        return self.log(LogLevel.WARN, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> bool:
        return self.log(LogLevel.ERROR, message, exc)

    def fatal(self, message: str, exc: BaseException | None = None) -> bool:
        return self.log(LogLevel.FATAL, message, exc)

    def flush(self, timeout: float | None = None) -> bool:
        return self._writer.flush(timeout)

    def close(self, timeout: float | None = None) -> None:
        self._writer.close(timeout)


__all__ = [
    "DatabaseLogger",
    "DatabasePostError",
    "DatabaseSink",
    "DatabaseSinkWriter",
    "SqliteLogSink",
    "default_module_name",
]
