"""Where: src/logkeeper/application/file_logger.py
What: Level-filtered logger writing date-stamped files through a writer strategy.
Why: One logger class covers both synchronous and queued writes.
Assumptions: - Base-name changes drain the queue before switching paths.
Trade-offs: - A stalled worker bounds the drain by the flush timeout; late entries may
  then land in the new file.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType
from typing import Final

from logkeeper.config.settings import LoggerSettings
from logkeeper.domain.entry import LogEntry
from logkeeper.domain.levels import LogLevel, should_emit
from logkeeper.features.archival import ArchiveReport, LogArchiver
from logkeeper.features.paths.resolver import LogFileTarget
from logkeeper.features.writing import FileLogWriter, LogWriter, QueuedLogWriter
from logkeeper.platform.logging import logger


class FileLogger:
    """Write entries at or above ``threshold`` to the active log file."""

    def __init__(
        self,
        base_name: str | None = None,
        *,
        threshold: LogLevel | int | str | None = None,
        append_date: bool | None = None,
        directory: Path | None = None,
        queued: bool | None = None,
        settings: LoggerSettings | None = None,
    ) -> None:
        """Create a logger.

        Args:
            base_name: Base file name or path; empty uses the default name.
            threshold: Minimum level written; defaults to ``settings.threshold``.
            append_date: Embed today's date in the file name.
            directory: Directory for relative base names.
            queued: Use the background queue instead of writing inline.
            settings: Defaults for every argument left as ``None``.
        """

        self.settings: LoggerSettings = settings or LoggerSettings()
        self._default_directory: Path = directory or self.settings.resolved_log_directory
        self._lock: Final[threading.RLock] = threading.RLock()

        self.target: LogFileTarget = LogFileTarget(
            base_name if base_name is not None else self.settings.base_name,
            directory=self._default_directory,
            append_date=self.settings.append_date if append_date is None else append_date,
        )
        self._file_writer: FileLogWriter = FileLogWriter(
            self.target,
            timestamp_mode=self.settings.timestamp_mode,
            use_local_time=self.settings.use_local_time,
            max_rolled_log_files=self.settings.max_rolled_log_files,
        )
        use_queue = self.settings.queued if queued is None else queued
        self._writer: LogWriter = (
            QueuedLogWriter(
                self._file_writer,
                flush_timeout_seconds=self.settings.flush_timeout_seconds,
            )
            if use_queue
            else self._file_writer
        )
        self._threshold: LogLevel = LogLevel.parse(
            self.settings.threshold if threshold is None else threshold
        )
        self._most_recent_error_message: str = ""

    # Threshold -----------------------------------------------------------

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @threshold.setter
    def threshold(self, value: LogLevel | int | str) -> None:
        self._threshold = LogLevel.parse(value)

    def is_enabled(self, level: LogLevel) -> bool:
        return should_emit(level, self._threshold)

    # Writing -------------------------------------------------------------

    def log(self, level: LogLevel, message: str, exc: BaseException | None = None) -> bool:
        """Write ``message`` when ``level`` passes the threshold.

        Returns:
            bool: ``True`` when the entry was handed to the writer.

        Raises:
            OSError: From the synchronous writer when the file cannot be written.
        """

        if not self.is_enabled(level):
            return False
        self.write_entry(LogEntry.create(level, message, exc))
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

    def write_entry(self, entry: LogEntry) -> None:
        """Hand ``entry`` to the writer regardless of the threshold."""

        if entry.is_error:
            self._most_recent_error_message = entry.message
        self._writer.submit(entry)

    def write_batch(self, entries: Iterable[LogEntry]) -> int:
        """Write the entries passing the threshold as one contiguous batch."""

        accepted = [entry for entry in entries if self.is_enabled(entry.level)]
        for entry in accepted:
            if entry.is_error:
                self._most_recent_error_message = entry.message
        if isinstance(self._writer, QueuedLogWriter):
            self._writer.enqueue_batch(accepted)
        else:
            for entry in accepted:
                self._writer.submit(entry)
        return len(accepted)

    # Configuration -----------------------------------------------------------

    def change_base_name(
        self,
        base_name: str,
        append_date: bool | None = None,
        *,
        directory: Path | None = None,
    ) -> bool:
        """Switch to a new base name after draining queued entries.

        An empty ``base_name`` is ignored when a base name is already set.

        Returns:
            bool: ``True`` when the target changed.
        """

        with self._lock:
            if not base_name.strip() and self.target.base_name.strip():
                logger.debug("Leaving base log file name unchanged since new base name is empty")
                return False

            if not self.flush():
                logger.warning(
                    "Queued messages were still pending while changing the log file base name"
                )
            self.target.configure(
                base_name,
                append_date=self.target.append_date if append_date is None else append_date,
                directory=directory,
            )
            logger.debug("Log file base name changed to %s", base_name or "<default>")
            return True

    def reset_to_default(self) -> None:
        """Drop the base name and cached path/date so the next write re-resolves."""

        with self._lock:
            _ = self.flush()
            self.target.reset(directory=self._default_directory)
            self._most_recent_error_message = ""

    # Lifecycle ---------------------------------------------------------------

    def flush(self, timeout: float | None = None) -> bool:
        """Block until queued entries are written; ``False`` on timeout."""

        return self._writer.flush(timeout)

    def close(self, timeout: float | None = None) -> None:
        self._writer.close(timeout)

    def __enter__(self) -> "FileLogger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # Inspection --------------------------------------------------------------

    @property
    def current_log_file_path(self) -> Path:
        return self.target.current_path

    @property
    def most_recent_error_message(self) -> str:
        return self._most_recent_error_message

    @property
    def writer(self) -> LogWriter:
        return self._writer

    @property
    def queued(self) -> bool:
        return isinstance(self._writer, QueuedLogWriter)

    @property
    def failed_writes(self) -> int:
        return self._writer.failed_writes if isinstance(self._writer, QueuedLogWriter) else 0

    @property
    def last_error(self) -> Exception | None:
        return self._writer.last_error if isinstance(self._writer, QueuedLogWriter) else None

    # Archival ----------------------------------------------------------------

    def archive_old_log_files_now(self) -> ArchiveReport:
        """Archive old logs in the directory of the current log file."""

        log_directory = self.current_log_file_path.parent
        return LogArchiver.from_settings(log_directory, self.settings).run()


__all__ = ["FileLogger"]
