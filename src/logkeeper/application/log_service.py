"""Where: src/logkeeper/application/log_service.py
What: Process-wide logging facade over the file logger and optional database logger.
Why: Callers log with one call and never handle write failures themselves.
Assumptions: - One default service per process, created lazily and flushed at exit.
Trade-offs: - Failures are reported through the diagnostics logger and otherwise dropped.
"""

from __future__ import annotations

import atexit
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Final

from logkeeper.config.settings import LoggerSettings, load_settings
from logkeeper.domain.levels import LogLevel
from logkeeper.features.archival import ArchiveReport
from logkeeper.features.sinks import DatabaseLogger, DatabaseSink
from logkeeper.platform.logging import logger

from .file_logger import FileLogger

MessageLoggedCallback = Callable[[str, LogLevel], None]


class LogService:
    """Facade combining console echo, file logging, and database logging."""

    def __init__(
        self,
        settings: LoggerSettings | None = None,
        *,
        echo_to_console: bool = True,
    ) -> None:
        self.settings: LoggerSettings = settings or LoggerSettings()
        self.echo_to_console: bool = echo_to_console
        self.offline_mode: bool = False
        self._lock: Final[threading.RLock] = threading.RLock()
        self._file_logger: FileLogger = FileLogger(settings=self.settings)
        self._db_logger: DatabaseLogger | None = None
        self._subscribers: list[MessageLoggedCallback] = []

    # Loggers -----------------------------------------------------------------

    @property
    def file_logger(self) -> FileLogger:
        return self._file_logger

    @property
    def db_logger(self) -> DatabaseLogger | None:
        return self._db_logger

    def create_file_logger(
        self,
        base_name: str,
        threshold: LogLevel | int | str = LogLevel.INFO,
    ) -> FileLogger:
        """Point the file logger at a date-stamped ``base_name`` with ``threshold``."""

        with self._lock:
            self.set_threshold(threshold)
            _ = self.change_base_name(base_name, append_date=True)
            return self._file_logger

    def create_db_logger(
        self,
        sink: DatabaseSink,
        module_name: str | None = None,
        threshold: LogLevel | int | str = LogLevel.INFO,
    ) -> DatabaseLogger:
        """Attach a database logger that also echoes to the file logger."""

        with self._lock:
            self.remove_db_logger()
            self._db_logger = DatabaseLogger(
                sink,
                module_name,
                threshold=LogLevel.parse(threshold),
                file_logger=self._file_logger,
                flush_timeout_seconds=self.settings.flush_timeout_seconds,
            )
            return self._db_logger

    def remove_db_logger(self) -> None:
        with self._lock:
            if self._db_logger is None:
                return
            self._db_logger.close()
            self._db_logger = None

    # Configuration -----------------------------------------------------------

    def reconfigure(self, settings: LoggerSettings) -> None:
        """Drain the current file logger and replace it with one built from ``settings``."""

        with self._lock:
            self._file_logger.close()
            self.settings = settings
            self._file_logger = FileLogger(settings=settings)
            if self._db_logger is not None:
                self._db_logger.file_logger = self._file_logger

    def change_base_name(
        self,
        base_name: str,
        append_date: bool = True,
        *,
        directory: Path | None = None,
    ) -> bool:
        """Change the log file base name; pending messages go to the old file."""

        return self._file_logger.change_base_name(base_name, append_date, directory=directory)

    def set_threshold(self, level: LogLevel | int | str) -> None:
        self._file_logger.threshold = level

    @property
    def threshold(self) -> LogLevel:
        return self._file_logger.threshold

    def reset_to_default(self) -> None:
        """Restore the default base name and threshold and forget cached paths."""

        with self._lock:
            self._file_logger.reset_to_default()
            self._file_logger.threshold = self.settings.threshold

    # Subscribers -------------------------------------------------------------

    def add_message_logged_subscriber(self, callback: MessageLoggedCallback) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def remove_message_logged_subscriber(self, callback: MessageLoggedCallback) -> bool:
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                return False
            return True

    def _notify_subscribers(self, message: str, level: LogLevel) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(message, level)
            except Exception as exc:
                logger.error("Message-logged subscriber %r failed: %s", callback, exc)

    # Logging -----------------------------------------------------------------

    def write_log(
        self,
        level: LogLevel,
        message: str,
        exc: BaseException | None = None,
        *,
        to_database: bool = False,
    ) -> bool:
        """Write to the database logger when requested, otherwise to the file logger.

        Returns:
            bool: ``True`` when the message was accepted by a logger.
        """

        message = message or ""
        self._notify_subscribers(message, level)
        try:
            if to_database and self._db_logger is not None and not self.offline_mode:
                return self._db_logger.log(level, message, exc)
            return self._file_logger.log(level, message, exc)
        except Exception as write_error:
            self._report_write_failure(message, write_error)
            return False

    def log_debug(self, message: str, write_to_log: bool = True) -> bool:
        self._echo(LogLevel.DEBUG, message)
        if not write_to_log:
            return False
        return self.write_log(LogLevel.DEBUG, message)

    def log_message(self, message: str, is_error: bool = False, write_to_log: bool = True) -> bool:
        level = LogLevel.ERROR if is_error else LogLevel.INFO
        self._echo(level, message)
        if not write_to_log:
            return False
        return self.write_log(level, message)

    def log_warning(self, message: str, to_database: bool = False) -> bool:
        self._echo(LogLevel.WARN, message)
        return self.write_log(LogLevel.WARN, message, to_database=to_database)

    def log_error(
        self,
        message: str,
        exc: BaseException | None = None,
        to_database: bool = False,
    ) -> bool:
        self._echo(LogLevel.ERROR, message, exc)
        return self.write_log(LogLevel.ERROR, message, exc, to_database=to_database)

    def log_fatal_error(
        self,
        message: str,
        exc: BaseException | None = None,
        to_database: bool = False,
    ) -> bool:
        self._echo(LogLevel.FATAL, message, exc)
        return self.write_log(LogLevel.FATAL, message, exc, to_database=to_database)

    def _echo(self, level: LogLevel, message: str, exc: BaseException | None = None) -> None:
        if not self.echo_to_console:
            return
        if exc is None:
            logger.log(level.to_logging_level(), "%s", message)
        else:
            logger.log(level.to_logging_level(), "%s: %s", message, exc)

    def _report_write_failure(self, message: str, error: Exception) -> None:
        logger.error("Error logging errors; log message: %s; error: %s", message, error)

    # Lifecycle ---------------------------------------------------------------

    def flush_pending_messages(self, timeout: float | None = None) -> bool:
        """Drain queued file and database messages; ``False`` if either timed out."""

        drained = self._file_logger.flush(timeout)
        if self._db_logger is not None:
            drained = self._db_logger.flush(timeout) and drained
        return drained

    def archive_old_log_files_now(self) -> ArchiveReport:
        """Archive old logs next to the current log file; errors are reported, not raised."""

        try:
            report = self._file_logger.archive_old_log_files_now()
        except Exception as exc:
            logger.error("Error archiving old log files: %s", exc)
            report = ArchiveReport()
            report.warnings.append(f"Error archiving old log files: {exc}")
            return report

        for year, reason in report.failed_years.items():
            logger.error("Failed to archive log files for %d: %s", year, reason)
        return report

    def shutdown(self, timeout: float | None = None) -> None:
        with self._lock:
            self.remove_db_logger()
            self._file_logger.close(timeout)

    @property
    def current_log_file_path(self) -> Path:
        return self._file_logger.current_log_file_path

    @property
    def most_recent_error_message(self) -> str:
        return self._file_logger.most_recent_error_message


_default_service: LogService | None = None
_default_lock: Final[threading.Lock] = threading.Lock()


def get_log_service() -> LogService:
    """Return the process-wide service, creating it from the config file on first use."""

    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = LogService(load_settings())
            _ = atexit.register(_shutdown_default_service)
        return _default_service


def set_log_service(service: LogService | None) -> LogService | None:
    """Replace the process-wide service and return the previous one."""

    global _default_service
    with _default_lock:
        previous = _default_service
        _default_service = service
        return previous


def _shutdown_default_service() -> None:
    with _default_lock:
        service = _default_service
    if service is not None:
        service.shutdown()


# Module-level shortcuts for the default service ---------------------------------


def change_base_name(base_name: str, append_date: bool = True) -> bool:
    return get_log_service().change_base_name(base_name, append_date)


def set_threshold(level: LogLevel | int | str) -> None:
    get_log_service().set_threshold(level)


def reset_to_default() -> None:
    get_log_service().reset_to_default()


def log_debug(message: str, write_to_log: bool = True) -> bool:
    return get_log_service().log_debug(message, write_to_log)


def log_message(message: str, is_error: bool = False, write_to_log: bool = True) -> bool:
    return get_log_service().log_message(message, is_error, write_to_log)


def log_warning(message: str) -> bool:
    return get_log_service().log_warning(message)


def log_error(message: str, exc: BaseException | None = None) -> bool:
    return get_log_service().log_error(message, exc)


def log_fatal_error(message: str, exc: BaseException | None = None) -> bool:
    return get_log_service().log_fatal_error(message, exc)


def flush_pending_messages(timeout: float | None = None) -> bool:
    return get_log_service().flush_pending_messages(timeout)


def archive_old_log_files_now() -> ArchiveReport:
    return get_log_service().archive_old_log_files_now()


def current_log_file_path() -> Path:
    return get_log_service().current_log_file_path


def most_recent_error_message() -> str:
    return get_log_service().most_recent_error_message


def shutdown(timeout: float | None = None) -> None:
    """Shut down the default service if one was created."""

    service = set_log_service(None)
    if service is not None:
        service.shutdown(timeout)


__all__ = [
    "LogService",
    "MessageLoggedCallback",
    "archive_old_log_files_now",
    "change_base_name",
    "current_log_file_path",
    "flush_pending_messages",
    "get_log_service",
    "log_debug",
    "log_error",
    "log_fatal_error",
    "log_message",
    "log_warning",
    "most_recent_error_message",
    "reset_to_default",
    "set_log_service",
    "set_threshold",
    "shutdown",
]
