"""Log file path resolution."""

from __future__ import annotations

from .resolver import LOG_FILE_DATE_FORMAT, LOG_FILE_EXTENSION, LogFileTarget, resolve_log_file_path

__all__ = [
    "LOG_FILE_DATE_FORMAT",
    "LOG_FILE_EXTENSION",
    "LogFileTarget",
    "resolve_log_file_path",
]
