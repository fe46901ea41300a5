"""Pure log-entry types: severity, entry, and line formatting."""

from __future__ import annotations

from .entry import ExceptionDetail, LogEntry
from .formatting import TimestampMode, format_entry, format_exception_detail, parse_timestamp
from .levels import LogLevel, should_emit

__all__ = [
    "ExceptionDetail",
    "LogEntry",
    "LogLevel",
    "TimestampMode",
    "format_entry",
    "format_exception_detail",
    "parse_timestamp",
    "should_emit",
]
