"""Non-file sinks."""

from __future__ import annotations

from .database import DatabaseLogger, DatabaseSink, DatabaseSinkWriter, SqliteLogSink

__all__ = ["DatabaseLogger", "DatabaseSink", "DatabaseSinkWriter", "SqliteLogSink"]
