"""Writer strategies: synchronous file writes and a queued background writer."""

from __future__ import annotations

from .file_writer import FileLogWriter
from .ports import EntryWriter, LogWriter
from .queued_writer import QueuedLogWriter
from .rolling import roll_log_files

__all__ = [
    "EntryWriter",
    "FileLogWriter",
    "LogWriter",
    "QueuedLogWriter",
    "roll_log_files",
]
