"""Application services: the file logger and the process-wide facade."""

from __future__ import annotations

from .file_logger import FileLogger
from .log_service import LogService, MessageLoggedCallback, get_log_service, set_log_service

__all__ = [
    "FileLogger",
    "LogService",
    "MessageLoggedCallback",
    "get_log_service",
    "set_log_service",
]
