"""Where: src/logkeeper/features/writing/file_writer.py
What: Append formatted entries to the resolved log file, one open/close per entry.
Why: No handle is held between writes so other threads and processes can append.
Trade-offs: - Appends rely on OS append semantics; there is no cross-process lock.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from logkeeper.config.settings import DEFAULT_MAX_ROLLED_LOG_FILES
from logkeeper.core.filesystem import ensure_parent_directory
from logkeeper.domain.entry import LogEntry
from logkeeper.domain.formatting import DEFAULT_TIMESTAMP_MODE, TimestampMode, format_entry
from logkeeper.features.paths.resolver import LogFileTarget

from .rolling import roll_log_files


class FileLogWriter:
    """Synchronous writer; ``OSError`` propagates to the caller."""

    def __init__(
        self,
        target: LogFileTarget,
        *,
        timestamp_mode: TimestampMode = DEFAULT_TIMESTAMP_MODE,
        use_local_time: bool = True,
        max_rolled_log_files: int = DEFAULT_MAX_ROLLED_LOG_FILES,
    ) -> None:
        self.target: LogFileTarget = target
        self.timestamp_mode: TimestampMode = timestamp_mode
        self.use_local_time: bool = use_local_time
        self.max_rolled_log_files: int = max_rolled_log_files

    def write(self, entry: LogEntry) -> None:
        """Append ``entry`` to the file for its local date."""

        day = entry.local_date
        path = self.target.path_for(day)
        _ = ensure_parent_directory(path)
        if self.target.consume_roll_request():
            self._roll(path, day)

        line = format_entry(entry, self.use_local_time, self.timestamp_mode)
        with open(path, "a", encoding="utf-8") as handle:
            _ = handle.write(line + "\n")

    def _roll(self, path: Path, day: date) -> None:
        _ = roll_log_files(path, day, self.max_rolled_log_files)

    # LogWriter strategy ----------------------------------------------------

    def submit(self, entry: LogEntry) -> None:
        self.write(entry)

    def flush(self, timeout: float | None = None) -> bool:
        del timeout
        return True

    def close(self, timeout: float | None = None) -> None:
        del timeout


__all__ = ["FileLogWriter"]
