"""Where: src/logkeeper/features/paths/resolver.py
What: Compute the active log file path from base name, directory, and date.
Why: Date-stamped names must roll at local midnight without caller intervention.
Assumptions: - A base name's own extension is kept; otherwise ``.txt`` is used.
Trade-offs: - Rollover is observed on the next write, never retroactively.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Final

from logkeeper.config.settings import DEFAULT_BASE_NAME

LOG_FILE_EXTENSION: Final[str] = ".txt"

# yyyy-MM-dd; files written before 2022 used MM-dd-yyyy (still read by the archiver)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d"


def resolve_log_file_path(
    directory: Path | None,
    base_name: str | None,
    append_date: bool,
    current_date: date,
) -> Path:
    """Return the concrete log file path for ``current_date``.

    Empty base names fall back to ``DEFAULT_BASE_NAME``. Absolute base names
    ignore ``directory``.
    """

    name = (base_name or "").strip() or DEFAULT_BASE_NAME
    base = Path(name)
    if not base.is_absolute() and directory is not None:
        base = directory / base

    extension = base.suffix
    if append_date:
        stamp = current_date.strftime(LOG_FILE_DATE_FORMAT)
        if extension:
            return base.with_name(f"{base.stem}_{stamp}{extension}")
        return base.with_name(f"{base.name}_{stamp}{LOG_FILE_EXTENSION}")

    if extension:
        return base
    return base.with_name(base.name + LOG_FILE_EXTENSION)


@dataclass(slots=True, frozen=True)
class TargetSnapshot:
    """Point-in-time view of a ``LogFileTarget`` configuration."""

    base_name: str
    directory: Path | None
    append_date: bool


class LogFileTarget:
    """Thread-safe cache of the resolved log file path.

    The path is resolved lazily for the local date of each entry and cached
    until that date changes or the target is reconfigured.
    """

    def __init__(
        self,
        base_name: str = "",
        *,
        directory: Path | None = None,
        append_date: bool = True,
    ) -> None:
        self._lock: Final[threading.Lock] = threading.Lock()
        self._base_name: str = base_name
        self._directory: Path | None = directory
        self._append_date: bool = append_date
        self._cached_date: date | None = None
        self._cached_path: Path | None = None
        self._needs_roll: bool = not append_date

    def configure(
        self,
        base_name: str,
        *,
        append_date: bool,
        directory: Path | None = None,
    ) -> None:
        """Switch to a new base name and drop the cached path."""

        with self._lock:
            self._base_name = base_name
            self._append_date = append_date
            if directory is not None:
                self._directory = directory
            self._cached_date = None
            self._cached_path = None
            self._needs_roll = not append_date

    def reset(self, *, directory: Path | None = None) -> None:
        """Forget the base name and every cached value."""

        with self._lock:
            self._base_name = ""
            self._append_date = True
            self._directory = directory
            self._cached_date = None
            self._cached_path = None
            self._needs_roll = False

    def path_for(self, day: date) -> Path:
        """Return the path for ``day``, re-resolving when the date changed."""

        with self._lock:
            if self._cached_path is None or self._cached_date != day:
                self._cached_path = resolve_log_file_path(
                    self._directory, self._base_name, self._append_date, day
                )
                self._cached_date = day
            return self._cached_path

    def consume_roll_request(self) -> bool:
        """Return ``True`` once after a fixed-name configuration."""

        with self._lock:
            pending = self._needs_roll
            self._needs_roll = False
            return pending

    @property
    def current_path(self) -> Path:
        """Path used by the most recent write (today's path before any write)."""

        with self._lock:
            if self._cached_path is None:
                self._cached_date = date.today()
                self._cached_path = resolve_log_file_path(
                    self._directory, self._base_name, self._append_date, self._cached_date
                )
            return self._cached_path

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def append_date(self) -> bool:
        return self._append_date

    @property
    def directory(self) -> Path | None:
        return self._directory

    def snapshot(self) -> TargetSnapshot:
        with self._lock:
            return TargetSnapshot(self._base_name, self._directory, self._append_date)


__all__ = [
    "LOG_FILE_DATE_FORMAT",
    "LOG_FILE_EXTENSION",
    "LogFileTarget",
    "TargetSnapshot",
    "resolve_log_file_path",
]
