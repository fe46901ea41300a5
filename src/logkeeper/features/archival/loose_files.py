"""Where: src/logkeeper/features/archival/loose_files.py
What: Move dated log files older than a threshold into ``<log_dir>/<year>/``.
Why: Year directories are the unit the bundler compresses.
Assumptions: - Both ``yyyy-MM-dd`` and legacy ``MM-dd-yyyy`` stamps are recognised.
Trade-offs: - Same-named targets are compared by size and SHA-1 before any move.
"""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Final

from logkeeper.core.filesystem import backup_existing_file, ensure_directory, files_are_identical
from logkeeper.features.paths.resolver import LOG_FILE_EXTENSION
from logkeeper.platform.logging import logger


@dataclass(slots=True, frozen=True)
class DatedLogPattern:
    """Regex for the date stamp embedded in a log file name."""

    name: str
    date_regex: str

    def compile(self, extension: str) -> re.Pattern[str]:
        return re.compile(
            rf"^.+_{self.date_regex}{re.escape(extension)}$",
            re.IGNORECASE,
        )


CURRENT_PATTERN: Final[DatedLogPattern] = DatedLogPattern(
    "year-month-day", r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
)
LEGACY_PATTERN: Final[DatedLogPattern] = DatedLogPattern(
    "month-day-year", r"(?P<month>\d{1,2})-(?P<day>\d{1,2})-(?P<year>\d{4})"
)
DATED_LOG_PATTERNS: Final[tuple[DatedLogPattern, ...]] = (LEGACY_PATTERN, CURRENT_PATTERN)


def parse_log_file_date(
    file_name: str,
    patterns: tuple[DatedLogPattern, ...] = DATED_LOG_PATTERNS,
    extension: str = LOG_FILE_EXTENSION,
) -> date | None:
    """Return the date stamped in ``file_name``, or ``None`` if absent or invalid."""

    for pattern in patterns:
        match = pattern.compile(extension).match(file_name)
        if match is None:
            continue
        try:
            return date(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            return None
    return None


def _move_into_year_directory(log_file: Path, target_directory: Path) -> Path | None:
    """Move ``log_file`` into ``target_directory``; ``None`` when it was a duplicate."""

    _ = ensure_directory(target_directory)
    target_file = target_directory / log_file.name

    if target_file.exists():
        if files_are_identical(log_file, target_file):
            logger.debug("Identical old log file already archived; deleting %s", log_file)
            log_file.unlink()
            return None

        logger.debug("Backing up identically named old log file: %s", target_file)
        _ = backup_existing_file(target_file)

    _ = shutil.move(str(log_file), str(target_file))
    return target_file


def relocate_old_log_files(
    log_directory: Path,
    *,
    today: date,
    age_threshold_days: int,
    extension: str = LOG_FILE_EXTENSION,
    patterns: tuple[DatedLogPattern, ...] = DATED_LOG_PATTERNS,
) -> tuple[list[Path], list[str]]:
    """Move dated log files older than ``age_threshold_days`` into year directories.

    Args:
        log_directory: Directory holding the active log files.
        today: Reference date for the age check.
        age_threshold_days: Files this many days old (or younger) stay put.
        extension: Log file extension to match.
        patterns: Date stamp patterns to recognise.

    Returns:
        tuple: Paths of relocated files and warning messages.
    """

    relocated: list[Path] = []
    warnings: list[str] = []

    if not log_directory.is_dir():
        return relocated, warnings

    try:
        candidates = sorted(log_directory.iterdir())
    except OSError as exc:
        warnings.append(f"Error listing log files in {log_directory}: {exc}")
        return relocated, warnings

    for log_file in candidates:
        if not log_file.is_file():
            continue

        log_date = parse_log_file_date(log_file.name, patterns, extension)
        if log_date is None:
            continue
        if (today - log_date).days <= age_threshold_days:
            continue

        target_directory = log_directory / str(log_date.year)
        try:
            moved = _move_into_year_directory(log_file, target_directory)
        except OSError as exc:
            warnings.append(f"Error moving old log file to {target_directory / log_file.name}: {exc}")
            continue

        if moved is not None:
            relocated.append(moved)

    return relocated, warnings


__all__ = [
    "CURRENT_PATTERN",
    "DATED_LOG_PATTERNS",
    "DatedLogPattern",
    "LEGACY_PATTERN",
    "parse_log_file_date",
    "relocate_old_log_files",
]
