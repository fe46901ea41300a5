"""Where: src/logkeeper/features/archival/archiver.py
What: Run one archive pass over a log directory.
Why: Old daily logs end up as one ZIP per year under the archive directory.
Assumptions: - Year directories are named with four or more digits.
Trade-offs: - On-demand only; callers decide how often to run it.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Final

from logkeeper.config.settings import (
    ARCHIVED_LOG_FILES_DIRECTORY_NAME,
    DEFAULT_ARCHIVE_THRESHOLD_DAYS,
    DEFAULT_OLD_LOG_FILE_AGE_DAYS,
    LoggerSettings,
)
from logkeeper.core.filesystem import ensure_directory
from logkeeper.errors import ArchiveError
from logkeeper.features.paths.resolver import LOG_FILE_EXTENSION
from logkeeper.platform.logging import logger

from .bundler import bundle_year_directory, remove_bundled_files
from .loose_files import relocate_old_log_files
from .models import ArchiveJob, ArchiveReport, ArchiveState

_YEAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{4,}$")
ARCHIVE_EXTENSION: Final[str] = ".zip"


def is_year_eligible(year: int, today: date, threshold_days: int) -> bool:
    """Return whether a directory for ``year`` may be bundled on ``today``.

    The current (and any future) year is never eligible. Older years become
    eligible once at least ``threshold_days`` whole days have passed since
    January 1 of the following year.
    """

    if year >= today.year:
        return False
    return (today - date(year + 1, 1, 1)).days >= threshold_days


class LogArchiver:
    """Relocate, bundle, and file away old logs in one directory."""

    def __init__(
        self,
        log_directory: Path,
        *,
        archive_threshold_days: int = DEFAULT_ARCHIVE_THRESHOLD_DAYS,
        archive_directory_name: str = ARCHIVED_LOG_FILES_DIRECTORY_NAME,
        old_log_file_age_days: int = DEFAULT_OLD_LOG_FILE_AGE_DAYS,
        zip_old_log_directories: bool = True,
        log_file_extension: str = LOG_FILE_EXTENSION,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.log_directory: Path = log_directory
        self.archive_threshold_days: int = archive_threshold_days
        self.archive_directory: Path = log_directory / archive_directory_name
        self.old_log_file_age_days: int = old_log_file_age_days
        self.zip_old_log_directories: bool = zip_old_log_directories
        self.log_file_extension: str = log_file_extension
        self._clock: Callable[[], date] = clock

    @classmethod
    def from_settings(
        cls,
        log_directory: Path,
        settings: LoggerSettings,
        *,
        clock: Callable[[], date] = date.today,
    ) -> "LogArchiver":
        return cls(
            log_directory,
            archive_threshold_days=settings.archive_threshold_days,
            archive_directory_name=settings.archive_directory_name,
            old_log_file_age_days=settings.old_log_file_age_days,
            zip_old_log_directories=settings.zip_old_log_directories,
            clock=clock,
        )

    def archive_path_for(self, year: int) -> Path:
        return self.archive_directory / f"{year}{ARCHIVE_EXTENSION}"

    def plan_jobs(self, today: date | None = None) -> list[ArchiveJob]:
        """Create one job per year-named subdirectory, marking ineligible ones skipped."""

        reference = today or self._clock()
        jobs: list[ArchiveJob] = []
        if not self.log_directory.is_dir():
            return jobs

        for sub_dir in sorted(self.log_directory.iterdir()):
            if not sub_dir.is_dir() or not _YEAR_PATTERN.match(sub_dir.name):
                continue
            year = int(sub_dir.name)
            job = ArchiveJob(
                source_directory=sub_dir,
                year=year,
                archive_threshold_days=self.archive_threshold_days,
                target_archive_path=self.archive_path_for(year),
            )
            if not is_year_eligible(year, reference, self.archive_threshold_days):
                job.state = ArchiveState.SKIPPED
            jobs.append(job)
        return jobs

    def run(self) -> ArchiveReport:
        """Execute a full pass and return what happened.

        Never raises for per-file or per-year problems; those are reported in
        the returned ``ArchiveReport`` and logged as warnings.
        """

        report = ArchiveReport()
        today = self._clock()

        if not self.log_directory.is_dir():
            logger.debug("Log directory %s does not exist; nothing to archive", self.log_directory)
            return report

        relocated, warnings = relocate_old_log_files(
            self.log_directory,
            today=today,
            age_threshold_days=self.old_log_file_age_days,
            extension=self.log_file_extension,
        )
        report.relocated_files.extend(relocated)
        report.warnings.extend(warnings)

        if self.zip_old_log_directories:
            self._bundle_year_directories(report, today)
            self._move_stray_archives(report)

        for warning in report.warnings:
            logger.warning(warning)
        return report

    def _bundle_year_directories(self, report: ArchiveReport, today: date) -> None:
        try:
            jobs = self.plan_jobs(today)
        except OSError as exc:
            report.warnings.append(f"Error listing old log directories in {self.log_directory}: {exc}")
            return

        for job in jobs:
            report.jobs.append(job)
            if job.state is ArchiveState.SKIPPED:
                report.skipped_years.append(job.year)
                continue

            loose_archive = self.log_directory / job.target_archive_path.name
            if job.target_archive_path.exists():
                job.state = ArchiveState.SKIPPED
                report.skipped_years.append(job.year)
                report.warnings.append(
                    f"Not compressing old log directory {job.year} since the zip file "
                    f"has already been archived to {job.target_archive_path}"
                )
                continue
            if loose_archive.exists():
                job.state = ArchiveState.SKIPPED
                report.skipped_years.append(job.year)
                report.warnings.append(
                    f"Not compressing old log directory {job.year} since the zip file "
                    f"already exists at {loose_archive}"
                )
                continue

            try:
                has_files = any(path.is_file() for path in job.source_directory.iterdir())
            except OSError as exc:
                reason = f"cannot read {job.source_directory}: {exc}"
                job.error = reason
                report.failed_years[job.year] = reason
                report.warnings.append(f"Error archiving old log directory {job.year}: {reason}")
                continue

            if not has_files:
                job.state = ArchiveState.SKIPPED
                report.skipped_years.append(job.year)
                logger.debug("Old log directory %s has no files to compress", job.source_directory)
                continue

            try:
                _ = bundle_year_directory(job)
            except ArchiveError as exc:
                job.error = exc.reason
                report.failed_years[job.year] = exc.reason
                report.warnings.append(f"Error archiving old log directory {exc}")
                continue

            report.archived_years.append(job.year)
            report.warnings.extend(remove_bundled_files(job))

    def _move_stray_archives(self, report: ArchiveReport) -> None:
        """Move year-named ZIP files sitting in the log directory into the archive directory."""

        try:
            strays = [
                path
                for path in sorted(self.log_directory.iterdir())
                if path.is_file()
                and path.suffix.lower() == ARCHIVE_EXTENSION
                and _YEAR_PATTERN.match(path.stem)
            ]
        except OSError as exc:
            report.warnings.append(f"Error looking for zipped log files in {self.log_directory}: {exc}")
            return
        if not strays:
            return

        try:
            _ = ensure_directory(self.archive_directory)
        except OSError as exc:
            report.warnings.append(
                f"Error moving zipped log files into the archive directory: {exc}"
            )
            return

        for stray in strays:
            target = self.archive_directory / stray.name
            if target.exists():
                report.warnings.append(
                    f"Not archiving zip file {stray.name} since an existing zip file "
                    f"was found in directory {self.archive_directory}"
                )
                continue
            try:
                _ = shutil.move(str(stray), str(target))
            except OSError as exc:
                report.warnings.append(f"Error moving {stray} into {self.archive_directory}: {exc}")
                continue
            report.moved_archives.append(target)


def archive_old_log_files(
    log_directory: Path,
    settings: LoggerSettings | None = None,
    *,
    clock: Callable[[], date] = date.today,
) -> ArchiveReport:
    """Run a single archive pass over ``log_directory``."""

    archiver = LogArchiver.from_settings(log_directory, settings or LoggerSettings(), clock=clock)
    return archiver.run()


__all__ = ["ARCHIVE_EXTENSION", "LogArchiver", "archive_old_log_files", "is_year_eligible"]
