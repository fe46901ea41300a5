"""Summary: Old-log archival exports.
Why: Offer one import path for relocating, bundling, and reporting.
"""

from __future__ import annotations

from .archiver import LogArchiver, archive_old_log_files, is_year_eligible
from .bundler import bundle_year_directory
from .loose_files import DATED_LOG_PATTERNS, DatedLogPattern, relocate_old_log_files
from .models import ArchiveJob, ArchiveReport, ArchiveState

__all__ = [
    "ArchiveJob",
    "ArchiveReport",
    "ArchiveState",
    "DATED_LOG_PATTERNS",
    "DatedLogPattern",
    "LogArchiver",
    "archive_old_log_files",
    "bundle_year_directory",
    "is_year_eligible",
    "relocate_old_log_files",
]
