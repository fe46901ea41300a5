"""Data structures describing archive runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ArchiveState(str, Enum):
    """Lifecycle of one year directory during an archive pass."""

    UNARCHIVED = "unarchived"
    BUNDLING = "bundling"
    ARCHIVED = "archived"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in (ArchiveState.ARCHIVED, ArchiveState.SKIPPED)


@dataclass(slots=True)
class ArchiveJob:
    """Bundle one year-named directory into ``target_archive_path``."""

    source_directory: Path
    year: int
    archive_threshold_days: int
    target_archive_path: Path
    state: ArchiveState = ArchiveState.UNARCHIVED
    file_count: int = 0
    error: str | None = None


@dataclass(slots=True)
class ArchiveReport:
    """Outcome of a full archiver pass."""

    relocated_files: list[Path] = field(default_factory=list)
    archived_years: list[int] = field(default_factory=list)
    skipped_years: list[int] = field(default_factory=list)
    moved_archives: list[Path] = field(default_factory=list)
    failed_years: dict[int, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    jobs: list[ArchiveJob] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed_years

    @property
    def did_work(self) -> bool:
        return bool(self.relocated_files or self.archived_years or self.moved_archives)


__all__ = ["ArchiveJob", "ArchiveReport", "ArchiveState"]
