"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from logkeeper.domain.levels import LogLevel


@final
@dataclass(slots=True)
class ArchiveArgs:
    """Command line arguments for the ``archive`` subcommand."""

    command: Literal["archive"]
    log_dir: Path
    threshold_days: int | None
    zip_old_log_directories: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class WriteArgs:
    """Command line arguments for the ``write`` subcommand."""

    command: Literal["write"]
    message: str
    level: LogLevel
    base_name: str
    directory: Path | None
    append_date: bool
    verbose: bool
    quiet: bool


CLIArgs = ArchiveArgs | WriteArgs

__all__ = ["ArchiveArgs", "CLIArgs", "WriteArgs"]
