"""src/logkeeper/ui/cli/commands/archive.py
What: Run one archiver pass over a log directory and show the outcome.
Why: Lets operators archive without embedding the library in a host process.
"""

from __future__ import annotations

from dataclasses import replace
from typing import final

from logkeeper.config.settings import LoggerSettings, load_settings
from logkeeper.features.archival import ArchiveReport, LogArchiver
from logkeeper.ui.cli.args.options import ArchiveArgs
from logkeeper.ui.cli.display import ArchiveSummaryDisplay


@final
class ArchiveCommand:
    """Execute the ``archive`` subcommand."""

    def __init__(self, args: ArchiveArgs, settings: LoggerSettings | None = None) -> None:
        self.args: ArchiveArgs = args
        base = settings or load_settings()
        overrides: dict[str, object] = {
            "zip_old_log_directories": args.zip_old_log_directories,
        }
        if args.threshold_days is not None:
            overrides["archive_threshold_days"] = args.threshold_days
        self.settings: LoggerSettings = replace(base, **overrides)
        self.display: ArchiveSummaryDisplay = ArchiveSummaryDisplay()

    def execute(self) -> ArchiveReport:
        archiver = LogArchiver.from_settings(self.args.log_dir, self.settings)
        report = archiver.run()
        self.display.show_report(report, self.args.log_dir, quiet=self.args.quiet)
        return report


__all__ = ["ArchiveCommand"]
