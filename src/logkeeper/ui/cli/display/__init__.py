"""Display management for CLI interface."""

from logkeeper.ui.cli.display.archive_summary import ArchiveSummaryDisplay

__all__ = ["ArchiveSummaryDisplay"]
