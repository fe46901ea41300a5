"""src/logkeeper/ui/cli/display/archive_summary.py
What: Render the outcome of an archiver pass.
Why: Keep console output formatting out of the command logic.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console

from logkeeper.features.archival import ArchiveReport


@final
class ArchiveSummaryDisplay:
    """Handles archive report display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(self, report: ArchiveReport, log_dir: Path, quiet: bool = False) -> None:
        """Display an archive report.

        Args:
            report: Outcome of the archiver pass.
            log_dir: Directory that was archived.
            quiet: Whether to suppress non-error output.
        """
        if not quiet:
            self.console.print(f"\n[bold]Archive Summary:[/bold] {log_dir}")
            self.console.print(f"Log files moved into year folders: {len(report.relocated_files)}")
            archived = ", ".join(str(year) for year in report.archived_years) or "none"
            self.console.print(f"[green]Years archived: {archived}[/green]")
            if report.skipped_years:
                skipped = ", ".join(str(year) for year in report.skipped_years)
                self.console.print(f"Years skipped: {skipped}")
            if report.moved_archives:
                self.console.print(f"Loose archives filed: {len(report.moved_archives)}")
            if not report.did_work:
                self.console.print("Nothing to archive")

        if not report.failed_years:
            return

        self.console.print(f"[red]Failed years: {len(report.failed_years)}[/red]")
        for year, reason in sorted(report.failed_years.items()):
            self.console.print(f"[red]  • {year}: {reason}[/red]")


__all__ = ["ArchiveSummaryDisplay"]
