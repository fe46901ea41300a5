"""Command execution package for CLI."""

from logkeeper.ui.cli.commands.archive import ArchiveCommand
from logkeeper.ui.cli.commands.write import WriteCommand

__all__ = ["ArchiveCommand", "WriteCommand"]
