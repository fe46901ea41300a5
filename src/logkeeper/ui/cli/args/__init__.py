"""Command line argument handling package."""

from logkeeper.ui.cli.args.parser import ArgumentParser
from logkeeper.ui.cli.args.options import ArchiveArgs, CLIArgs, WriteArgs

__all__ = ["ArchiveArgs", "ArgumentParser", "CLIArgs", "WriteArgs"]
