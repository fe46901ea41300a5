"""Command line interface package."""

from logkeeper.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
