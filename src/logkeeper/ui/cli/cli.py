"""Command line interface for logkeeper."""

import sys
from typing import final

from logkeeper.ui.cli.args import ArgumentParser
from logkeeper.ui.cli.args.options import ArchiveArgs, CLIArgs
from logkeeper.ui.cli.commands import ArchiveCommand, WriteCommand
from logkeeper.platform.logging import logger


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ArchiveArgs):
                report = ArchiveCommand(args).execute()
                if not report.success:
                    sys.exit(1)
                return

            _ = WriteCommand(args).execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures call ``sys.exit``
        directly, so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
