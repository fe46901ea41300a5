"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from logkeeper.domain.levels import LogLevel
from logkeeper.platform.logging import logger, setup_logger
from logkeeper.ui.cli.args.options import ArchiveArgs, CLIArgs, WriteArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="logkeeper - write date-stamped log files and archive old ones.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        archive_parser = subparsers.add_parser(
            "archive",
            help="Move old log files into year folders and zip old years",
        )
        _ = archive_parser.add_argument(
            "log_dir",
            type=str,
            help="Directory holding the log files",
            metavar="LOG_DIR",
        )
        _ = archive_parser.add_argument(
            "--threshold-days",
            type=int,
            metavar="N",
            help="Days after the end of a year before it is zipped (default from config)",
        )
        _ = archive_parser.add_argument(
            "--no-zip",
            action="store_true",
            help="Only relocate loose log files; do not create year archives",
        )
        ArgumentParser._add_verbosity_flags(archive_parser)

        write_parser = subparsers.add_parser(
            "write",
            help="Append one message to the log file",
        )
        _ = write_parser.add_argument(
            "message",
            type=str,
            help="Message text",
            metavar="MESSAGE",
        )
        _ = write_parser.add_argument(
            "--level",
            type=str,
            default=LogLevel.INFO.name,
            metavar="LEVEL",
            help="Message level (debug, info, warn, error, fatal)",
        )
        _ = write_parser.add_argument(
            "--base-name",
            type=str,
            default="",
            metavar="NAME",
            help="Base log file name (default from config)",
        )
        _ = write_parser.add_argument(
            "--directory",
            type=str,
            metavar="DIR",
            help="Directory for the log file (default from config)",
        )
        _ = write_parser.add_argument(
            "--fixed-name",
            action="store_true",
            help="Do not append the date to the file name",
        )
        ArgumentParser._add_verbosity_flags(write_parser)

        return parser

    @staticmethod
    def _add_verbosity_flags(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug diagnostics",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the log directory is missing or the level is invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO
        _ = setup_logger(console_level=log_level)

        command: str = parsed_args.command

        if command == "archive":
            return ArgumentParser._process_archive(parsed_args)

        if command == "write":
            return ArgumentParser._process_write(parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_archive(parsed_args: argparse.Namespace) -> ArchiveArgs:
        log_dir = Path(parsed_args.log_dir)
        if not log_dir.is_dir():
            logger.error("Log directory does not exist: %s", log_dir)
            sys.exit(1)

        threshold_days: int | None = parsed_args.threshold_days
        if threshold_days is not None and threshold_days < 0:
            logger.error("--threshold-days cannot be negative")
            sys.exit(2)

        return ArchiveArgs(
            command="archive",
            log_dir=log_dir,
            threshold_days=threshold_days,
            zip_old_log_directories=not parsed_args.no_zip,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _process_write(parsed_args: argparse.Namespace) -> WriteArgs:
        try:
            level = LogLevel.parse(parsed_args.level)
        except ValueError as exc:
            logger.error("%s", exc)
            sys.exit(2)

        return WriteArgs(
            command="write",
            message=parsed_args.message,
            level=level,
            base_name=parsed_args.base_name,
            directory=Path(parsed_args.directory) if parsed_args.directory else None,
            append_date=not parsed_args.fixed_name,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )


__all__ = ["ArgumentParser"]
