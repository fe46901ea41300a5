"""Append a single message through a synchronous file logger."""

from __future__ import annotations

from pathlib import Path
from typing import final

from logkeeper.application.file_logger import FileLogger
from logkeeper.config.settings import LoggerSettings, load_settings
from logkeeper.domain.levels import LogLevel
from logkeeper.platform.logging import logger
from logkeeper.ui.cli.args.options import WriteArgs


@final
class WriteCommand:
    """Execute the ``write`` subcommand."""

    def __init__(self, args: WriteArgs, settings: LoggerSettings | None = None) -> None:
        self.args: WriteArgs = args
        self.settings: LoggerSettings = settings or load_settings()

    def execute(self) -> Path:
        """Write the message and return the file it went to.

        Raises:
            OSError: When the log file cannot be written.
        """

        # The message was requested explicitly, so the configured threshold does not apply
        with FileLogger(
            self.args.base_name or self.settings.base_name,
            threshold=LogLevel.DEBUG,
            append_date=self.args.append_date,
            directory=self.args.directory,
            queued=False,
            settings=self.settings,
        ) as file_logger:
            _ = file_logger.log(self.args.level, self.args.message)
            path = file_logger.current_log_file_path

        logger.debug("Wrote %s message to %s", self.args.level.name, path)
        return path


__all__ = ["WriteCommand"]
