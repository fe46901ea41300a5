"""Diagnostics logger bootstrap.

Where: platform/logging/config.py
What: Configure the ``logkeeper`` diagnostics logger and expose the shared instance.
Why: Archive warnings, writer failures, and console echoes need one destination
that never feeds back into the managed log files.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import LevelStyledRichHandler


LOGGER_NAME: Final[str] = "logkeeper"


def setup_logger(
    diagnostics_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console: Console | None = None,
) -> logging.Logger:
    """Set up and configure the diagnostics logger.

    Args:
        diagnostics_file: Optional file receiving library diagnostics. This is
            never one of the files managed by ``FileLogger``.
        console_level: Minimum level echoed to the console.
        file_level: Minimum level written to ``diagnostics_file``.
        console: Rich console to render to; stderr when omitted.

    Returns:
        logging.Logger: The configured ``logkeeper`` logger.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = LevelStyledRichHandler(
        console=console or Console(stderr=True, soft_wrap=True)
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if diagnostics_file is not None:
        resolved = Path(diagnostics_file).expanduser().resolve()
        os.makedirs(resolved.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = setup_logger()


__all__ = ["LOGGER_NAME", "logger", "setup_logger"]
