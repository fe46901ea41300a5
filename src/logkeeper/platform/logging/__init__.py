"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the diagnostics logger, setup helper, and the Rich console handler.
Why: Provide a single canonical import path for library diagnostics.
"""

from __future__ import annotations

from .config import LOGGER_NAME, logger, setup_logger
from .handlers import LevelStyledRichHandler

__all__ = [
    "LOGGER_NAME",
    "LevelStyledRichHandler",
    "logger",
    "setup_logger",
]
