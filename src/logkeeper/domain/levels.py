"""Summary: Severity levels and the threshold comparison used by every sink.
Why: Keep the DEBUG < INFO < WARN < ERROR < FATAL ordering in one place.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Final


class LogLevel(IntEnum):
    """Ordered message severity."""

    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @staticmethod
    def parse(value: "LogLevel | int | str") -> "LogLevel":
        """Translate user or config input into a level.

        Accepts a ``LogLevel``, its numeric value, or a case-insensitive name
        (``WARNING`` and ``CRITICAL`` are accepted as aliases).

        Raises:
            ValueError: If ``value`` does not name a level.
        """

        if isinstance(value, LogLevel):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unsupported log level {value!r}")
        if isinstance(value, int):
            try:
                return LogLevel(value)
            except ValueError:
                raise ValueError(f"Unsupported log level {value!r}") from None
        if not isinstance(value, str):
            raise ValueError(f"Unsupported log level {value!r}")

        normalized = value.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        if normalized.isdigit():
            return LogLevel.parse(int(normalized))
        try:
            return LogLevel[normalized]
        except KeyError:
            valid = ", ".join(level.name for level in LogLevel)
            raise ValueError(
                f"Unsupported log level '{value}'. Valid options: {valid}"
            ) from None

    @property
    def initial_caps(self) -> str:
        """Level name in initial caps, for example ``Info``."""

        return self.name.capitalize()

    def to_logging_level(self) -> int:
        """Map to the closest standard-library ``logging`` level."""

        return _STDLIB_LEVELS[self]


_ALIASES: Final[dict[str, str]] = {"WARNING": "WARN", "CRITICAL": "FATAL"}

_STDLIB_LEVELS: Final[dict[LogLevel, int]] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}


def should_emit(level: LogLevel, threshold: LogLevel) -> bool:
    """Return ``True`` when ``level`` meets or exceeds ``threshold``."""

    return level >= threshold


__all__ = ["LogLevel", "should_emit"]
