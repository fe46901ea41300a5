"""Where: src/logkeeper/domain/formatting.py
What: Render log entries as comma-delimited lines and parse their timestamps back.
Why: Downstream scrapers depend on the ``<timestamp>,<LEVEL>,<message>`` layout.
Assumptions: - ``%p`` renders AM/PM (C or English locale).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Final

from .entry import ExceptionDetail, LogEntry


class TimestampMode(str, Enum):
    """Supported timestamp layouts."""

    MONTH_DAY_YEAR_24H = "month_day_year_24h"
    MONTH_DAY_YEAR_12H = "month_day_year_12h"
    YEAR_MONTH_DAY_24H = "year_month_day_24h"
    YEAR_MONTH_DAY_12H = "year_month_day_12h"

    @property
    def strftime_format(self) -> str:
        return _FORMATS[self]

    @staticmethod
    def from_user_input(value: "TimestampMode | str") -> "TimestampMode":
        """Translate raw config input into the matching mode."""

        if isinstance(value, TimestampMode):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unsupported timestamp mode {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        for mode in TimestampMode:
            if mode.value == normalized:
                return mode
        valid: Final[str] = ", ".join(m.value for m in TimestampMode)
        msg = f"Unsupported timestamp mode '{value}'. Valid options: {valid}"
        raise ValueError(msg)


_FORMATS: Final[dict[TimestampMode, str]] = {
    TimestampMode.MONTH_DAY_YEAR_24H: "%m/%d/%Y %H:%M:%S",
    TimestampMode.MONTH_DAY_YEAR_12H: "%m/%d/%Y %I:%M:%S %p",
    TimestampMode.YEAR_MONTH_DAY_24H: "%Y-%m-%d %H:%M:%S",
    TimestampMode.YEAR_MONTH_DAY_12H: "%Y-%m-%d %I:%M:%S %p",
}

DEFAULT_TIMESTAMP_MODE: Final[TimestampMode] = TimestampMode.YEAR_MONTH_DAY_24H

FIELD_SEPARATOR: Final[str] = ","
CAUSE_SEPARATOR: Final[str] = "; Caused by: "


def format_timestamp(
    entry: LogEntry,
    *,
    use_local_time: bool = True,
    mode: TimestampMode = DEFAULT_TIMESTAMP_MODE,
) -> str:
    """Render only the timestamp field of ``entry``."""

    moment = entry.local_timestamp if use_local_time else entry.timestamp.astimezone(timezone.utc)
    return moment.strftime(mode.strftime_format)


def format_exception_detail(detail: ExceptionDetail) -> str:
    """Render ``Type: message`` for the detail and each nested cause."""

    segments: list[str] = []
    for item in detail.iter_chain():
        segments.append(f"{item.type_name}: {item.message}" if item.message else item.type_name)
    return CAUSE_SEPARATOR.join(segments)


def format_entry(
    entry: LogEntry,
    use_local_time: bool = True,
    mode: TimestampMode = DEFAULT_TIMESTAMP_MODE,
) -> str:
    """Render ``entry`` as ``<timestamp>,<LEVEL>,<message>[,<exception>]``."""

    parts = [
        format_timestamp(entry, use_local_time=use_local_time, mode=mode),
        entry.level.name,
        entry.message,
    ]
    if entry.exception is not None:
        parts.append(format_exception_detail(entry.exception))
    return FIELD_SEPARATOR.join(parts)


def parse_timestamp(
    line: str,
    mode: TimestampMode = DEFAULT_TIMESTAMP_MODE,
    use_local_time: bool = True,
) -> datetime:
    """Parse the timestamp field of a formatted line into an aware datetime.

    Raises:
        ValueError: If the first field does not match ``mode``.
    """

    stamp = line.split(FIELD_SEPARATOR, 1)[0].strip()
    naive = datetime.strptime(stamp, mode.strftime_format)
    if use_local_time:
        return naive.astimezone()
    return naive.replace(tzinfo=timezone.utc)


__all__ = [
    "DEFAULT_TIMESTAMP_MODE",
    "TimestampMode",
    "format_entry",
    "format_exception_detail",
    "format_timestamp",
    "parse_timestamp",
]
