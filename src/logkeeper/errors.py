"""Exception hierarchy shared across logkeeper layers."""

from __future__ import annotations


class LogKeeperError(Exception):
    """Base class for errors raised by logkeeper."""


class ConfigurationError(LogKeeperError):
    """Raised when persisted logger settings cannot be interpreted."""


class ArchiveError(LogKeeperError):
    """Raised when a single year directory cannot be bundled."""

    def __init__(self, year: int, message: str) -> None:
        super().__init__(f"{year}: {message}")
        self.year: int = year
        self.reason: str = message


__all__ = ["ArchiveError", "ConfigurationError", "LogKeeperError"]
