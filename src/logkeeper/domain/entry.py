"""Log entry value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from .levels import LogLevel


@dataclass(slots=True, frozen=True)
class ExceptionDetail:
    """Structured failure attached to an entry (type, message, nested cause)."""

    type_name: str
    message: str
    cause: ExceptionDetail | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionDetail":
        """Build the detail chain for ``exc``.

        Follows ``__cause__`` and falls back to ``__context__`` unless the
        context was suppressed with ``raise ... from None``.
        """

        chain: list[BaseException] = []
        seen: set[int] = set()
        current: BaseException | None = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(current)
            if current.__cause__ is not None:
                current = current.__cause__
            elif not current.__suppress_context__:
                current = current.__context__
            else:
                current = None

        head, *causes = chain
        detail: ExceptionDetail | None = None
        for item in reversed(causes):
            detail = cls(type(item).__name__, str(item), detail)
        return cls(type(head).__name__, str(head), detail)

    def iter_chain(self) -> list[ExceptionDetail]:
        """Return this detail followed by each nested cause."""

        chain: list[ExceptionDetail] = []
        current: ExceptionDetail | None = self
        while current is not None:
            chain.append(current)
            current = current.cause
        return chain


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """One message to log; the timestamp is captured at construction (UTC)."""

    level: LogLevel
    message: str
    exception: ExceptionDetail | None = None
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def create(
        cls,
        level: LogLevel,
        message: str | None,
        exc: BaseException | None = None,
    ) -> "LogEntry":
        """Build an entry from a raw exception; ``None`` messages become empty text."""

        detail = ExceptionDetail.from_exception(exc) if exc is not None else None
        return cls(level=level, message=message or "", exception=detail)

    @property
    def local_timestamp(self) -> datetime:
        """Capture instant converted to the local time zone."""

        return self.timestamp.astimezone()

    @property
    def local_date(self) -> date:
        """Local calendar date used to pick the dated log file."""

        return self.local_timestamp.date()

    @property
    def is_error(self) -> bool:
        return self.level >= LogLevel.ERROR


__all__ = ["ExceptionDetail", "LogEntry"]
