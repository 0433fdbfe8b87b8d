"""Date windows for date-ranged catalog queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from toolsync.domain.errors import InvalidInputError


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or timestamp; naive values are taken as UTC."""

    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_graphql_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class DateWindow:
    """Inclusive start and optional exclusive end of a launch-date filter."""

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or (self.end is not None and self.end.tzinfo is None):
            raise InvalidInputError("Date window values must include timezone information")
        if self.end is not None and self.start > self.end:
            raise InvalidInputError("Date window start must be before end")

    @classmethod
    def from_iso(cls, start: str, end: str | None = None) -> DateWindow:
        if not start or not start.strip():
            raise InvalidInputError("A start date is required for a date-ranged sync")
        return cls(
            start=parse_iso_datetime(start),
            end=parse_iso_datetime(end) if end else None,
        )

    @classmethod
    def last_days(cls, days: int, *, clock: Clock = _utcnow) -> DateWindow:
        """Window covering the ``days`` calendar days before today plus today."""

        if days < 0:
            raise InvalidInputError("Lookback days must be non-negative")
        now = clock().astimezone(UTC)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(start=today - timedelta(days=days), end=None)

    def graphql_bounds(self) -> tuple[str, str | None]:
        """Return ``(postedAfter, postedBefore)`` literals for the upstream query."""

        after = format_graphql_timestamp(self.start)
        before = format_graphql_timestamp(self.end) if self.end is not None else None
        return after, before


__all__ = ["Clock", "DateWindow", "format_graphql_timestamp", "parse_iso_datetime"]
