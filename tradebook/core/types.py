"""Core types: UtcDatetime and the clock signature used by services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import final

from tradebook.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime) -> Ok[UtcDatetime] | Err[str]:
        """Parse a datetime, rejecting naive (no tzinfo) datetimes."""
        if raw.tzinfo is None:
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        """Current UTC time."""
        return UtcDatetime(value=datetime.now(tz=UTC))

    @staticmethod
    def at(day: date, hour: int = 9) -> UtcDatetime:
        """UTC instant on a calendar day. Handy for fixed clocks in tests."""
        return UtcDatetime(value=datetime(day.year, day.month, day.day, hour, tzinfo=UTC))

    def date(self) -> date:
        return self.value.date()


# Services take a clock so "today" is injectable; production uses UtcDatetime.now.
type Clock = Callable[[], UtcDatetime]
