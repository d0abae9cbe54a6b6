"""Tests for tradebook.core.types and tradebook.core.calendar."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tradebook.core.calendar import add_days, add_years, days_between
from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime


class TestUtcDatetime:
    def test_rejects_naive(self) -> None:
        with pytest.raises(TypeError, match="naive"):
            UtcDatetime(value=datetime(2025, 6, 16, 9, 0))

    def test_parse_converts_to_utc(self) -> None:
        cet = timezone(timedelta(hours=2))
        match UtcDatetime.parse(datetime(2025, 6, 16, 11, 0, tzinfo=cet)):
            case Ok(ts):
                assert ts.value == datetime(2025, 6, 16, 9, 0, tzinfo=UTC)
            case Err(e):
                pytest.fail(e)

    def test_parse_naive_is_err(self) -> None:
        assert isinstance(UtcDatetime.parse(datetime(2025, 6, 16)), Err)

    def test_at_and_date(self) -> None:
        assert UtcDatetime.at(date(2025, 6, 16)).date() == date(2025, 6, 16)


class TestCalendar:
    def test_add_years_clamps_leap_day(self) -> None:
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)

    def test_add_years_plain(self) -> None:
        assert add_years(date(2025, 6, 16), 10) == date(2035, 6, 16)

    def test_add_days_crosses_month(self) -> None:
        assert add_days(date(2025, 6, 30), 1) == date(2025, 7, 1)

    @given(st.dates(min_value=date(2000, 1, 1), max_value=date(2090, 1, 1)), st.integers(-400, 400))
    def test_days_between_inverts_add_days(self, d: date, n: int) -> None:
        assert days_between(d, add_days(d, n)) == n
