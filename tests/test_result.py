"""Tests for tradebook.core.result: Ok/Err values and fail-fast helpers."""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tradebook.core.result import Err, Ok, first_failure


def _positive(x: Decimal) -> Ok[Decimal] | Err[str]:
    return Ok(x) if x > 0 else Err(f"not positive: {x}")


class TestVariants:
    def test_ok_is_frozen(self) -> None:
        ok = Ok(Decimal("1"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ok.value = Decimal("2")  # type: ignore[misc]

    def test_pattern_match(self) -> None:
        match _positive(Decimal("-1")):
            case Err(reason):
                assert reason == "not positive: -1"
            case Ok(_):
                pytest.fail("Should match Err")

    def test_map(self) -> None:
        assert Ok(Decimal("2")).map(lambda x: x * 2) == Ok(Decimal("4"))
        assert Err("e").map(lambda x: x) == Err("e")


class TestFirstFailure:
    def test_all_pass(self) -> None:
        checks = (lambda n: Ok(None), lambda n: Ok(None))
        assert first_failure(5, checks) == Ok(None)

    def test_empty_checks_pass(self) -> None:
        assert first_failure(5, ()) == Ok(None)

    def test_stops_at_first_err(self) -> None:
        called: list[str] = []

        def a(n: int) -> Ok[None] | Err[str]:
            called.append("a")
            return Ok(None)

        def b(n: int) -> Ok[None] | Err[str]:
            called.append("b")
            return Err("b failed")

        def c(n: int) -> Ok[None] | Err[str]:
            called.append("c")
            return Err("c failed")

        assert first_failure(1, (a, b, c)) == Err("b failed")
        assert called == ["a", "b"]

    @given(st.lists(st.booleans(), max_size=8))
    def test_reports_earliest_failing_index(self, outcomes: list[bool]) -> None:
        checks = [
            (lambda _, i=i, ok=ok: Ok(None) if ok else Err(i))
            for i, ok in enumerate(outcomes)
        ]
        result = first_failure(None, checks)
        if all(outcomes):
            assert result == Ok(None)
        else:
            assert result == Err(outcomes.index(False))
