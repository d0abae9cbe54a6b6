"""Tests for tradebook.instrument.lifecycle: status transitions and cancellation."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime
from tradebook.instrument.lifecycle import TRADE_TRANSITIONS, check_cancellable, check_transition
from tradebook.instrument.types import (
    TERMINAL_STATUSES,
    FXContractDetail,
    ProductType,
    Trade,
    TradeStatus,
)

_TODAY = date(2025, 6, 16)


def _pending_trade() -> Trade:
    return Trade(
        trade_id=1,
        trade_reference="FWD-001",
        counterparty_id=1,
        product_type=ProductType.FX_FORWARD,
        base_currency="EUR",
        quote_currency="USD",
        notional_amount=Decimal("5000000"),
        trade_date=_TODAY,
        value_date=date(2025, 9, 16),
        maturity_date=None,
        status=TradeStatus.PENDING,
        detail=FXContractDetail(forward_rate=Decimal("1.0950"), is_spot=False),
        created_by="trader1",
        created_at=UtcDatetime.at(_TODAY),
    )


_statuses = st.sampled_from(list(TradeStatus))


class TestTransitionTable:
    def test_pending_reaches_everything(self) -> None:
        for to in TradeStatus:
            assert check_transition(TradeStatus.PENDING, to) == Ok(None)

    def test_confirmed_reaches_everything_but_pending(self) -> None:
        for to in TradeStatus:
            if to is TradeStatus.PENDING:
                continue
            assert check_transition(TradeStatus.CONFIRMED, to) == Ok(None)

    def test_confirmed_to_pending_rejected(self) -> None:
        result = check_transition(TradeStatus.CONFIRMED, TradeStatus.PENDING)
        assert isinstance(result, Err)
        assert result.error.message == "Cannot revert CONFIRMED trade to PENDING"
        assert result.error.rule == "ILLEGAL_TRANSITION"

    @pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
    def test_terminal_is_immutable(self, terminal: TradeStatus) -> None:
        for to in TradeStatus:
            result = check_transition(terminal, to)
            assert isinstance(result, Err)
            assert result.error.message == f"Cannot change status of {terminal.value} trade"

    def test_table_size(self) -> None:
        assert len(TRADE_TRANSITIONS) == 5 + 4

    @given(_statuses, _statuses)
    def test_check_agrees_with_table(self, current: TradeStatus, requested: TradeStatus) -> None:
        allowed = isinstance(check_transition(current, requested), Ok)
        assert allowed == ((current, requested) in TRADE_TRANSITIONS)

    @given(_statuses, _statuses)
    def test_terminal_never_leaves(self, current: TradeStatus, requested: TradeStatus) -> None:
        if current in TERMINAL_STATUSES:
            assert isinstance(check_transition(current, requested), Err)


class TestUnknownStatus:
    def test_unknown_current(self) -> None:
        result = check_transition("ARCHIVED", TradeStatus.SETTLED)  # type: ignore[arg-type]
        assert isinstance(result, Err)
        assert result.error.rule == "INTERNAL_CONSISTENCY"
        assert result.error.message == "Unknown trade status: ARCHIVED"

    def test_unknown_requested(self) -> None:
        result = check_transition(TradeStatus.PENDING, "ARCHIVED")  # type: ignore[arg-type]
        assert isinstance(result, Err)
        assert result.error.rule == "UNKNOWN_STATUS"


class TestCancellable:
    def test_pending_same_day(self) -> None:
        assert check_cancellable(_pending_trade(), _TODAY) == Ok(None)

    def test_next_day_rejected(self) -> None:
        result = check_cancellable(_pending_trade(), date(2025, 6, 17))
        assert isinstance(result, Err)
        assert result.error.message == "Trades can only be cancelled on the same business day"

    @pytest.mark.parametrize("status", [s for s in TradeStatus if s is not TradeStatus.PENDING])
    def test_non_pending_rejected(self, status: TradeStatus) -> None:
        trade = replace(_pending_trade(), status=status)
        result = check_cancellable(trade, _TODAY)
        assert isinstance(result, Err)
        assert result.error.message == "Only PENDING trades can be cancelled"
