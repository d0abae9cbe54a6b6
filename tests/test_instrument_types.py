"""Tests for tradebook.instrument.types: Counterparty, details, Trade."""

from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from tradebook.core.types import UtcDatetime
from tradebook.instrument.types import (
    DETAIL_TYPE_BY_PRODUCT,
    TERMINAL_STATUSES,
    Counterparty,
    FXContractDetail,
    OptionType,
    ProductType,
    SwapDetail,
    SwapType,
    Trade,
    TradeStatus,
    VanillaOptionDetail,
)

_TS = UtcDatetime.at(date(2025, 6, 16))


def _trade(**overrides: object) -> Trade:
    fields: dict[str, object] = {
        "trade_id": None,
        "trade_reference": "TRD-001",
        "counterparty_id": 1,
        "product_type": ProductType.VANILLA_OPTION,
        "base_currency": "EUR",
        "quote_currency": "USD",
        "notional_amount": Decimal("1000000"),
        "trade_date": date(2025, 6, 16),
        "value_date": date(2025, 6, 18),
        "maturity_date": date(2025, 12, 16),
        "status": TradeStatus.PENDING,
        "detail": VanillaOptionDetail(option_type=OptionType.CALL, strike_price=Decimal("1.1")),
        "created_by": "trader1",
        "created_at": _TS,
    }
    fields.update(overrides)
    return Trade(**fields)  # type: ignore[arg-type]


class TestCounterparty:
    def test_defaults_active(self) -> None:
        cp = Counterparty(counterparty_id=None, code="ACME", name="Acme Bank")
        assert cp.is_active is True
        assert cp.deactivated().is_active is False

    def test_empty_code_rejected(self) -> None:
        with pytest.raises(TypeError, match="code"):
            Counterparty(counterparty_id=None, code="", name="Acme Bank")

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(TypeError, match="name"):
            Counterparty(counterparty_id=None, code="ACME", name="")


class TestTrade:
    def test_valid_trade(self) -> None:
        trade = _trade()
        assert trade.status is TradeStatus.PENDING
        assert trade.updated_at is None

    def test_detail_must_match_product(self) -> None:
        with pytest.raises(TypeError, match="FX_FORWARD must be FXContractDetail"):
            _trade(product_type=ProductType.FX_FORWARD)

    def test_swap_detail_accepted_for_all_swap_products(self) -> None:
        detail = SwapDetail(swap_type=SwapType.FX_SWAP)
        for product in (ProductType.FX_SWAP, ProductType.CURRENCY_SWAP, ProductType.INTEREST_RATE_SWAP):
            assert _trade(product_type=product, detail=detail).product_type is product

    def test_status_must_be_enum(self) -> None:
        with pytest.raises(TypeError, match="status"):
            _trade(status="PENDING")

    def test_with_status_is_a_copy(self) -> None:
        trade = _trade(trade_id=7)
        later = UtcDatetime.at(date(2025, 6, 17))
        moved = trade.with_status(TradeStatus.CONFIRMED, later, "ops")
        assert trade.status is TradeStatus.PENDING
        assert moved.status is TradeStatus.CONFIRMED
        assert moved.updated_at == later
        assert moved.updated_by == "ops"
        assert moved.trade_id == 7

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _trade().status = TradeStatus.SETTLED  # type: ignore[misc]


class TestTables:
    def test_every_product_has_a_detail_type(self) -> None:
        assert set(DETAIL_TYPE_BY_PRODUCT) == set(ProductType)
        assert DETAIL_TYPE_BY_PRODUCT[ProductType.FX_SPOT] is FXContractDetail

    def test_terminal_statuses(self) -> None:
        assert frozenset({TradeStatus.SETTLED, TradeStatus.CANCELLED, TradeStatus.EXPIRED}) == TERMINAL_STATUSES
