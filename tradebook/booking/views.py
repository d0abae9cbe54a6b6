"""Plain-data views returned to callers.

TradeView flattens the product detail into optional columns so callers
never need to match on the detail variant. Enum fields are rendered as
their string values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import final

from tradebook.instrument.types import (
    Counterparty,
    ExoticOptionDetail,
    FXContractDetail,
    SwapDetail,
    Trade,
    VanillaOptionDetail,
)


@final
@dataclass(frozen=True, slots=True)
class TradeView:
    trade_id: int
    trade_reference: str
    counterparty_id: int
    product_type: str
    base_currency: str
    quote_currency: str
    notional_amount: Decimal
    trade_date: date
    value_date: date
    maturity_date: date | None
    status: str
    created_by: str
    created_at: datetime
    updated_by: str | None = None
    updated_at: datetime | None = None
    option_type: str | None = None
    exotic_option_type: str | None = None
    strike_price: Decimal | None = None
    spot_rate: Decimal | None = None
    premium_amount: Decimal | None = None
    premium_currency: str | None = None
    barrier_level: Decimal | None = None
    knock_in_out: str | None = None
    observation_frequency: str | None = None
    forward_rate: Decimal | None = None
    is_spot: bool | None = None
    swap_type: str | None = None
    near_leg_amount: Decimal | None = None
    far_leg_amount: Decimal | None = None
    near_leg_rate: Decimal | None = None
    far_leg_rate: Decimal | None = None
    near_leg_date: date | None = None
    far_leg_date: date | None = None
    fixed_rate: Decimal | None = None
    floating_rate_index: str | None = None
    payment_frequency: str | None = None


@final
@dataclass(frozen=True, slots=True)
class CounterpartyView:
    counterparty_id: int
    code: str
    name: str
    is_active: bool
    lei_code: str | None = None
    swift_code: str | None = None
    credit_rating: str | None = None


def _detail_columns(trade: Trade) -> dict[str, object]:
    match trade.detail:
        case VanillaOptionDetail() as d:
            return {
                "option_type": d.option_type.value,
                "strike_price": d.strike_price,
                "spot_rate": d.spot_rate,
                "premium_amount": d.premium_amount,
                "premium_currency": d.premium_currency,
            }
        case ExoticOptionDetail() as d:
            return {
                "exotic_option_type": d.exotic_option_type.value,
                "option_type": d.option_type.value,
                "strike_price": d.strike_price,
                "spot_rate": d.spot_rate,
                "premium_amount": d.premium_amount,
                "premium_currency": d.premium_currency,
                "barrier_level": d.barrier_level,
                "knock_in_out": d.knock_in_out,
                "observation_frequency": d.observation_frequency,
            }
        case FXContractDetail() as d:
            return {"forward_rate": d.forward_rate, "is_spot": d.is_spot, "spot_rate": d.spot_rate}
        case SwapDetail() as d:
            return {
                "swap_type": d.swap_type.value,
                "near_leg_amount": d.near_leg_amount,
                "far_leg_amount": d.far_leg_amount,
                "near_leg_rate": d.near_leg_rate,
                "far_leg_rate": d.far_leg_rate,
                "near_leg_date": d.near_leg_date,
                "far_leg_date": d.far_leg_date,
                "fixed_rate": d.fixed_rate,
                "floating_rate_index": d.floating_rate_index,
                "payment_frequency": d.payment_frequency,
            }


def trade_view(trade: Trade) -> TradeView:
    """Flatten a stored trade. The trade must already carry an id."""
    if trade.trade_id is None:
        raise TypeError("trade_view requires a persisted trade (trade_id is None)")
    return TradeView(
        trade_id=trade.trade_id,
        trade_reference=trade.trade_reference,
        counterparty_id=trade.counterparty_id,
        product_type=trade.product_type.value,
        base_currency=trade.base_currency,
        quote_currency=trade.quote_currency,
        notional_amount=trade.notional_amount,
        trade_date=trade.trade_date,
        value_date=trade.value_date,
        maturity_date=trade.maturity_date,
        status=trade.status.value,
        created_by=trade.created_by,
        created_at=trade.created_at.value,
        updated_by=trade.updated_by,
        updated_at=trade.updated_at.value if trade.updated_at is not None else None,
        **_detail_columns(trade),
    )


def counterparty_view(counterparty: Counterparty) -> CounterpartyView:
    if counterparty.counterparty_id is None:
        raise TypeError("counterparty_view requires a persisted counterparty")
    return CounterpartyView(
        counterparty_id=counterparty.counterparty_id,
        code=counterparty.code,
        name=counterparty.name,
        is_active=counterparty.is_active,
        lei_code=counterparty.lei_code,
        swift_code=counterparty.swift_code,
        credit_rating=counterparty.credit_rating,
    )
