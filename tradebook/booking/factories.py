"""Trade factories: build the product-specific Trade from a validated request.

Factories never validate. They assume the matching product validator has
already accepted the request, copy the common fields, and fill in the
product detail. Every new trade starts in PENDING.
"""

from __future__ import annotations

from typing import Protocol, final, runtime_checkable

from tradebook.core.calendar import add_days
from tradebook.core.types import UtcDatetime
from tradebook.gateway.types import TradeBookingRequest
from tradebook.instrument.types import (
    Counterparty,
    ExoticOptionDetail,
    FXContractDetail,
    ProductType,
    SwapDetail,
    Trade,
    TradeDetail,
    TradeStatus,
    VanillaOptionDetail,
)


@runtime_checkable
class TradeFactory(Protocol):
    @property
    def product_types(self) -> frozenset[ProductType]: ...

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Trade: ...


def _pending_trade(
    request: TradeBookingRequest,
    counterparty: Counterparty,
    detail: TradeDetail,
    now: UtcDatetime,
) -> Trade:
    """Copy the common fields shared by every product family."""
    assert request.product_type is not None
    assert request.trade_reference is not None
    assert request.base_currency is not None
    assert request.quote_currency is not None
    assert request.notional_amount is not None
    assert request.trade_date is not None
    assert request.value_date is not None
    assert request.created_by is not None
    assert counterparty.counterparty_id is not None
    return Trade(
        trade_id=None,
        trade_reference=request.trade_reference,
        counterparty_id=counterparty.counterparty_id,
        product_type=request.product_type,
        base_currency=request.base_currency,
        quote_currency=request.quote_currency,
        notional_amount=request.notional_amount,
        trade_date=request.trade_date,
        value_date=request.value_date,
        maturity_date=request.maturity_date,
        status=TradeStatus.PENDING,
        detail=detail,
        created_by=request.created_by,
        created_at=now,
    )


@final
class VanillaOptionTradeFactory:
    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.VANILLA_OPTION})

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Trade:
        assert request.option_type is not None
        assert request.strike_price is not None
        detail = VanillaOptionDetail(
            option_type=request.option_type,
            strike_price=request.strike_price,
            spot_rate=request.spot_rate,
            premium_amount=request.premium_amount,
            premium_currency=request.premium_currency,
        )
        return _pending_trade(request, counterparty, detail, now)


@final
class ExoticOptionTradeFactory:
    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.EXOTIC_OPTION})

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Trade:
        assert request.exotic_option_type is not None
        assert request.option_type is not None
        assert request.strike_price is not None
        detail = ExoticOptionDetail(
            exotic_option_type=request.exotic_option_type,
            option_type=request.option_type,
            strike_price=request.strike_price,
            spot_rate=request.spot_rate,
            premium_amount=request.premium_amount,
            premium_currency=request.premium_currency,
            barrier_level=request.barrier_level,
            knock_in_out=request.knock_in_out,
            observation_frequency=request.observation_frequency,
        )
        return _pending_trade(request, counterparty, detail, now)


@final
class FXContractTradeFactory:
    """FX forwards and spots.

    is_spot: the contract settles fewer than spot_threshold_days calendar
    days after its trade date.
    """

    def __init__(self, spot_threshold_days: int = 3) -> None:
        self._spot_threshold_days = spot_threshold_days

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.FX_FORWARD, ProductType.FX_SPOT})

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Trade:
        assert request.forward_rate is not None
        assert request.trade_date is not None
        assert request.value_date is not None
        is_spot = request.value_date < add_days(request.trade_date, self._spot_threshold_days)
        detail = FXContractDetail(
            forward_rate=request.forward_rate,
            is_spot=is_spot,
            spot_rate=request.spot_rate,
        )
        return _pending_trade(request, counterparty, detail, now)


@final
class SwapTradeFactory:
    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({
            ProductType.FX_SWAP, ProductType.CURRENCY_SWAP, ProductType.INTEREST_RATE_SWAP,
        })

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Trade:
        assert request.swap_type is not None
        detail = SwapDetail(
            swap_type=request.swap_type,
            near_leg_amount=request.near_leg_amount,
            far_leg_amount=request.far_leg_amount,
            near_leg_rate=request.near_leg_rate,
            far_leg_rate=request.far_leg_rate,
            near_leg_date=request.near_leg_date,
            far_leg_date=request.far_leg_date,
            fixed_rate=request.fixed_rate,
            floating_rate_index=request.floating_rate_index,
            payment_frequency=request.payment_frequency,
        )
        return _pending_trade(request, counterparty, detail, now)
