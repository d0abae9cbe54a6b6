"""Gateway types: inbound booking and counterparty requests.

TradeBookingRequest is the single representation of a trade entering the
system. Every product-specific field is optional: each product validator
reads only its own subset, and presence rules live in the validators,
not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import final

from tradebook.instrument.types import ExoticOptionType, OptionType, ProductType, SwapType


@final
@dataclass(frozen=True, slots=True)
class TradeBookingRequest:
    # --- Common fields ---
    product_type: ProductType | None = None
    trade_reference: str | None = None
    counterparty_id: int | None = None
    base_currency: str | None = None
    quote_currency: str | None = None
    notional_amount: Decimal | None = None
    trade_date: date | None = None
    value_date: date | None = None
    maturity_date: date | None = None
    created_by: str | None = None

    # --- Options ---
    option_type: OptionType | None = None
    exotic_option_type: ExoticOptionType | None = None
    strike_price: Decimal | None = None
    premium_amount: Decimal | None = None
    premium_currency: str | None = None
    spot_rate: Decimal | None = None
    barrier_level: Decimal | None = None
    knock_in_out: str | None = None
    observation_frequency: str | None = None

    # --- FX ---
    forward_rate: Decimal | None = None

    # --- Swaps ---
    swap_type: SwapType | None = None
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
class CounterpartyRequest:
    """Inbound request to register a counterparty."""

    code: str
    name: str
    lei_code: str | None = None
    swift_code: str | None = None
    credit_rating: str | None = None
