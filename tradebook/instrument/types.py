"""Trade model types -- enums, Counterparty, product details, Trade.

TradeDetail = VanillaOptionDetail | ExoticOptionDetail | FXContractDetail | SwapDetail.

Trade.__post_init__ enforces that the detail variant matches the declared
product type, so a Trade value can never carry the wrong payload.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import final

from tradebook.core.types import UtcDatetime

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ProductType(Enum):
    VANILLA_OPTION = "VANILLA_OPTION"
    EXOTIC_OPTION = "EXOTIC_OPTION"
    FX_FORWARD = "FX_FORWARD"
    FX_SPOT = "FX_SPOT"
    FX_SWAP = "FX_SWAP"
    CURRENCY_SWAP = "CURRENCY_SWAP"
    INTEREST_RATE_SWAP = "INTEREST_RATE_SWAP"


def product_type_name(value: object) -> str:
    """Display name of a product type, tolerating values that are not members."""
    return value.value if isinstance(value, ProductType) else str(value)


class OptionType(Enum):
    CALL = "CALL"
    PUT = "PUT"


class ExoticOptionType(Enum):
    """Exotic subtypes. Only barrier, Asian and digital are bookable."""

    BARRIER_OPTION = "BARRIER_OPTION"
    ASIAN_OPTION = "ASIAN_OPTION"
    LOOKBACK_OPTION = "LOOKBACK_OPTION"
    DIGITAL_OPTION = "DIGITAL_OPTION"
    COMPOUND_OPTION = "COMPOUND_OPTION"
    RAINBOW_OPTION = "RAINBOW_OPTION"
    BERMUDA_OPTION = "BERMUDA_OPTION"


class SwapType(Enum):
    """Swap subtypes. Cross-currency and basis swaps are not bookable."""

    FX_SWAP = "FX_SWAP"
    CURRENCY_SWAP = "CURRENCY_SWAP"
    INTEREST_RATE_SWAP = "INTEREST_RATE_SWAP"
    CROSS_CURRENCY_SWAP = "CROSS_CURRENCY_SWAP"
    BASIS_SWAP = "BASIS_SWAP"


class TradeStatus(Enum):
    """Trade lifecycle states. SETTLED, CANCELLED and EXPIRED are terminal."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SETTLED = "SETTLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


TERMINAL_STATUSES: frozenset[TradeStatus] = frozenset({
    TradeStatus.SETTLED,
    TradeStatus.CANCELLED,
    TradeStatus.EXPIRED,
})


# ---------------------------------------------------------------------------
# Counterparty
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class Counterparty:
    """A trading counterparty.

    counterparty_id is None until the repository assigns one.
    """

    counterparty_id: int | None
    code: str
    name: str
    is_active: bool = True
    lei_code: str | None = None
    swift_code: str | None = None
    credit_rating: str | None = None
    created_at: UtcDatetime | None = None

    def __post_init__(self) -> None:
        if not self.code:
            raise TypeError("Counterparty.code must be non-empty")
        if not self.name:
            raise TypeError("Counterparty.name must be non-empty")

    def deactivated(self) -> Counterparty:
        return replace(self, is_active=False)


# ---------------------------------------------------------------------------
# Product details (one variant per product family)
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class VanillaOptionDetail:
    option_type: OptionType
    strike_price: Decimal
    spot_rate: Decimal | None = None
    premium_amount: Decimal | None = None
    premium_currency: str | None = None


@final
@dataclass(frozen=True, slots=True)
class ExoticOptionDetail:
    """Exotic option payload. Subtype-specific fields are None when unused."""

    exotic_option_type: ExoticOptionType
    option_type: OptionType
    strike_price: Decimal
    spot_rate: Decimal | None = None
    premium_amount: Decimal | None = None
    premium_currency: str | None = None
    barrier_level: Decimal | None = None
    knock_in_out: str | None = None
    observation_frequency: str | None = None


@final
@dataclass(frozen=True, slots=True)
class FXContractDetail:
    """FX forward/spot payload. is_spot is derived from the settlement lag."""

    forward_rate: Decimal
    is_spot: bool
    spot_rate: Decimal | None = None


@final
@dataclass(frozen=True, slots=True)
class SwapDetail:
    swap_type: SwapType
    near_leg_amount: Decimal | None = None
    far_leg_amount: Decimal | None = None
    near_leg_rate: Decimal | None = None
    far_leg_rate: Decimal | None = None
    near_leg_date: date | None = None
    far_leg_date: date | None = None
    fixed_rate: Decimal | None = None
    floating_rate_index: str | None = None
    payment_frequency: str | None = None


type TradeDetail = VanillaOptionDetail | ExoticOptionDetail | FXContractDetail | SwapDetail

DETAIL_TYPE_BY_PRODUCT: dict[ProductType, type] = {
    ProductType.VANILLA_OPTION: VanillaOptionDetail,
    ProductType.EXOTIC_OPTION: ExoticOptionDetail,
    ProductType.FX_FORWARD: FXContractDetail,
    ProductType.FX_SPOT: FXContractDetail,
    ProductType.FX_SWAP: SwapDetail,
    ProductType.CURRENCY_SWAP: SwapDetail,
    ProductType.INTEREST_RATE_SWAP: SwapDetail,
}


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class Trade:
    """A booked trade: common economics plus one product detail variant.

    trade_id is None until the repository assigns one. Status changes
    produce a new Trade via with_status(); the value itself never mutates.
    """

    trade_id: int | None
    trade_reference: str
    counterparty_id: int
    product_type: ProductType
    base_currency: str
    quote_currency: str
    notional_amount: Decimal
    trade_date: date
    value_date: date
    maturity_date: date | None
    status: TradeStatus
    detail: TradeDetail
    created_by: str
    created_at: UtcDatetime
    updated_by: str | None = None
    updated_at: UtcDatetime | None = None

    def __post_init__(self) -> None:
        expected = DETAIL_TYPE_BY_PRODUCT.get(self.product_type)
        if expected is None:
            raise TypeError(f"Trade.product_type must be ProductType, got {self.product_type!r}")
        if not isinstance(self.detail, expected):
            raise TypeError(
                f"Trade.detail for {self.product_type.value} must be "
                f"{expected.__name__}, got {type(self.detail).__name__}"
            )
        if not isinstance(self.status, TradeStatus):
            raise TypeError(f"Trade.status must be TradeStatus, got {self.status!r}")

    def with_status(
        self, status: TradeStatus, at: UtcDatetime, by: str | None = None,
    ) -> Trade:
        """Return a copy moved to status. Transition legality is checked elsewhere."""
        return replace(self, status=status, updated_at=at, updated_by=by)

    def with_id(self, trade_id: int) -> Trade:
        return replace(self, trade_id=trade_id)
