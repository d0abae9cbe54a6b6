"""Product validators: vanilla option, exotic option, FX contract, swap.

Each validator declares the product types it covers and runs an ordered,
fail-fast tuple of checks; the first broken rule's message is returned.
Validators are stateless apart from injected reference data (the swap
validator's supported floating-rate indices), and judge dates against an
explicit business date, never the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Protocol, final, runtime_checkable

from tradebook.booking.structural import Check, ValidationContext, is_blank, reject
from tradebook.core.calendar import add_days, add_years
from tradebook.core.errors import BusinessRuleViolation
from tradebook.core.result import Err, Ok, first_failure
from tradebook.gateway.types import TradeBookingRequest
from tradebook.infra.config import DEFAULT_FLOATING_RATE_INDICES
from tradebook.instrument.types import ExoticOptionType, ProductType, SwapType

type Outcome = Ok[None] | Err[BusinessRuleViolation]

MAX_RATE_DECIMALS = 6
MAX_OPTION_TENOR_YEARS = 10
MAX_FX_FORWARD_YEARS = 5
MIN_FX_SETTLEMENT_DAYS = 1

KNOCK_FLAGS: frozenset[str] = frozenset({"KNOCK_IN", "KNOCK_OUT"})
OBSERVATION_FREQUENCIES: frozenset[str] = frozenset({"DAILY", "WEEKLY", "MONTHLY"})


@runtime_checkable
class ProductValidator(Protocol):
    @property
    def product_types(self) -> frozenset[ProductType]: ...

    def validate(self, request: TradeBookingRequest, today: date) -> Outcome: ...


def decimal_places(value: Decimal) -> int:
    """Digits after the decimal point, trailing zeros included (1.50 -> 2)."""
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


# ---------------------------------------------------------------------------
# Shared rules
# ---------------------------------------------------------------------------


def _maturity_not_before_value(ctx: ValidationContext, message: str, source: str) -> Outcome:
    maturity = ctx.request.maturity_date
    value_date = ctx.request.value_date
    if maturity is not None and value_date is not None and maturity < value_date:
        return reject(message, "MATURITY_BEFORE_VALUE", source)
    return Ok(None)


def _distinct_currencies(ctx: ValidationContext, message: str, source: str) -> Outcome:
    if ctx.request.base_currency == ctx.request.quote_currency:
        return reject(message, "SAME_CURRENCY", source)
    return Ok(None)


# ---------------------------------------------------------------------------
# Vanilla option
# ---------------------------------------------------------------------------

_VANILLA = "booking.validators.VanillaOptionValidator"


def _vanilla_option_type(ctx: ValidationContext) -> Outcome:
    if ctx.request.option_type is None:
        return reject("Option type is required for vanilla options", "OPTION_TYPE_REQUIRED", _VANILLA)
    return Ok(None)


def _vanilla_strike(ctx: ValidationContext) -> Outcome:
    strike = ctx.request.strike_price
    if strike is None:
        return reject("Strike price is required for vanilla options", "STRIKE_REQUIRED", _VANILLA)
    if strike <= 0:
        return reject("Strike price must be positive", "STRIKE_NOT_POSITIVE", _VANILLA)
    if decimal_places(strike) > MAX_RATE_DECIMALS:
        return reject(
            f"Strike price cannot have more than {MAX_RATE_DECIMALS} decimal places",
            "STRIKE_PRECISION", _VANILLA,
        )
    return Ok(None)


def _vanilla_spot(ctx: ValidationContext) -> Outcome:
    spot = ctx.request.spot_rate
    if spot is not None and spot <= 0:
        return reject("Spot rate must be positive when provided", "SPOT_NOT_POSITIVE", _VANILLA)
    return Ok(None)


def _vanilla_maturity(ctx: ValidationContext) -> Outcome:
    maturity = ctx.request.maturity_date
    if maturity is None:
        return reject("Maturity date is required for vanilla options", "MATURITY_REQUIRED", _VANILLA)
    ordered = _maturity_not_before_value(ctx, "Maturity date must be after value date", _VANILLA)
    if isinstance(ordered, Err):
        return ordered
    if maturity > add_years(ctx.today, MAX_OPTION_TENOR_YEARS):
        return reject(
            f"Maturity date cannot be more than {MAX_OPTION_TENOR_YEARS} years in the future",
            "TENOR_TOO_LONG", _VANILLA,
        )
    return Ok(None)


def _vanilla_premium(ctx: ValidationContext) -> Outcome:
    premium = ctx.request.premium_amount
    if premium is None:
        return Ok(None)
    if premium <= 0:
        return reject("Premium amount must be positive when provided", "PREMIUM_NOT_POSITIVE", _VANILLA)
    if is_blank(ctx.request.premium_currency):
        return reject(
            "Premium currency is required when premium amount is specified",
            "PREMIUM_CURRENCY_REQUIRED", _VANILLA,
        )
    return Ok(None)


@final
class VanillaOptionValidator:
    """European/American calls and puts."""

    _checks: tuple[Check, ...] = (
        _vanilla_option_type,
        _vanilla_strike,
        _vanilla_spot,
        _vanilla_maturity,
        _vanilla_premium,
    )

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.VANILLA_OPTION})

    def validate(self, request: TradeBookingRequest, today: date) -> Outcome:
        return first_failure(ValidationContext(request=request, today=today), self._checks)


# ---------------------------------------------------------------------------
# Exotic option
# ---------------------------------------------------------------------------

_EXOTIC = "booking.validators.ExoticOptionValidator"


def _exotic_common(ctx: ValidationContext) -> Outcome:
    req = ctx.request
    if req.exotic_option_type is None:
        return reject(
            "Exotic option type is required for exotic options", "EXOTIC_TYPE_REQUIRED", _EXOTIC,
        )
    if req.option_type is None:
        return reject(
            "Option type (CALL/PUT) is required for exotic options", "OPTION_TYPE_REQUIRED", _EXOTIC,
        )
    if req.strike_price is None:
        return reject("Strike price is required for exotic options", "STRIKE_REQUIRED", _EXOTIC)
    if req.strike_price <= 0:
        return reject("Strike price must be positive", "STRIKE_NOT_POSITIVE", _EXOTIC)
    if req.maturity_date is None:
        return reject("Maturity date is required for exotic options", "MATURITY_REQUIRED", _EXOTIC)
    return _maturity_not_before_value(ctx, "Maturity date must be after value date", _EXOTIC)


def _barrier_rules(ctx: ValidationContext) -> Outcome:
    req = ctx.request
    if req.barrier_level is None:
        return reject("Barrier level is required for barrier options", "BARRIER_REQUIRED", _EXOTIC)
    if req.barrier_level <= 0:
        return reject("Barrier level must be positive", "BARRIER_NOT_POSITIVE", _EXOTIC)
    if req.knock_in_out is None or is_blank(req.knock_in_out):
        return reject(
            "Knock-in/out specification is required for barrier options",
            "KNOCK_FLAG_REQUIRED", _EXOTIC,
        )
    if req.knock_in_out not in KNOCK_FLAGS:
        return reject(
            "Knock-in/out must be either 'KNOCK_IN' or 'KNOCK_OUT'", "KNOCK_FLAG_INVALID", _EXOTIC,
        )
    return Ok(None)


def _asian_rules(ctx: ValidationContext) -> Outcome:
    frequency = ctx.request.observation_frequency
    if frequency is None or is_blank(frequency):
        return reject(
            "Observation frequency is required for Asian options",
            "OBSERVATION_FREQUENCY_REQUIRED", _EXOTIC,
        )
    if frequency not in OBSERVATION_FREQUENCIES:
        return reject(
            "Observation frequency must be DAILY, WEEKLY, or MONTHLY",
            "OBSERVATION_FREQUENCY_INVALID", _EXOTIC,
        )
    return Ok(None)


def _digital_rules(ctx: ValidationContext) -> Outcome:
    if ctx.request.strike_price is None:
        return reject("Strike price is required for digital options", "STRIKE_REQUIRED", _EXOTIC)
    if ctx.request.premium_amount is None:
        return reject(
            "Payout amount (premium) is required for digital options", "PAYOUT_REQUIRED", _EXOTIC,
        )
    return Ok(None)


def _exotic_subtype(ctx: ValidationContext) -> Outcome:
    match ctx.request.exotic_option_type:
        case ExoticOptionType.BARRIER_OPTION:
            return _barrier_rules(ctx)
        case ExoticOptionType.ASIAN_OPTION:
            return _asian_rules(ctx)
        case ExoticOptionType.DIGITAL_OPTION:
            return _digital_rules(ctx)
        case other:
            name = other.value if isinstance(other, ExoticOptionType) else other
            return reject(
                f"Unsupported exotic option type: {name}", "UNSUPPORTED_EXOTIC_TYPE", _EXOTIC,
            )


@final
class ExoticOptionValidator:
    """Barrier, Asian and digital options; other exotic subtypes are rejected."""

    _checks: tuple[Check, ...] = (_exotic_common, _exotic_subtype)

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.EXOTIC_OPTION})

    def validate(self, request: TradeBookingRequest, today: date) -> Outcome:
        return first_failure(ValidationContext(request=request, today=today), self._checks)


# ---------------------------------------------------------------------------
# FX contract (forward / spot)
# ---------------------------------------------------------------------------

_FX = "booking.validators.FXContractValidator"


def _fx_forward_rate(ctx: ValidationContext) -> Outcome:
    rate = ctx.request.forward_rate
    if rate is None:
        return reject("Forward rate is required for FX contracts", "FORWARD_RATE_REQUIRED", _FX)
    if rate <= 0:
        return reject("Forward rate must be positive", "FORWARD_RATE_NOT_POSITIVE", _FX)
    if decimal_places(rate) > MAX_RATE_DECIMALS:
        return reject(
            f"Forward rate cannot have more than {MAX_RATE_DECIMALS} decimal places",
            "FORWARD_RATE_PRECISION", _FX,
        )
    return Ok(None)


def _fx_settlement(ctx: ValidationContext) -> Outcome:
    trade_date = ctx.request.trade_date
    value_date = ctx.request.value_date
    if trade_date is None or value_date is None:
        return reject("Trade date and value date are required for FX contracts", "DATES_REQUIRED", _FX)
    if value_date < add_days(trade_date, MIN_FX_SETTLEMENT_DAYS):
        return reject(
            f"FX forward settlement date must be at least T+{MIN_FX_SETTLEMENT_DAYS}",
            "SETTLEMENT_TOO_EARLY", _FX,
        )
    if value_date > add_years(ctx.today, MAX_FX_FORWARD_YEARS):
        return reject(
            f"FX forward settlement date cannot be more than {MAX_FX_FORWARD_YEARS} years in the future",
            "SETTLEMENT_TOO_FAR", _FX,
        )
    return Ok(None)


def _fx_currencies(ctx: ValidationContext) -> Outcome:
    return _distinct_currencies(
        ctx, "Base and quote currencies must be different for FX contracts", _FX,
    )


@final
class FXContractValidator:
    """FX forwards and spots."""

    _checks: tuple[Check, ...] = (_fx_forward_rate, _fx_settlement, _fx_currencies)

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({ProductType.FX_FORWARD, ProductType.FX_SPOT})

    def validate(self, request: TradeBookingRequest, today: date) -> Outcome:
        return first_failure(ValidationContext(request=request, today=today), self._checks)


# ---------------------------------------------------------------------------
# Swap
# ---------------------------------------------------------------------------

_SWAP = "booking.validators.SwapValidator"


def _swap_common(ctx: ValidationContext) -> Outcome:
    if ctx.request.swap_type is None:
        return reject("Swap type is required for swap products", "SWAP_TYPE_REQUIRED", _SWAP)
    if ctx.request.maturity_date is None:
        return reject("Maturity date is required for swap products", "MATURITY_REQUIRED", _SWAP)
    return _maturity_not_before_value(
        ctx, "Maturity date must be after value date for swaps", _SWAP,
    )


def _fx_swap_rules(ctx: ValidationContext) -> Outcome:
    req = ctx.request
    if req.near_leg_amount is None or req.far_leg_amount is None:
        return reject(
            "Both near leg and far leg amounts are required for FX swaps", "LEG_AMOUNT_REQUIRED", _SWAP,
        )
    if req.near_leg_rate is None or req.far_leg_rate is None:
        return reject(
            "Both near leg and far leg rates are required for FX swaps", "LEG_RATE_REQUIRED", _SWAP,
        )
    if req.near_leg_date is None or req.far_leg_date is None:
        return reject(
            "Both near leg and far leg dates are required for FX swaps", "LEG_DATE_REQUIRED", _SWAP,
        )
    if req.far_leg_date < req.near_leg_date:
        return reject("Far leg date must be after near leg date", "LEG_DATES_REVERSED", _SWAP)
    return Ok(None)


def _currency_swap_rules(ctx: ValidationContext) -> Outcome:
    ordered = _distinct_currencies(
        ctx, "Base and quote currencies must be different for currency swaps", _SWAP,
    )
    if isinstance(ordered, Err):
        return ordered
    if ctx.request.fixed_rate is None:
        return reject("Fixed rate is required for currency swaps", "FIXED_RATE_REQUIRED", _SWAP)
    if is_blank(ctx.request.payment_frequency):
        return reject(
            "Payment frequency is required for currency swaps", "PAYMENT_FREQUENCY_REQUIRED", _SWAP,
        )
    return Ok(None)


@final
class SwapValidator:
    """FX swaps, currency swaps and interest rate swaps.

    The supported floating-rate indices are reference data injected at
    construction; the default set is SOFR, LIBOR, EURIBOR, SONIA and TONAR.
    """

    def __init__(self, supported_indices: Iterable[str] = DEFAULT_FLOATING_RATE_INDICES) -> None:
        self._supported_indices = frozenset(supported_indices)
        self._checks: tuple[Check, ...] = (_swap_common, self._subtype)

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset({
            ProductType.FX_SWAP, ProductType.CURRENCY_SWAP, ProductType.INTEREST_RATE_SWAP,
        })

    @property
    def supported_indices(self) -> frozenset[str]:
        return self._supported_indices

    def validate(self, request: TradeBookingRequest, today: date) -> Outcome:
        return first_failure(ValidationContext(request=request, today=today), self._checks)

    def _subtype(self, ctx: ValidationContext) -> Outcome:
        match ctx.request.swap_type:
            case SwapType.FX_SWAP:
                return _fx_swap_rules(ctx)
            case SwapType.CURRENCY_SWAP:
                return _currency_swap_rules(ctx)
            case SwapType.INTEREST_RATE_SWAP:
                return self._interest_rate_swap_rules(ctx)
            case other:
                name = other.value if isinstance(other, SwapType) else other
                return reject(f"Unsupported swap type: {name}", "UNSUPPORTED_SWAP_TYPE", _SWAP)

    def _interest_rate_swap_rules(self, ctx: ValidationContext) -> Outcome:
        req = ctx.request
        if req.fixed_rate is None:
            return reject(
                "Fixed rate is required for interest rate swaps", "FIXED_RATE_REQUIRED", _SWAP,
            )
        if req.fixed_rate < 0:
            return reject("Fixed rate cannot be negative", "FIXED_RATE_NEGATIVE", _SWAP)
        index = req.floating_rate_index
        if index is None or is_blank(index):
            return reject(
                "Floating rate index is required for interest rate swaps",
                "FLOATING_INDEX_REQUIRED", _SWAP,
            )
        if index not in self._supported_indices:
            supported = ", ".join(sorted(self._supported_indices))
            return reject(
                f"Unsupported floating rate index: {index}. Supported indices: {supported}",
                "FLOATING_INDEX_UNSUPPORTED", _SWAP,
            )
        if is_blank(req.payment_frequency):
            return reject(
                "Payment frequency is required for interest rate swaps",
                "PAYMENT_FREQUENCY_REQUIRED", _SWAP,
            )
        return Ok(None)
