"""Generic structural validation of a booking request.

Runs before any counterparty lookup or product rule. Checks only the
common fields: presence, lengths, finite amounts, notional bounds and
date ordering.
Fail-fast: the first broken rule is reported.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Protocol, final, runtime_checkable

from tradebook.core.calendar import add_days
from tradebook.core.errors import BusinessRuleViolation, business_rule_violation
from tradebook.core.result import Err, Ok, first_failure
from tradebook.gateway.types import TradeBookingRequest
from tradebook.infra.config import BookingConfig
from tradebook.instrument.types import ProductType, product_type_name


@final
@dataclass(frozen=True, slots=True)
class ValidationContext:
    """What a rule sees: the request plus the business date it is judged on."""

    request: TradeBookingRequest
    today: date


type Check = Callable[[ValidationContext], Ok[None] | Err[BusinessRuleViolation]]


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def reject(message: str, rule: str, source: str) -> Err[BusinessRuleViolation]:
    return Err(business_rule_violation(message, rule=rule, source=source))


@runtime_checkable
class StructuralValidator(Protocol):
    def validate(
        self, request: TradeBookingRequest, today: date,
    ) -> Ok[None] | Err[BusinessRuleViolation]: ...


_SOURCE = "booking.structural.validate"
_BILLION = Decimal("1000000000")


def _maximum_notional_message(limit: Decimal) -> str:
    billions, rest = divmod(limit, _BILLION)
    if billions and not rest:
        return f"Maximum notional amount is {billions:,} billion"
    return f"Maximum notional amount is {limit:,}"


@final
class DefaultStructuralValidator:
    """Common-field rules, parameterized by BookingConfig limits."""

    def __init__(self, config: BookingConfig | None = None) -> None:
        self._config = config or BookingConfig()
        self._checks: tuple[Check, ...] = (
            self._product_type,
            self._reference,
            self._counterparty,
            self._currencies,
            self._finite_amounts,
            self._notional,
            self._dates,
            self._creator,
        )

    def validate(
        self, request: TradeBookingRequest, today: date,
    ) -> Ok[None] | Err[BusinessRuleViolation]:
        return first_failure(ValidationContext(request=request, today=today), self._checks)

    # --- Rules, in evaluation order ---

    def _product_type(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        if ctx.request.product_type is None:
            return reject("Product type is required", "PRODUCT_TYPE_REQUIRED", _SOURCE)
        if not isinstance(ctx.request.product_type, ProductType):
            return reject(
                f"Unsupported product type: {product_type_name(ctx.request.product_type)}",
                "UNSUPPORTED_PRODUCT", _SOURCE,
            )
        return Ok(None)

    def _reference(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        ref = ctx.request.trade_reference
        if ref is None or is_blank(ref):
            return reject("Trade reference is required", "REFERENCE_REQUIRED", _SOURCE)
        limit = self._config.max_reference_length
        if len(ref) > limit:
            return reject(
                f"Trade reference cannot exceed {limit} characters", "REFERENCE_TOO_LONG", _SOURCE,
            )
        return Ok(None)

    def _counterparty(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        cid = ctx.request.counterparty_id
        if cid is None or cid <= 0:
            return reject("Valid counterparty ID is required", "COUNTERPARTY_REQUIRED", _SOURCE)
        return Ok(None)

    def _currencies(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        for label, code in (
            ("Base currency", ctx.request.base_currency),
            ("Quote currency", ctx.request.quote_currency),
        ):
            if code is None or is_blank(code):
                return reject(f"{label} is required", "CURRENCY_REQUIRED", _SOURCE)
            if len(code) != 3:
                return reject(
                    f"{label} must be exactly 3 characters", "CURRENCY_FORMAT", _SOURCE,
                )
        return Ok(None)

    def _finite_amounts(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        # NaN cannot be ordered, so later comparisons would raise.
        for f in fields(ctx.request):
            value = getattr(ctx.request, f.name)
            if isinstance(value, Decimal) and not value.is_finite():
                label = f.name.replace("_", " ").capitalize()
                return reject(f"{label} must be a finite number", "NON_FINITE_AMOUNT", _SOURCE)
        return Ok(None)

    def _notional(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        notional = ctx.request.notional_amount
        if notional is None:
            return reject("Notional amount is required", "NOTIONAL_REQUIRED", _SOURCE)
        if notional < self._config.min_notional:
            return reject(
                f"Minimum notional amount is {self._config.min_notional:,}",
                "NOTIONAL_TOO_SMALL", _SOURCE,
            )
        if notional > self._config.max_notional:
            return reject(
                _maximum_notional_message(self._config.max_notional),
                "NOTIONAL_TOO_LARGE", _SOURCE,
            )
        return Ok(None)

    def _dates(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        trade_date = ctx.request.trade_date
        value_date = ctx.request.value_date
        if trade_date is None:
            return reject("Trade date is required", "TRADE_DATE_REQUIRED", _SOURCE)
        if value_date is None:
            return reject("Value date is required", "VALUE_DATE_REQUIRED", _SOURCE)
        lead = self._config.max_trade_date_lead_days
        if trade_date > add_days(ctx.today, lead):
            return reject(
                f"Trade date cannot be more than {lead} days in the future",
                "TRADE_DATE_TOO_FAR", _SOURCE,
            )
        if value_date < trade_date:
            return reject(
                "Value date must be on or after trade date", "VALUE_BEFORE_TRADE", _SOURCE,
            )
        return Ok(None)

    def _creator(self, ctx: ValidationContext) -> Ok[None] | Err[BusinessRuleViolation]:
        if is_blank(ctx.request.created_by):
            return reject("Created by field is required", "CREATOR_REQUIRED", _SOURCE)
        return Ok(None)
