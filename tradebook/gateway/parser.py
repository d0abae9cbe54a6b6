"""Gateway parser: raw dict to TradeBookingRequest / CounterpartyRequest.

parse_booking_request is the single entry point for loosely-typed booking
payloads (JSON bodies, queue messages). It is total: it always returns Ok
or Err and never raises. Absent keys become None; only values that are
present but malformed produce a FieldViolation.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from tradebook.core.errors import BusinessRuleViolation, FieldViolation
from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime
from tradebook.gateway.types import CounterpartyRequest, TradeBookingRequest
from tradebook.instrument.types import ExoticOptionType, OptionType, ProductType, SwapType

_STR_FIELDS = (
    "trade_reference", "base_currency", "quote_currency", "created_by",
    "premium_currency", "knock_in_out", "observation_frequency",
    "floating_rate_index", "payment_frequency",
)
_DECIMAL_FIELDS = (
    "notional_amount", "strike_price", "premium_amount", "spot_rate",
    "barrier_level", "forward_rate", "near_leg_amount", "far_leg_amount",
    "near_leg_rate", "far_leg_rate", "fixed_rate",
)
_DATE_FIELDS = ("trade_date", "value_date", "maturity_date", "near_leg_date", "far_leg_date")
_ENUM_FIELDS: tuple[tuple[str, type[Enum]], ...] = (
    ("product_type", ProductType),
    ("option_type", OptionType),
    ("exotic_option_type", ExoticOptionType),
    ("swap_type", SwapType),
)


def _extract_str(
    raw: dict[str, object], key: str, violations: list[FieldViolation],
) -> str | None:
    val = raw.get(key)
    if val is None or isinstance(val, str):
        return val
    violations.append(FieldViolation(path=key, constraint="must be a string", actual_value=repr(val)))
    return None


def _extract_int(
    raw: dict[str, object], key: str, violations: list[FieldViolation],
) -> int | None:
    val = raw.get(key)
    if val is None:
        return None
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    if isinstance(val, str) and val.strip().lstrip("-").isdecimal():
        return int(val)
    violations.append(FieldViolation(path=key, constraint="must be an integer", actual_value=repr(val)))
    return None


def _extract_date(
    raw: dict[str, object], key: str, violations: list[FieldViolation],
) -> date | None:
    val = raw.get(key)
    if val is None:
        return None
    if isinstance(val, date) and not isinstance(val, datetime):
        return val
    if isinstance(val, str):
        try:
            return date.fromisoformat(val)
        except ValueError:
            pass
    violations.append(FieldViolation(
        path=key, constraint="must be an ISO date (YYYY-MM-DD)", actual_value=repr(val),
    ))
    return None


def _extract_decimal(
    raw: dict[str, object], key: str, violations: list[FieldViolation],
) -> Decimal | None:
    val = raw.get(key)
    if val is None:
        return None
    if isinstance(val, Decimal) and val.is_finite():
        return val
    if isinstance(val, (int, str)) and not isinstance(val, bool):
        try:
            parsed = Decimal(str(val).strip())
        except InvalidOperation:
            parsed = None
        if parsed is not None and parsed.is_finite():
            return parsed
    violations.append(FieldViolation(
        path=key, constraint="must be a finite decimal number", actual_value=repr(val),
    ))
    return None


def _extract_enum[E: Enum](
    raw: dict[str, object], key: str, enum_type: type[E], violations: list[FieldViolation],
) -> E | None:
    val = raw.get(key)
    if val is None:
        return None
    if isinstance(val, enum_type):
        return val
    if isinstance(val, str):
        try:
            return enum_type(val.strip().upper())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_type)
    violations.append(FieldViolation(
        path=key, constraint=f"must be one of {allowed}", actual_value=repr(val),
    ))
    return None


def _parse_failure(source: str, violations: list[FieldViolation]) -> BusinessRuleViolation:
    return BusinessRuleViolation(
        message=f"{source.rsplit('.', 1)[-1]} failed: {len(violations)} field error(s)",
        code="GATEWAY_PARSE",
        timestamp=UtcDatetime.now(),
        source=source,
        rule="MALFORMED_FIELD",
        fields=tuple(violations),
    )


def parse_booking_request(
    raw: dict[str, object],
) -> Ok[TradeBookingRequest] | Err[BusinessRuleViolation]:
    """Parse a raw dict into a TradeBookingRequest.

    Unknown enum names (product type, option type, ...) are reported as
    malformed fields. Unknown keys are ignored.
    """
    violations: list[FieldViolation] = []
    values: dict[str, Any] = {}

    for key in _STR_FIELDS:
        values[key] = _extract_str(raw, key, violations)
    for key in _DECIMAL_FIELDS:
        values[key] = _extract_decimal(raw, key, violations)
    for key in _DATE_FIELDS:
        values[key] = _extract_date(raw, key, violations)
    for key, enum_type in _ENUM_FIELDS:
        values[key] = _extract_enum(raw, key, enum_type, violations)
    values["counterparty_id"] = _extract_int(raw, "counterparty_id", violations)

    if violations:
        return Err(_parse_failure("gateway.parser.parse_booking_request", violations))
    return Ok(TradeBookingRequest(**values))


def parse_counterparty_request(
    raw: dict[str, object],
) -> Ok[CounterpartyRequest] | Err[BusinessRuleViolation]:
    """Parse a raw dict into a CounterpartyRequest. code and name are required."""
    violations: list[FieldViolation] = []
    code = _extract_str(raw, "code", violations)
    name = _extract_str(raw, "name", violations)
    for key in ("code", "name"):
        if raw.get(key) is None:
            violations.append(FieldViolation(
                path=key, constraint="required string", actual_value=repr(raw.get(key)),
            ))
    lei_code = _extract_str(raw, "lei_code", violations)
    swift_code = _extract_str(raw, "swift_code", violations)
    credit_rating = _extract_str(raw, "credit_rating", violations)

    if violations:
        return Err(_parse_failure("gateway.parser.parse_counterparty_request", violations))
    assert code is not None
    assert name is not None
    return Ok(CounterpartyRequest(
        code=code,
        name=name,
        lei_code=lei_code,
        swift_code=swift_code,
        credit_rating=credit_rating,
    ))


def request_to_dict(request: TradeBookingRequest) -> dict[str, Any]:
    """Serialize a TradeBookingRequest to a raw dict; parse_booking_request inverts it."""
    out: dict[str, Any] = {}
    for key in _STR_FIELDS:
        out[key] = getattr(request, key)
    for key in _DECIMAL_FIELDS:
        val = getattr(request, key)
        out[key] = str(val) if val is not None else None
    for key in _DATE_FIELDS:
        val = getattr(request, key)
        out[key] = val.isoformat() if val is not None else None
    for key, _ in _ENUM_FIELDS:
        val = getattr(request, key)
        out[key] = val.value if val is not None else None
    out["counterparty_id"] = request.counterparty_id
    return out
