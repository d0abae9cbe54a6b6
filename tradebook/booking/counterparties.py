"""Counterparty maintenance: register, look up, list and deactivate.

Codes are normalized to upper case and must match [A-Z0-9]{3,10}. Optional
LEI and SWIFT/BIC codes are validated with the identifier newtypes. Codes
and LEIs are unique; the repository enforces that atomically and this
service reports the clash as a BusinessRuleViolation.
"""

from __future__ import annotations

import re
from typing import final

from tradebook.booking.structural import is_blank
from tradebook.booking.views import CounterpartyView, counterparty_view
from tradebook.core.errors import (
    BusinessRuleViolation,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError,
    business_rule_violation,
    not_found,
)
from tradebook.core.identifiers import BIC, LEI
from tradebook.core.result import Err, Ok
from tradebook.core.types import Clock, UtcDatetime
from tradebook.gateway.types import CounterpartyRequest
from tradebook.infra.protocols import CounterpartyRepository
from tradebook.instrument.types import Counterparty

type CounterpartyError = NotFoundError | BusinessRuleViolation | PersistenceError

_CODE_PATTERN = re.compile(r"^[A-Z0-9]{3,10}$")
MAX_NAME_LENGTH = 100
MAX_CREDIT_RATING_LENGTH = 10


def _normalize(request: CounterpartyRequest) -> CounterpartyRequest:
    def _opt(value: str | None) -> str | None:
        return value.strip().upper() if value is not None and value.strip() else None

    return CounterpartyRequest(
        code=request.code.strip().upper(),
        name=request.name.strip(),
        lei_code=_opt(request.lei_code),
        swift_code=_opt(request.swift_code),
        credit_rating=request.credit_rating.strip() if request.credit_rating else None,
    )


def validate_counterparty_request(
    request: CounterpartyRequest,
) -> Ok[CounterpartyRequest] | Err[BusinessRuleViolation]:
    """Normalize and check a registration request. Fail-fast."""
    source = "booking.counterparties.validate_counterparty_request"
    if is_blank(request.code):
        return Err(business_rule_violation(
            "Counterparty code is required", rule="CODE_REQUIRED", source=source,
        ))
    if is_blank(request.name):
        return Err(business_rule_violation(
            "Counterparty name is required", rule="NAME_REQUIRED", source=source,
        ))
    req = _normalize(request)
    if _CODE_PATTERN.match(req.code) is None:
        return Err(business_rule_violation(
            "Counterparty code must be 3-10 uppercase alphanumeric characters",
            rule="CODE_FORMAT", source=source,
        ))
    if len(req.name) > MAX_NAME_LENGTH:
        return Err(business_rule_violation(
            f"Counterparty name cannot exceed {MAX_NAME_LENGTH} characters",
            rule="NAME_TOO_LONG", source=source,
        ))
    if req.lei_code is not None:
        match LEI.parse(req.lei_code):
            case Err(reason):
                return Err(business_rule_violation(reason, rule="LEI_FORMAT", source=source))
            case Ok(_):
                pass
    if req.swift_code is not None:
        match BIC.parse(req.swift_code):
            case Err(reason):
                return Err(business_rule_violation(reason, rule="SWIFT_FORMAT", source=source))
            case Ok(_):
                pass
    if req.credit_rating is not None and len(req.credit_rating) > MAX_CREDIT_RATING_LENGTH:
        return Err(business_rule_violation(
            f"Credit rating cannot exceed {MAX_CREDIT_RATING_LENGTH} characters",
            rule="CREDIT_RATING_TOO_LONG", source=source,
        ))
    return Ok(req)


@final
class CounterpartyService:
    def __init__(
        self, *, counterparties: CounterpartyRepository, clock: Clock = UtcDatetime.now,
    ) -> None:
        self._counterparties = counterparties
        self._clock = clock

    def create_counterparty(
        self, request: CounterpartyRequest,
    ) -> Ok[CounterpartyView] | Err[CounterpartyError]:
        source = "booking.counterparties.create_counterparty"
        match validate_counterparty_request(request):
            case Err(e):
                return Err(e)
            case Ok(req):
                pass

        by_code = self._counterparties.find_by_code(req.code)
        if isinstance(by_code, Err):
            return by_code
        if by_code.value is not None:
            return Err(business_rule_violation(
                f"Counterparty code already exists: {req.code}",
                rule="DUPLICATE_CODE", source=source,
            ))
        if req.lei_code is not None:
            by_lei = self._counterparties.find_by_lei(req.lei_code)
            if isinstance(by_lei, Err):
                return by_lei
            if by_lei.value is not None:
                return Err(business_rule_violation(
                    f"LEI code already exists: {req.lei_code}",
                    rule="DUPLICATE_LEI", source=source,
                ))

        saved = self._counterparties.save(Counterparty(
            counterparty_id=None,
            code=req.code,
            name=req.name,
            is_active=True,
            lei_code=req.lei_code,
            swift_code=req.swift_code,
            credit_rating=req.credit_rating,
            created_at=self._clock(),
        ))
        if isinstance(saved, Err):
            if isinstance(saved.error, DuplicateKeyError):
                return Err(business_rule_violation(
                    saved.error.message, rule="DUPLICATE_CODE", source=source,
                ))
            return Err(saved.error)
        return Ok(counterparty_view(saved.value))

    def get_counterparty(self, counterparty_id: int) -> Ok[CounterpartyView] | Err[CounterpartyError]:
        found = self._counterparties.find_by_id(counterparty_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found(
                "Counterparty", counterparty_id, source="booking.counterparties.get_counterparty",
            ))
        return Ok(counterparty_view(found.value))

    def get_counterparty_by_code(self, code: str) -> Ok[CounterpartyView] | Err[CounterpartyError]:
        normalized = code.strip().upper()
        found = self._counterparties.find_by_code(normalized)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found(
                "Counterparty", normalized,
                source="booking.counterparties.get_counterparty_by_code", by="code",
            ))
        return Ok(counterparty_view(found.value))

    def list_active_counterparties(
        self,
    ) -> Ok[tuple[CounterpartyView, ...]] | Err[PersistenceError]:
        listed = self._counterparties.list_active()
        if isinstance(listed, Err):
            return listed
        return Ok(tuple(counterparty_view(cp) for cp in sorted(listed.value, key=lambda c: c.code)))

    def deactivate_counterparty(
        self, counterparty_id: int,
    ) -> Ok[CounterpartyView] | Err[CounterpartyError]:
        """Mark a counterparty inactive. New bookings against it are then refused."""
        source = "booking.counterparties.deactivate_counterparty"
        found = self._counterparties.find_by_id(counterparty_id)
        if isinstance(found, Err):
            return found
        counterparty = found.value
        if counterparty is None:
            return Err(not_found("Counterparty", counterparty_id, source=source))
        if not counterparty.is_active:
            return Err(business_rule_violation(
                "Counterparty is already inactive", rule="ALREADY_INACTIVE", source=source,
            ))
        saved = self._counterparties.save(counterparty.deactivated())
        if isinstance(saved, Err):
            if isinstance(saved.error, DuplicateKeyError):
                return Err(PersistenceError(
                    message=saved.error.message, code="PERSISTENCE_ERROR",
                    timestamp=saved.error.timestamp, source=source, operation="save",
                ))
            return Err(saved.error)
        return Ok(counterparty_view(saved.value))
