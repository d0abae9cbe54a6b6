"""Booking orchestrator: book, re-status and cancel trades.

book_trade runs a fixed sequence and stops at the first failure:

  1. structural validation of the common fields
  2. counterparty lookup (NotFoundError if absent)
  3. counterparty must be active
  4. trade reference must be unused
  5. product validation via the validator registry
  6. trade construction via the factory registry (status PENDING)
  7. save; a DuplicateKeyError from storage means another booking won the
     race for the reference and is reported exactly like step 4

Nothing is retried here. Every failure comes back as an Err value.
"""

from __future__ import annotations

from datetime import date
from typing import final

from tradebook.booking.registries import (
    FactoryRegistry,
    ValidatorRegistry,
    default_factory_registry,
    default_validator_registry,
)
from tradebook.booking.structural import DefaultStructuralValidator, StructuralValidator
from tradebook.booking.views import TradeView, trade_view
from tradebook.core.errors import (
    BusinessRuleViolation,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError,
    business_rule_violation,
    not_found,
)
from tradebook.core.result import Err, Ok
from tradebook.core.types import Clock, UtcDatetime
from tradebook.gateway.types import TradeBookingRequest
from tradebook.infra.config import BookingConfig
from tradebook.infra.protocols import CounterpartyRepository, TradeRepository
from tradebook.instrument.lifecycle import check_cancellable, check_transition
from tradebook.instrument.types import Counterparty, Trade, TradeStatus

type BookingError = NotFoundError | BusinessRuleViolation | PersistenceError


def duplicate_reference(reference: str, source: str) -> BusinessRuleViolation:
    return business_rule_violation(
        f"Trade reference already exists: {reference}", rule="DUPLICATE_REFERENCE", source=source,
    )


def parse_status(raw: TradeStatus | str) -> Ok[TradeStatus] | Err[BusinessRuleViolation]:
    """Accept a TradeStatus or its name; anything else is a rule violation."""
    if isinstance(raw, TradeStatus):
        return Ok(raw)
    try:
        return Ok(TradeStatus(str(raw).strip().upper()))
    except ValueError:
        return Err(business_rule_violation(
            f"Unknown trade status: {raw}", rule="UNKNOWN_STATUS",
            source="booking.service.parse_status",
        ))


@final
class BookingService:
    """Ties validation, dispatch, the status machine and the repositories together.

    All collaborators are injected; the registries are resolved once, here.
    """

    def __init__(
        self,
        *,
        counterparties: CounterpartyRepository,
        trades: TradeRepository,
        config: BookingConfig | None = None,
        structural: StructuralValidator | None = None,
        validators: ValidatorRegistry | None = None,
        factories: FactoryRegistry | None = None,
        clock: Clock = UtcDatetime.now,
    ) -> None:
        self._config = config or BookingConfig()
        self._counterparties = counterparties
        self._trades = trades
        self._structural = structural or DefaultStructuralValidator(self._config)
        self._validators = validators or default_validator_registry(self._config)
        self._factories = factories or default_factory_registry(self._config)
        self._clock = clock

    @property
    def config(self) -> BookingConfig:
        return self._config

    def today(self) -> date:
        return self._clock().date()

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book_trade(self, request: TradeBookingRequest) -> Ok[TradeView] | Err[BookingError]:
        source = "booking.service.book_trade"
        now = self._clock()
        today = now.date()

        match self._structural.validate(request, today):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass
        assert request.counterparty_id is not None
        assert request.trade_reference is not None

        match self._active_counterparty(request.counterparty_id, source):
            case Err(e):
                return Err(e)
            case Ok(counterparty):
                pass

        match self._trades.find_by_reference(request.trade_reference):
            case Err(e):
                return Err(e)
            case Ok(existing):
                if existing is not None:
                    return Err(duplicate_reference(request.trade_reference, source))

        match self._validators.validate(request, today):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass

        match self._factories.create(request, counterparty, now):
            case Err(e):
                return Err(e)
            case Ok(trade):
                pass

        saved = self._trades.save(trade)
        if isinstance(saved, Err):
            if isinstance(saved.error, DuplicateKeyError):
                return Err(duplicate_reference(request.trade_reference, source))
            return Err(saved.error)
        return Ok(trade_view(saved.value))

    def _active_counterparty(
        self, counterparty_id: int, source: str,
    ) -> Ok[Counterparty] | Err[NotFoundError | BusinessRuleViolation | PersistenceError]:
        found = self._counterparties.find_by_id(counterparty_id)
        if isinstance(found, Err):
            return found
        counterparty = found.value
        if counterparty is None:
            return Err(not_found("Counterparty", counterparty_id, source=source))
        if not counterparty.is_active:
            return Err(business_rule_violation(
                f"Cannot trade with inactive counterparty: {counterparty.name}",
                rule="INACTIVE_COUNTERPARTY", source=source,
            ))
        return Ok(counterparty)

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    def update_status(
        self,
        trade_id: int,
        new_status: TradeStatus | str,
        updated_by: str | None = None,
    ) -> Ok[TradeView] | Err[BookingError]:
        """Move a trade to new_status if the status machine allows it."""
        source = "booking.service.update_status"
        match self._load_trade(trade_id, source):
            case Err(e):
                return Err(e)
            case Ok(trade):
                pass
        match parse_status(new_status):
            case Err(e):
                return Err(e)
            case Ok(status):
                pass
        match check_transition(trade.status, status):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass
        return self._store_update(trade.with_status(status, self._clock(), updated_by)).map(trade_view)

    def cancel_trade(
        self, trade_id: int, cancelled_by: str | None = None,
    ) -> Ok[None] | Err[BookingError]:
        """Cancel a PENDING trade on its own trade date."""
        source = "booking.service.cancel_trade"
        now = self._clock()
        match self._load_trade(trade_id, source):
            case Err(e):
                return Err(e)
            case Ok(trade):
                pass
        match check_cancellable(trade, now.date()):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass
        match check_transition(trade.status, TradeStatus.CANCELLED):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass
        return self._store_update(trade.with_status(TradeStatus.CANCELLED, now, cancelled_by)).map(
            lambda _: None,
        )

    def _load_trade(
        self, trade_id: int, source: str,
    ) -> Ok[Trade] | Err[NotFoundError | PersistenceError]:
        found = self._trades.find_by_id(trade_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found("Trade", trade_id, source=source))
        return Ok(found.value)

    def _store_update(self, trade: Trade) -> Ok[Trade] | Err[PersistenceError]:
        saved = self._trades.save(trade)
        if isinstance(saved, Err) and isinstance(saved.error, DuplicateKeyError):
            e = saved.error
            # Updates never insert, so a key clash here means storage is inconsistent.
            return Err(PersistenceError(
                message=e.message, code="PERSISTENCE_ERROR", timestamp=e.timestamp,
                source=e.source, operation="save",
            ))
        return saved
