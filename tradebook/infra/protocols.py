"""Repository protocols for counterparties and trades.

Booking code depends on these abstractions; storage adapters implement them.

Every method returns Ok[T] | Err[PersistenceError]. Storage failures are
visible values in the type system, never invisible exceptions. The one
exception to the error type is TradeRepository.save, which also reports a
unique-reference clash as DuplicateKeyError so callers can tell it apart
from an outage.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable

from tradebook.core.errors import DuplicateKeyError, PersistenceError
from tradebook.core.result import Err, Ok
from tradebook.instrument.types import Counterparty, ProductType, Trade, TradeStatus


@runtime_checkable
class CounterpartyRepository(Protocol):
    """Counterparty storage. Codes are unique."""

    def find_by_id(
        self, counterparty_id: int,
    ) -> Ok[Counterparty | None] | Err[PersistenceError]: ...

    def find_by_code(
        self, code: str,
    ) -> Ok[Counterparty | None] | Err[PersistenceError]: ...

    def find_by_lei(
        self, lei_code: str,
    ) -> Ok[Counterparty | None] | Err[PersistenceError]: ...

    def list_active(self) -> Ok[tuple[Counterparty, ...]] | Err[PersistenceError]: ...

    def list_all(self) -> Ok[tuple[Counterparty, ...]] | Err[PersistenceError]: ...

    def save(
        self, counterparty: Counterparty,
    ) -> Ok[Counterparty] | Err[PersistenceError | DuplicateKeyError]: ...


@runtime_checkable
class TradeRepository(Protocol):
    """Trade storage.

    Invariants:
      - save() of a trade without trade_id inserts it, assigns an id and
        returns the stored value.
      - save() of a trade with trade_id replaces the stored value.
      - trade_reference is unique: an insert whose reference is already
        stored returns Err(DuplicateKeyError), even under concurrent callers.
    """

    def find_by_id(self, trade_id: int) -> Ok[Trade | None] | Err[PersistenceError]: ...

    def find_by_reference(
        self, trade_reference: str,
    ) -> Ok[Trade | None] | Err[PersistenceError]: ...

    def save(self, trade: Trade) -> Ok[Trade] | Err[PersistenceError | DuplicateKeyError]: ...

    def list_by_status(
        self, status: TradeStatus,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]: ...

    def list_by_trade_date_range(
        self, start: date, end: date,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]: ...

    def list_by_currency(
        self, currency: str,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]: ...

    def list_by_product_type(
        self, product_type: ProductType,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]: ...

    def list_by_counterparty(
        self, counterparty_id: int,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]: ...
