"""In-memory implementations of the repository protocols.

Test doubles and single-process deployments. Both classes are @final and
serialize writes with a lock, so the unique-key check and the insert are
one atomic step.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date
from typing import final

from tradebook.core.errors import DuplicateKeyError, PersistenceError
from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime
from tradebook.instrument.types import Counterparty, ProductType, Trade, TradeStatus


def _persistence_error(operation: str, detail: str) -> PersistenceError:
    """Helper to construct PersistenceError with consistent formatting."""
    return PersistenceError(
        message=detail,
        code="PERSISTENCE_ERROR",
        timestamp=UtcDatetime.now(),
        source=f"memory_adapter.{operation}",
        operation=operation,
    )


def _duplicate_key(operation: str, key: str, detail: str) -> DuplicateKeyError:
    return DuplicateKeyError(
        message=detail,
        code="DUPLICATE_KEY",
        timestamp=UtcDatetime.now(),
        source=f"memory_adapter.{operation}",
        key=key,
    )


@final
class InMemoryCounterpartyRepository:
    """Counterparties keyed by id, with unique code and LEI."""

    def __init__(self, counterparties: Iterable[Counterparty] = ()) -> None:
        self._lock = threading.Lock()
        self._store: dict[int, Counterparty] = {}
        self._next_id = 1
        for cp in counterparties:
            match self.save(cp):
                case Err(e):
                    raise ValueError(f"Cannot seed counterparty {cp.code}: {e.message}")
                case Ok(_):
                    pass

    def find_by_id(self, counterparty_id: int) -> Ok[Counterparty | None] | Err[PersistenceError]:
        return Ok(self._store.get(counterparty_id))

    def find_by_code(self, code: str) -> Ok[Counterparty | None] | Err[PersistenceError]:
        return Ok(next((cp for cp in self._store.values() if cp.code == code), None))

    def find_by_lei(self, lei_code: str) -> Ok[Counterparty | None] | Err[PersistenceError]:
        return Ok(next((cp for cp in self._store.values() if cp.lei_code == lei_code), None))

    def list_active(self) -> Ok[tuple[Counterparty, ...]] | Err[PersistenceError]:
        return Ok(tuple(cp for cp in self._store.values() if cp.is_active))

    def list_all(self) -> Ok[tuple[Counterparty, ...]] | Err[PersistenceError]:
        return Ok(tuple(self._store.values()))

    def save(
        self, counterparty: Counterparty,
    ) -> Ok[Counterparty] | Err[PersistenceError | DuplicateKeyError]:
        """Insert (no id) or replace (known id). Codes and LEIs stay unique."""
        with self._lock:
            cid = counterparty.counterparty_id
            if cid is not None and cid not in self._store:
                return Err(_persistence_error(
                    "save", f"Counterparty {cid} does not exist; cannot update",
                ))
            for other in self._store.values():
                if other.counterparty_id == cid:
                    continue
                if other.code == counterparty.code:
                    return Err(_duplicate_key(
                        "save", counterparty.code,
                        f"Counterparty code already exists: {counterparty.code}",
                    ))
                if counterparty.lei_code is not None and other.lei_code == counterparty.lei_code:
                    return Err(_duplicate_key(
                        "save", counterparty.lei_code,
                        f"LEI code already exists: {counterparty.lei_code}",
                    ))
            if cid is None:
                cid = self._next_id
                self._next_id += 1
                counterparty = replace(
                    counterparty,
                    counterparty_id=cid,
                    created_at=counterparty.created_at or UtcDatetime.now(),
                )
            self._store[cid] = counterparty
            return Ok(counterparty)

    def count(self) -> int:
        """Test-only helper."""
        return len(self._store)


@final
class InMemoryTradeRepository:
    """Trades keyed by id, with a unique trade_reference index."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._store: dict[int, Trade] = {}
        self._by_reference: dict[str, int] = {}
        self._next_id = 1

    def find_by_id(self, trade_id: int) -> Ok[Trade | None] | Err[PersistenceError]:
        return Ok(self._store.get(trade_id))

    def find_by_reference(self, trade_reference: str) -> Ok[Trade | None] | Err[PersistenceError]:
        tid = self._by_reference.get(trade_reference)
        return Ok(self._store.get(tid) if tid is not None else None)

    def save(self, trade: Trade) -> Ok[Trade] | Err[PersistenceError | DuplicateKeyError]:
        with self._lock:
            if trade.trade_id is None:
                if trade.trade_reference in self._by_reference:
                    return Err(_duplicate_key(
                        "save", trade.trade_reference,
                        f"Duplicate trade_reference: {trade.trade_reference}",
                    ))
                tid = self._next_id
                self._next_id += 1
                stored = trade.with_id(tid)
                self._store[tid] = stored
                self._by_reference[stored.trade_reference] = tid
                return Ok(stored)

            previous = self._store.get(trade.trade_id)
            if previous is None:
                return Err(_persistence_error(
                    "save", f"Trade {trade.trade_id} does not exist; cannot update",
                ))
            if previous.trade_reference != trade.trade_reference:
                return Err(_persistence_error(
                    "save", f"Trade {trade.trade_id}: trade_reference is immutable",
                ))
            self._store[trade.trade_id] = trade
            return Ok(trade)

    def _select(self, predicate: Callable[[Trade], bool]) -> Ok[tuple[Trade, ...]]:
        return Ok(tuple(t for t in self._store.values() if predicate(t)))

    def list_by_status(self, status: TradeStatus) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]:
        return self._select(lambda t: t.status is status)

    def list_by_trade_date_range(
        self, start: date, end: date,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]:
        """Trades whose trade_date lies in [start, end]."""
        return self._select(lambda t: start <= t.trade_date <= end)

    def list_by_currency(self, currency: str) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]:
        """Trades with currency on either side of the pair."""
        return self._select(lambda t: currency in (t.base_currency, t.quote_currency))

    def list_by_product_type(
        self, product_type: ProductType,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]:
        return self._select(lambda t: t.product_type is product_type)

    def list_by_counterparty(
        self, counterparty_id: int,
    ) -> Ok[tuple[Trade, ...]] | Err[PersistenceError]:
        return self._select(lambda t: t.counterparty_id == counterparty_id)

    def count(self) -> int:
        """Test-only helper."""
        return len(self._store)

    def all_trades(self) -> tuple[Trade, ...]:
        """Test-only helper."""
        return tuple(self._store.values())
