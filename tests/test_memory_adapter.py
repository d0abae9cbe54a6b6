"""Tests for tradebook.infra.memory_adapter: in-memory repositories."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from tradebook.core.errors import DuplicateKeyError, PersistenceError
from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime
from tradebook.infra.memory_adapter import InMemoryCounterpartyRepository, InMemoryTradeRepository
from tradebook.infra.protocols import CounterpartyRepository, TradeRepository
from tradebook.instrument.types import (
    Counterparty,
    FXContractDetail,
    ProductType,
    Trade,
    TradeStatus,
)


def _trade(reference: str = "FWD-001", **overrides: object) -> Trade:
    trade = Trade(
        trade_id=None,
        trade_reference=reference,
        counterparty_id=1,
        product_type=ProductType.FX_FORWARD,
        base_currency="EUR",
        quote_currency="USD",
        notional_amount=Decimal("5000000"),
        trade_date=date(2025, 6, 16),
        value_date=date(2025, 9, 16),
        maturity_date=None,
        status=TradeStatus.PENDING,
        detail=FXContractDetail(forward_rate=Decimal("1.0950"), is_spot=False),
        created_by="trader1",
        created_at=UtcDatetime.at(date(2025, 6, 16)),
    )
    return replace(trade, **overrides)


class TestProtocolConformance:
    def test_trade_repository(self) -> None:
        assert isinstance(InMemoryTradeRepository(), TradeRepository)

    def test_counterparty_repository(self) -> None:
        assert isinstance(InMemoryCounterpartyRepository(), CounterpartyRepository)


class TestInMemoryTradeRepository:
    def test_insert_assigns_sequential_ids(self) -> None:
        repo = InMemoryTradeRepository()
        first = repo.save(_trade("A"))
        second = repo.save(_trade("B"))
        assert isinstance(first, Ok) and isinstance(second, Ok)
        assert (first.value.trade_id, second.value.trade_id) == (1, 2)

    def test_duplicate_reference_rejected(self) -> None:
        repo = InMemoryTradeRepository()
        repo.save(_trade())
        result = repo.save(_trade())
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicateKeyError)
        assert result.error.key == "FWD-001"
        assert repo.count() == 1

    def test_update_replaces(self) -> None:
        repo = InMemoryTradeRepository()
        saved = repo.save(_trade())
        assert isinstance(saved, Ok)
        moved = saved.value.with_status(TradeStatus.CONFIRMED, UtcDatetime.now(), "ops")
        assert isinstance(repo.save(moved), Ok)
        found = repo.find_by_reference("FWD-001")
        assert isinstance(found, Ok)
        assert found.value is not None
        assert found.value.status is TradeStatus.CONFIRMED
        assert repo.count() == 1

    def test_update_unknown_id(self) -> None:
        result = InMemoryTradeRepository().save(_trade(trade_id=9))
        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)

    def test_reference_is_immutable(self) -> None:
        repo = InMemoryTradeRepository()
        saved = repo.save(_trade())
        assert isinstance(saved, Ok)
        result = repo.save(replace(saved.value, trade_reference="OTHER"))
        assert isinstance(result, Err)
        assert "immutable" in result.error.message

    def test_missing_lookups_are_none(self) -> None:
        repo = InMemoryTradeRepository()
        assert repo.find_by_id(1) == Ok(None)
        assert repo.find_by_reference("X") == Ok(None)

    def test_listings(self) -> None:
        repo = InMemoryTradeRepository()
        repo.save(_trade("A"))
        repo.save(_trade("B", quote_currency="JPY", trade_date=date(2025, 6, 13), counterparty_id=2))
        by_ccy = repo.list_by_currency("JPY")
        assert isinstance(by_ccy, Ok)
        assert [t.trade_reference for t in by_ccy.value] == ["B"]
        by_range = repo.list_by_trade_date_range(date(2025, 6, 16), date(2025, 6, 16))
        assert isinstance(by_range, Ok)
        assert [t.trade_reference for t in by_range.value] == ["A"]
        by_cp = repo.list_by_counterparty(2)
        assert isinstance(by_cp, Ok)
        assert len(by_cp.value) == 1

    def test_concurrent_duplicate_inserts_keep_one(self) -> None:
        repo = InMemoryTradeRepository()
        barrier = threading.Barrier(8)
        outcomes: list[object] = []
        guard = threading.Lock()

        def book() -> None:
            barrier.wait()
            result = repo.save(_trade("RACE-1"))
            with guard:
                outcomes.append(result)

        threads = [threading.Thread(target=book) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(isinstance(o, Ok) for o in outcomes) == 1
        assert sum(isinstance(o, Err) and isinstance(o.error, DuplicateKeyError) for o in outcomes) == 7
        assert repo.count() == 1


class TestInMemoryCounterpartyRepository:
    def test_seeding_assigns_ids(self) -> None:
        repo = InMemoryCounterpartyRepository([
            Counterparty(counterparty_id=None, code="ACME", name="Acme Bank"),
        ])
        found = repo.find_by_code("ACME")
        assert isinstance(found, Ok)
        assert found.value is not None
        assert found.value.counterparty_id == 1
        assert found.value.created_at is not None

    def test_seeding_duplicates_raises(self) -> None:
        cp = Counterparty(counterparty_id=None, code="ACME", name="Acme Bank")
        with pytest.raises(ValueError, match="Cannot seed counterparty ACME"):
            InMemoryCounterpartyRepository([cp, cp])

    def test_duplicate_lei_rejected(self) -> None:
        lei = "529900T8BM49AURSDO55"
        repo = InMemoryCounterpartyRepository([
            Counterparty(counterparty_id=None, code="ACME", name="Acme Bank", lei_code=lei),
        ])
        result = repo.save(Counterparty(counterparty_id=None, code="OTHR", name="Other", lei_code=lei))
        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicateKeyError)
        assert result.error.key == lei

    def test_update_keeps_own_code(self) -> None:
        repo = InMemoryCounterpartyRepository([
            Counterparty(counterparty_id=None, code="ACME", name="Acme Bank"),
        ])
        found = repo.find_by_id(1)
        assert isinstance(found, Ok)
        assert found.value is not None
        assert isinstance(repo.save(found.value.deactivated()), Ok)
        active = repo.list_active()
        assert active == Ok(())
        everything = repo.list_all()
        assert isinstance(everything, Ok)
        assert len(everything.value) == 1

    def test_update_unknown_id(self) -> None:
        result = InMemoryCounterpartyRepository().save(
            Counterparty(counterparty_id=5, code="ACME", name="Acme Bank"),
        )
        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)
