"""Hypothesis profiles and pytest fixtures for the tradebook test suite.

Every test runs against a fixed business date (TODAY, a Monday) so date
rules are deterministic. Two counterparties are seeded: an active one
(id 1) and an inactive one (id 2).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

import pytest
from hypothesis import HealthCheck, settings

from tradebook.booking.counterparties import CounterpartyService
from tradebook.booking.queries import TradeQueryService
from tradebook.booking.service import BookingService
from tradebook.core.types import UtcDatetime
from tradebook.infra.memory_adapter import InMemoryCounterpartyRepository, InMemoryTradeRepository
from tradebook.instrument.types import Counterparty

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# FIXTURES
# ===================================================================

TODAY = date(2025, 6, 16)

ACTIVE_COUNTERPARTY = Counterparty(
    counterparty_id=None, code="ACME", name="Acme Bank", lei_code="529900T8BM49AURSDO55",
)
INACTIVE_COUNTERPARTY = Counterparty(
    counterparty_id=None, code="DORM", name="Dormant Capital", is_active=False,
)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock() -> Callable[[], UtcDatetime]:
    return lambda: UtcDatetime.at(TODAY)


@pytest.fixture
def counterparties() -> InMemoryCounterpartyRepository:
    return InMemoryCounterpartyRepository([ACTIVE_COUNTERPARTY, INACTIVE_COUNTERPARTY])


@pytest.fixture
def trades() -> InMemoryTradeRepository:
    return InMemoryTradeRepository()


@pytest.fixture
def service(
    counterparties: InMemoryCounterpartyRepository,
    trades: InMemoryTradeRepository,
    clock: Callable[[], UtcDatetime],
) -> BookingService:
    return BookingService(counterparties=counterparties, trades=trades, clock=clock)


@pytest.fixture
def queries(
    counterparties: InMemoryCounterpartyRepository, trades: InMemoryTradeRepository,
) -> TradeQueryService:
    return TradeQueryService(trades=trades, counterparties=counterparties)


@pytest.fixture
def counterparty_service(
    counterparties: InMemoryCounterpartyRepository, clock: Callable[[], UtcDatetime],
) -> CounterpartyService:
    return CounterpartyService(counterparties=counterparties, clock=clock)
