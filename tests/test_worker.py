"""Tests for tradebook.workflow.worker wiring."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from temporalio.testing import WorkflowEnvironment

from tradebook.gateway.types import TradeBookingRequest
from tradebook.infra.config import BookingConfig
from tradebook.infra.memory_adapter import InMemoryCounterpartyRepository, InMemoryTradeRepository
from tradebook.instrument.types import Counterparty, ProductType
from tradebook.workflow.activities import BookingActivities
from tradebook.workflow.booking_workflow import TradeBookingWorkflow
from tradebook.workflow.converter import TRADEBOOK_DATA_CONVERTER
from tradebook.workflow.types import BookTradeInput
from tradebook.workflow.worker import WORKFLOWS, build_activities, build_worker


def test_build_activities_defaults_to_empty_memory_storage() -> None:
    assert isinstance(build_activities(), BookingActivities)


def test_workflows_registered() -> None:
    assert {w.__name__ for w in WORKFLOWS} == {
        "TradeBookingWorkflow", "TradeStatusWorkflow", "TradeCancellationWorkflow",
    }


@pytest.mark.asyncio
async def test_built_worker_books_against_injected_storage() -> None:
    trades = InMemoryTradeRepository()
    acts = build_activities(
        counterparties=InMemoryCounterpartyRepository([
            Counterparty(counterparty_id=None, code="ACME", name="Acme Bank"),
        ]),
        trades=trades,
        config=BookingConfig(),
    )
    # Real clock: trade today so the trade-date window always holds.
    today = date.today()
    request = TradeBookingRequest(
        product_type=ProductType.FX_FORWARD,
        trade_reference="WRK-001",
        counterparty_id=1,
        base_currency="GBP",
        quote_currency="USD",
        notional_amount=Decimal("2500000"),
        trade_date=today,
        value_date=today + timedelta(days=30),
        forward_rate=Decimal("1.2710"),
        created_by="trader1",
    )
    async with await WorkflowEnvironment.start_time_skipping(
        data_converter=TRADEBOOK_DATA_CONVERTER,
    ) as env:
        async with build_worker(env.client, acts, "test-worker"):
            out = await env.client.execute_workflow(
                TradeBookingWorkflow.run, BookTradeInput(request=request),
                id="WRK-001", task_queue="test-worker",
            )
    assert out.trade is not None
    assert trades.count() == 1
