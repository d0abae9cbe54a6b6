"""Worker wiring for the trade booking workflows.

Usage::

    import asyncio
    from tradebook.workflow.worker import build_activities, run_worker

    asyncio.run(run_worker(build_activities()))
"""

from __future__ import annotations

from temporalio.client import Client
from temporalio.worker import Worker

from tradebook.booking.service import BookingService
from tradebook.infra.config import BookingConfig, TemporalConfig
from tradebook.infra.memory_adapter import InMemoryCounterpartyRepository, InMemoryTradeRepository
from tradebook.infra.protocols import CounterpartyRepository, TradeRepository
from tradebook.workflow.activities import BookingActivities
from tradebook.workflow.booking_workflow import (
    TradeBookingWorkflow,
    TradeCancellationWorkflow,
    TradeStatusWorkflow,
)
from tradebook.workflow.converter import TRADEBOOK_DATA_CONVERTER

WORKFLOWS = (TradeBookingWorkflow, TradeStatusWorkflow, TradeCancellationWorkflow)


def build_activities(
    *,
    counterparties: CounterpartyRepository | None = None,
    trades: TradeRepository | None = None,
    config: BookingConfig | None = None,
) -> BookingActivities:
    """Assemble the service once at startup. Defaults to in-memory storage."""
    service = BookingService(
        counterparties=counterparties or InMemoryCounterpartyRepository(),
        trades=trades or InMemoryTradeRepository(),
        config=config,
    )
    return BookingActivities(service)


def build_worker(
    client: Client, activities: BookingActivities, task_queue: str,
) -> Worker:
    return Worker(
        client,
        task_queue=task_queue,
        workflows=list(WORKFLOWS),
        activities=[
            activities.book_trade,
            activities.update_trade_status,
            activities.cancel_trade,
        ],
    )


async def run_worker(
    activities: BookingActivities, config: TemporalConfig | None = None,
) -> None:
    """Connect to Temporal and run the worker until interrupted."""
    cfg = config or TemporalConfig()
    client = await Client.connect(
        cfg.target_host, namespace=cfg.namespace,
        data_converter=TRADEBOOK_DATA_CONVERTER,
    )
    await build_worker(client, activities, cfg.task_queue).run()
