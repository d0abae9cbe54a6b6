"""Durable workflows for booking, re-statusing and cancelling trades.

Each workflow runs one activity. Business refusals come back inside the
activity output and end the workflow normally; only infrastructure faults
raise, and only those are retried.

Determinism contract: this module contains NO I/O, NO randomness,
NO system clock access, NO mutable globals.
"""

from __future__ import annotations

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from tradebook.workflow.activities import BookingActivities
    from tradebook.workflow.types import (
        BookTradeInput,
        CancelOutput,
        CancelTradeInput,
        StatusUpdateInput,
        TradeOutput,
    )

ACTIVITY_TIMEOUT: timedelta = timedelta(seconds=30)

# Value errors mean a malformed payload; retrying cannot fix them.
BOOKING_RETRY = RetryPolicy(
    initial_interval=timedelta(seconds=2),
    backoff_coefficient=2.0,
    maximum_interval=timedelta(seconds=10),
    maximum_attempts=3,
    non_retryable_error_types=["TypeError", "ValueError"],
)

STATUS_RETRY = RetryPolicy(
    initial_interval=timedelta(seconds=1),
    backoff_coefficient=2.0,
    maximum_interval=timedelta(seconds=10),
    maximum_attempts=5,
    non_retryable_error_types=["TypeError", "ValueError"],
)


@workflow.defn(name="TradeBooking")
class TradeBookingWorkflow:
    """Book one trade. Start it with the trade reference as workflow id."""

    def __init__(self) -> None:
        self._status: str = "RECEIVED"

    @workflow.query
    def get_status(self) -> str:
        return self._status

    @workflow.run
    async def run(self, inp: BookTradeInput) -> TradeOutput:
        self._status = "BOOKING"
        out = await workflow.execute_activity_method(
            BookingActivities.book_trade,
            inp,
            start_to_close_timeout=ACTIVITY_TIMEOUT,
            retry_policy=BOOKING_RETRY,
        )
        if out.error is not None:
            workflow.logger.info(
                "Booking %s refused: %s", inp.request.trade_reference, out.error,
            )
            self._status = "REJECTED"
        else:
            self._status = "BOOKED"
        return out


@workflow.defn(name="TradeStatusUpdate")
class TradeStatusWorkflow:
    """Apply one status transition to a booked trade."""

    @workflow.run
    async def run(self, inp: StatusUpdateInput) -> TradeOutput:
        return await workflow.execute_activity_method(
            BookingActivities.update_trade_status,
            inp,
            start_to_close_timeout=ACTIVITY_TIMEOUT,
            retry_policy=STATUS_RETRY,
        )


@workflow.defn(name="TradeCancellation")
class TradeCancellationWorkflow:
    """Cancel a PENDING trade on its trade date."""

    @workflow.run
    async def run(self, inp: CancelTradeInput) -> CancelOutput:
        out = await workflow.execute_activity_method(
            BookingActivities.cancel_trade,
            inp,
            start_to_close_timeout=ACTIVITY_TIMEOUT,
            retry_policy=STATUS_RETRY,
        )
        if not out.cancelled:
            workflow.logger.info("Cancellation of trade %s refused: %s", inp.trade_id, out.error)
        return out
