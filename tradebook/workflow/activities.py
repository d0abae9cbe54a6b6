"""Activity implementations for trade booking.

Activities are thin IO wrappers around BookingService. All business
logic lives in the pure booking layer; this module adds logging and
converts Result values into activity outputs.

Each activity:
- Is an @activity.defn method on BookingActivities
- Takes a single frozen-dataclass input
- Returns a frozen-dataclass output (with optional error field)
- Never raises for business failures, so Temporal retries only
  infrastructure faults
"""

from __future__ import annotations

from typing import final

from temporalio import activity

from tradebook.booking.service import BookingService
from tradebook.booking.views import TradeView
from tradebook.core.errors import TradebookError
from tradebook.core.result import Err
from tradebook.instrument.types import product_type_name
from tradebook.workflow.types import (
    BookTradeInput,
    CancelOutput,
    CancelTradeInput,
    StatusUpdateInput,
    TradeOutput,
)

# Follow-up processing announced when a trade enters a status.
STATUS_EVENTS: dict[str, str] = {
    "CONFIRMED": "settlement processing",
    "SETTLED": "position update",
    "CANCELLED": "credit limit release",
    "EXPIRED": "option expiry processing",
}


def _failure(error: TradebookError) -> TradeOutput:
    return TradeOutput(error=error.message, error_code=type(error).__name__)


@final
class BookingActivities:
    """Activities bound to one BookingService instance.

    Register the bound methods with the worker:
    ``activities=[acts.book_trade, acts.update_trade_status, acts.cancel_trade]``.
    """

    def __init__(self, service: BookingService) -> None:
        self._service = service

    @activity.defn(name="book_trade")
    async def book_trade(self, inp: BookTradeInput) -> TradeOutput:
        """Validate and persist one trade.

        Timeout: 30s | Retries: infrastructure only
        Idempotent: a replay with the same reference is refused as a duplicate.
        """
        request = inp.request
        activity.logger.info(
            "Booking trade %s (%s) for counterparty %s",
            request.trade_reference,
            product_type_name(request.product_type),
            request.counterparty_id,
        )
        result = self._service.book_trade(request)
        if isinstance(result, Err):
            e = result.error
            activity.logger.warning(
                "Trade %s rejected [%s]: %s", request.trade_reference, type(e).__name__, e.message,
            )
            return _failure(e)
        view = result.value
        activity.logger.info("Booked trade %s with id %s", view.trade_reference, view.trade_id)
        self._flag_large_trade(view)
        return TradeOutput(trade=view)

    @activity.defn(name="update_trade_status")
    async def update_trade_status(self, inp: StatusUpdateInput) -> TradeOutput:
        """Timeout: 30s | Retries: infrastructure only."""
        activity.logger.info("Updating trade %s to %s", inp.trade_id, inp.new_status)
        result = self._service.update_status(inp.trade_id, inp.new_status, inp.updated_by)
        if isinstance(result, Err):
            e = result.error
            activity.logger.warning(
                "Status update for trade %s refused [%s]: %s",
                inp.trade_id, type(e).__name__, e.message,
            )
            return _failure(e)
        self._announce_status(result.value)
        return TradeOutput(trade=result.value)

    @activity.defn(name="cancel_trade")
    async def cancel_trade(self, inp: CancelTradeInput) -> CancelOutput:
        """Timeout: 30s | Retries: infrastructure only."""
        activity.logger.info("Cancelling trade %s", inp.trade_id)
        result = self._service.cancel_trade(inp.trade_id, inp.cancelled_by)
        if isinstance(result, Err):
            e = result.error
            activity.logger.warning(
                "Cancellation of trade %s refused [%s]: %s",
                inp.trade_id, type(e).__name__, e.message,
            )
            return CancelOutput(
                trade_id=inp.trade_id, cancelled=False,
                error=e.message, error_code=type(e).__name__,
            )
        activity.logger.info(
            "Trade %s cancelled; triggering %s", inp.trade_id, STATUS_EVENTS["CANCELLED"],
        )
        return CancelOutput(trade_id=inp.trade_id, cancelled=True)

    # -- Logging helpers --

    def _flag_large_trade(self, view: TradeView) -> None:
        threshold = self._service.config.large_trade_threshold
        if view.notional_amount > threshold:
            activity.logger.info(
                "Large trade detected: %s notional %s %s exceeds %s",
                view.trade_reference, view.notional_amount, view.base_currency, threshold,
            )

    def _announce_status(self, view: TradeView) -> None:
        follow_up = STATUS_EVENTS.get(view.status)
        if follow_up is None:
            activity.logger.info("Trade %s is now %s", view.trade_reference, view.status)
            return
        activity.logger.info(
            "Trade %s is now %s; triggering %s", view.trade_reference, view.status, follow_up,
        )
