"""Activity and workflow I/O records for trade booking.

All types: @final @dataclass(frozen=True, slots=True).
Outputs carry exactly one of a result or an error; business failures
travel as data so Temporal never retries them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from tradebook.booking.views import TradeView
from tradebook.gateway.types import TradeBookingRequest

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class BookTradeInput:
    """Workflow/activity input. The trade reference doubles as workflow id."""

    request: TradeBookingRequest


@final
@dataclass(frozen=True, slots=True)
class StatusUpdateInput:
    trade_id: int
    new_status: str
    updated_by: str | None = None


@final
@dataclass(frozen=True, slots=True)
class CancelTradeInput:
    trade_id: int
    cancelled_by: str | None = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class TradeOutput:
    """Booked or re-statused trade, or the reason it was refused.

    error_code is the error value's class name (e.g. "NotFoundError").
    """

    trade: TradeView | None = None
    error: str | None = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        if (self.trade is None) == (self.error is None):
            raise TypeError("TradeOutput must have exactly one of trade or error")


@final
@dataclass(frozen=True, slots=True)
class CancelOutput:
    trade_id: int
    cancelled: bool
    error: str | None = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        if self.cancelled == (self.error is not None):
            raise TypeError("CancelOutput must be either cancelled or carry an error")
