"""Trade status state machine and the cancellation precondition.

TRADE_TRANSITIONS lists every allowed (from, to) pair:
  PENDING   -> any status (including PENDING itself)
  CONFIRMED -> any status except PENDING
  SETTLED / CANCELLED / EXPIRED -> nothing (terminal)

Pure functions, no I/O.
"""

from __future__ import annotations

from datetime import date

from tradebook.core.errors import BusinessRuleViolation, business_rule_violation
from tradebook.core.result import Err, Ok
from tradebook.instrument.types import TERMINAL_STATUSES, Trade, TradeStatus

# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------

type TransitionTable = frozenset[tuple[TradeStatus, TradeStatus]]

TRADE_TRANSITIONS: TransitionTable = frozenset(
    {(TradeStatus.PENDING, to) for to in TradeStatus}
    | {(TradeStatus.CONFIRMED, to) for to in TradeStatus if to is not TradeStatus.PENDING}
)

_SOURCE = "instrument.lifecycle.check_transition"


def check_transition(
    current: TradeStatus,
    requested: TradeStatus,
    transitions: TransitionTable = TRADE_TRANSITIONS,
) -> Ok[None] | Err[BusinessRuleViolation]:
    """Decide whether a trade in `current` may move to `requested`."""
    if not isinstance(current, TradeStatus):
        return Err(business_rule_violation(
            f"Unknown trade status: {current}",
            rule="INTERNAL_CONSISTENCY", source=_SOURCE,
        ))
    if not isinstance(requested, TradeStatus):
        return Err(business_rule_violation(
            f"Unknown trade status: {requested}",
            rule="UNKNOWN_STATUS", source=_SOURCE,
        ))
    if (current, requested) in transitions:
        return Ok(None)
    if current in TERMINAL_STATUSES:
        return Err(business_rule_violation(
            f"Cannot change status of {current.value} trade",
            rule="IMMUTABLE_TERMINAL_STATE", source=_SOURCE,
        ))
    return Err(business_rule_violation(
        f"Cannot revert {current.value} trade to {requested.value}",
        rule="ILLEGAL_TRANSITION", source=_SOURCE,
    ))


def check_cancellable(trade: Trade, today: date) -> Ok[None] | Err[BusinessRuleViolation]:
    """A trade may be cancelled only while PENDING and on its own trade date."""
    source = "instrument.lifecycle.check_cancellable"
    if trade.status is not TradeStatus.PENDING:
        return Err(business_rule_violation(
            "Only PENDING trades can be cancelled",
            rule="CANCEL_NOT_PENDING", source=source,
        ))
    if trade.trade_date != today:
        return Err(business_rule_violation(
            "Trades can only be cancelled on the same business day",
            rule="CANCEL_WINDOW_CLOSED", source=source,
        ))
    return Ok(None)
