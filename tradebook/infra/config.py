"""Booking limits and Temporal worker configuration.

Pure configuration data; nothing here reads the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import final

# ---------------------------------------------------------------------------
# Booking rules
# ---------------------------------------------------------------------------

DEFAULT_FLOATING_RATE_INDICES: frozenset[str] = frozenset({
    "SOFR", "LIBOR", "EURIBOR", "SONIA", "TONAR",
})


@final
@dataclass(frozen=True, slots=True)
class BookingConfig:
    """Tunable limits used by the structural validator, swap rules and factories.

    spot_threshold_days: an FX contract settling fewer than this many
    calendar days after its trade date is classified as spot.
    """

    min_notional: Decimal = Decimal("10000")
    max_notional: Decimal = Decimal("1000000000")
    max_reference_length: int = 50
    max_trade_date_lead_days: int = 3
    supported_floating_indices: frozenset[str] = field(
        default_factory=lambda: DEFAULT_FLOATING_RATE_INDICES,
    )
    spot_threshold_days: int = 3
    large_trade_threshold: Decimal = Decimal("10000000")
    max_query_range_days: int = 365

    def __post_init__(self) -> None:
        if self.min_notional > self.max_notional:
            raise ValueError(
                f"BookingConfig: min_notional ({self.min_notional}) "
                f"exceeds max_notional ({self.max_notional})"
            )
        if self.spot_threshold_days < 1:
            raise ValueError(
                f"BookingConfig.spot_threshold_days must be >= 1, got {self.spot_threshold_days}"
            )


# ---------------------------------------------------------------------------
# Temporal worker
# ---------------------------------------------------------------------------

TASK_QUEUE: str = "tradebook-booking"


@final
@dataclass(frozen=True, slots=True)
class TemporalConfig:
    """Connection settings for the Temporal worker."""

    target_host: str = "localhost:7233"
    namespace: str = "default"
    task_queue: str = TASK_QUEUE
