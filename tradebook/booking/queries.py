"""Read-only trade queries.

Repository listings plus product-detail filters. Inputs are checked the
same way booking inputs are: malformed criteria are BusinessRuleViolations,
unknown ids are NotFoundErrors.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import final

from tradebook.booking.views import TradeView, trade_view
from tradebook.core.calendar import add_days, days_between
from tradebook.core.errors import (
    BusinessRuleViolation,
    NotFoundError,
    PersistenceError,
    business_rule_violation,
    not_found,
)
from tradebook.core.result import Err, Ok
from tradebook.infra.config import BookingConfig
from tradebook.infra.protocols import CounterpartyRepository, TradeRepository
from tradebook.instrument.types import (
    ExoticOptionDetail,
    ExoticOptionType,
    FXContractDetail,
    ProductType,
    SwapDetail,
    SwapType,
    Trade,
    TradeStatus,
)

type QueryError = NotFoundError | BusinessRuleViolation | PersistenceError
type Views = Ok[tuple[TradeView, ...]] | Err[QueryError]


def _views(
    listed: Ok[tuple[Trade, ...]] | Err[PersistenceError],
    keep: Callable[[Trade], bool] = lambda _: True,
) -> Views:
    if isinstance(listed, Err):
        return listed
    ordered = sorted((t for t in listed.value if keep(t)), key=lambda t: (t.trade_date, t.trade_id or 0))
    return Ok(tuple(trade_view(t) for t in ordered))


@final
class TradeQueryService:
    """Lookups and filtered listings over the trade repository."""

    def __init__(
        self,
        *,
        trades: TradeRepository,
        counterparties: CounterpartyRepository,
        config: BookingConfig | None = None,
    ) -> None:
        self._trades = trades
        self._counterparties = counterparties
        self._config = config or BookingConfig()

    def get_trade(self, trade_id: int) -> Ok[TradeView] | Err[QueryError]:
        found = self._trades.find_by_id(trade_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found("Trade", trade_id, source="booking.queries.get_trade"))
        return Ok(trade_view(found.value))

    def get_trade_by_reference(self, trade_reference: str) -> Ok[TradeView] | Err[QueryError]:
        found = self._trades.find_by_reference(trade_reference)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found(
                "Trade", trade_reference,
                source="booking.queries.get_trade_by_reference", by="reference",
            ))
        return Ok(trade_view(found.value))

    def trades_by_status(self, status: TradeStatus) -> Views:
        return _views(self._trades.list_by_status(status))

    def trades_by_date_range(self, start: date, end: date) -> Views:
        """Trades booked with trade_date in [start, end]; the span is capped."""
        source = "booking.queries.trades_by_date_range"
        if start > end:
            return Err(business_rule_violation(
                "Start date must be before or equal to end date",
                rule="INVALID_DATE_RANGE", source=source,
            ))
        limit = self._config.max_query_range_days
        if days_between(start, end) > limit:
            return Err(business_rule_violation(
                f"Date range cannot exceed {limit} days", rule="DATE_RANGE_TOO_WIDE", source=source,
            ))
        return _views(self._trades.list_by_trade_date_range(start, end))

    def trades_by_currency(self, currency: str) -> Views:
        code = currency.strip().upper() if currency else ""
        if len(code) != 3:
            return Err(business_rule_violation(
                "Currency code must be exactly 3 characters",
                rule="CURRENCY_FORMAT", source="booking.queries.trades_by_currency",
            ))
        return _views(self._trades.list_by_currency(code))

    def trades_by_product_type(self, product_type: ProductType) -> Views:
        return _views(self._trades.list_by_product_type(product_type))

    def trades_by_counterparty(self, counterparty_id: int) -> Views:
        found = self._counterparties.find_by_id(counterparty_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(not_found(
                "Counterparty", counterparty_id, source="booking.queries.trades_by_counterparty",
            ))
        return _views(self._trades.list_by_counterparty(counterparty_id))

    # --- Product-detail filters ---

    def vanilla_options_expiring_between(self, start: date, end: date) -> Views:
        return _views(
            self._trades.list_by_product_type(ProductType.VANILLA_OPTION),
            lambda t: t.maturity_date is not None and start <= t.maturity_date <= end,
        )

    def exotic_options_by_type(self, exotic_type: ExoticOptionType) -> Views:
        return _views(
            self._trades.list_by_product_type(ProductType.EXOTIC_OPTION),
            lambda t: isinstance(t.detail, ExoticOptionDetail)
            and t.detail.exotic_option_type is exotic_type,
        )

    def swaps_by_type(self, swap_type: SwapType) -> Views:
        return self._swaps(lambda d: d.swap_type is swap_type)

    def interest_rate_swaps_by_index(self, floating_rate_index: str) -> Views:
        index = floating_rate_index.strip().upper()
        return self._swaps(
            lambda d: d.swap_type is SwapType.INTEREST_RATE_SWAP and d.floating_rate_index == index,
        )

    def fx_forwards_maturing(self, today: date, within_days: int = 30) -> Views:
        """Non-spot FX contracts settling within the next within_days days."""
        horizon = add_days(today, within_days)
        return _views(
            self._trades.list_by_product_type(ProductType.FX_FORWARD),
            lambda t: isinstance(t.detail, FXContractDetail)
            and not t.detail.is_spot
            and today <= t.value_date <= horizon,
        )

    def _swaps(self, keep: Callable[[SwapDetail], bool]) -> Views:
        collected: list[Trade] = []
        for product_type in (
            ProductType.FX_SWAP, ProductType.CURRENCY_SWAP, ProductType.INTEREST_RATE_SWAP,
        ):
            listed = self._trades.list_by_product_type(product_type)
            if isinstance(listed, Err):
                return listed
            collected.extend(
                t for t in listed.value if isinstance(t.detail, SwapDetail) and keep(t.detail)
            )
        return _views(Ok(tuple(collected)))
