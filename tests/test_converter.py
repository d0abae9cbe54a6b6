"""Tests for tradebook.workflow.converter: tagged JSON for workflow payloads."""

from __future__ import annotations

import json
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from temporalio.api.common.v1 import Payload

from tradebook.booking.views import TradeView
from tradebook.gateway.types import TradeBookingRequest
from tradebook.instrument.types import OptionType, ProductType
from tradebook.workflow.converter import TRADEBOOK_DATA_CONVERTER
from tradebook.workflow.types import BookTradeInput, CancelOutput, TradeOutput


def _request() -> TradeBookingRequest:
    return TradeBookingRequest(
        product_type=ProductType.VANILLA_OPTION,
        trade_reference="TRD-001",
        counterparty_id=1,
        base_currency="EUR",
        quote_currency="USD",
        notional_amount=Decimal("1000000.00"),
        trade_date=date(2025, 6, 16),
        value_date=date(2025, 6, 18),
        maturity_date=date(2025, 12, 16),
        option_type=OptionType.CALL,
        strike_price=Decimal("1.1000"),
        created_by="trader1",
    )


def _round_trip(value: object, hint: type) -> object:
    converter = TRADEBOOK_DATA_CONVERTER.payload_converter
    (restored,) = converter.from_payloads(converter.to_payloads([value]), [hint])
    return restored


def _raw_payload(body: dict[str, object]) -> Payload:
    return Payload(metadata={"encoding": b"json/plain"}, data=json.dumps(body).encode())


def _view() -> TradeView:
    return TradeView(
        trade_id=1,
        trade_reference="TRD-001",
        counterparty_id=1,
        product_type="VANILLA_OPTION",
        base_currency="EUR",
        quote_currency="USD",
        notional_amount=Decimal("1000000.00"),
        trade_date=date(2025, 6, 16),
        value_date=date(2025, 6, 18),
        maturity_date=date(2025, 12, 16),
        status="PENDING",
        created_by="trader1",
        created_at=datetime(2025, 6, 16, 9, 0, tzinfo=UTC),
        option_type="CALL",
        strike_price=Decimal("1.1000"),
    )


class TestTaggedJson:
    def test_decimal_keeps_scale(self) -> None:
        (payload,) = TRADEBOOK_DATA_CONVERTER.payload_converter.to_payloads([Decimal("1.1000")])
        assert json.loads(payload.data) == {"__decimal__": "1.1000"}
        assert str(_round_trip(Decimal("1.1000"), Decimal)) == "1.1000"

    def test_request_enums_restored(self) -> None:
        decoded = _round_trip(BookTradeInput(request=_request()), BookTradeInput)
        assert isinstance(decoded, BookTradeInput)
        assert decoded.request.product_type is ProductType.VANILLA_OPTION
        assert decoded.request.option_type is OptionType.CALL
        assert decoded.request.exotic_option_type is None
        assert decoded == BookTradeInput(request=_request())

    def test_nested_view_with_datetime(self) -> None:
        out = TradeOutput(trade=_view())
        decoded = _round_trip(out, TradeOutput)
        assert decoded == out
        assert isinstance(decoded, TradeOutput)
        assert decoded.trade is not None
        assert decoded.trade.created_at.tzinfo is not None

    def test_unknown_type_refused(self) -> None:
        payload = _raw_payload({"__type__": "os.Popen", "args": "ls"})
        with pytest.raises(TypeError, match="Refusing to decode"):
            TRADEBOOK_DATA_CONVERTER.payload_converter.from_payloads([payload], [BookTradeInput])

    def test_domain_type_outside_allow_list_refused(self) -> None:
        payload = _raw_payload({"__type__": "tradebook.instrument.types.Counterparty", "code": "X"})
        with pytest.raises(TypeError):
            TRADEBOOK_DATA_CONVERTER.payload_converter.from_payloads([payload], [BookTradeInput])


class TestPayloadConverter:
    def test_round_trip_through_temporal_converter(self) -> None:
        converter = TRADEBOOK_DATA_CONVERTER.payload_converter
        values = [TradeOutput(error="nope", error_code="NotFoundError"), CancelOutput(trade_id=3, cancelled=True)]
        payloads = converter.to_payloads(values)
        assert all(isinstance(p, Payload) for p in payloads)
        restored = converter.from_payloads(payloads, [TradeOutput, CancelOutput])
        assert restored == values
