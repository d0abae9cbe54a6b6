"""tradebook.gateway -- inbound requests and raw payload parsing."""

from tradebook.gateway.parser import (
    parse_booking_request as parse_booking_request,
)
from tradebook.gateway.parser import (
    parse_counterparty_request as parse_counterparty_request,
)
from tradebook.gateway.parser import (
    request_to_dict as request_to_dict,
)
from tradebook.gateway.types import (
    CounterpartyRequest as CounterpartyRequest,
)
from tradebook.gateway.types import (
    TradeBookingRequest as TradeBookingRequest,
)
