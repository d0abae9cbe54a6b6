"""tradebook.infra -- repository protocols, in-memory adapters, configuration."""

from tradebook.infra.config import (
    BookingConfig as BookingConfig,
)
from tradebook.infra.config import (
    TemporalConfig as TemporalConfig,
)
from tradebook.infra.memory_adapter import (
    InMemoryCounterpartyRepository as InMemoryCounterpartyRepository,
)
from tradebook.infra.memory_adapter import (
    InMemoryTradeRepository as InMemoryTradeRepository,
)
from tradebook.infra.protocols import (
    CounterpartyRepository as CounterpartyRepository,
)
from tradebook.infra.protocols import (
    TradeRepository as TradeRepository,
)
