"""tradebook.booking -- validation, dispatch and the booking orchestrator."""

from tradebook.booking.counterparties import (
    CounterpartyService as CounterpartyService,
)
from tradebook.booking.queries import (
    TradeQueryService as TradeQueryService,
)
from tradebook.booking.registries import (
    FactoryRegistry as FactoryRegistry,
)
from tradebook.booking.registries import (
    ValidatorRegistry as ValidatorRegistry,
)
from tradebook.booking.registries import (
    default_factory_registry as default_factory_registry,
)
from tradebook.booking.registries import (
    default_validator_registry as default_validator_registry,
)
from tradebook.booking.service import (
    BookingService as BookingService,
)
from tradebook.booking.structural import (
    DefaultStructuralValidator as DefaultStructuralValidator,
)
from tradebook.booking.views import (
    CounterpartyView as CounterpartyView,
)
from tradebook.booking.views import (
    TradeView as TradeView,
)
