"""tradebook.instrument -- trade model and status lifecycle."""

from tradebook.instrument.lifecycle import (
    TRADE_TRANSITIONS as TRADE_TRANSITIONS,
)
from tradebook.instrument.lifecycle import (
    check_cancellable as check_cancellable,
)
from tradebook.instrument.lifecycle import (
    check_transition as check_transition,
)
from tradebook.instrument.types import (
    Counterparty as Counterparty,
)
from tradebook.instrument.types import (
    ExoticOptionDetail as ExoticOptionDetail,
)
from tradebook.instrument.types import (
    ExoticOptionType as ExoticOptionType,
)
from tradebook.instrument.types import (
    FXContractDetail as FXContractDetail,
)
from tradebook.instrument.types import (
    OptionType as OptionType,
)
from tradebook.instrument.types import (
    ProductType as ProductType,
)
from tradebook.instrument.types import (
    SwapDetail as SwapDetail,
)
from tradebook.instrument.types import (
    SwapType as SwapType,
)
from tradebook.instrument.types import (
    Trade as Trade,
)
from tradebook.instrument.types import (
    TradeDetail as TradeDetail,
)
from tradebook.instrument.types import (
    TradeStatus as TradeStatus,
)
from tradebook.instrument.types import (
    VanillaOptionDetail as VanillaOptionDetail,
)
