"""tradebook.core: public API for all core types."""

from tradebook.core.calendar import (
    add_days as add_days,
)
from tradebook.core.calendar import (
    add_years as add_years,
)
from tradebook.core.errors import (
    BusinessRuleViolation as BusinessRuleViolation,
)
from tradebook.core.errors import (
    DuplicateKeyError as DuplicateKeyError,
)
from tradebook.core.errors import (
    FieldViolation as FieldViolation,
)
from tradebook.core.errors import (
    NotFoundError as NotFoundError,
)
from tradebook.core.errors import (
    PersistenceError as PersistenceError,
)
from tradebook.core.errors import (
    TradebookError as TradebookError,
)
from tradebook.core.identifiers import (
    BIC as BIC,
)
from tradebook.core.identifiers import (
    LEI as LEI,
)
from tradebook.core.result import (
    Err as Err,
)
from tradebook.core.result import (
    Ok as Ok,
)
from tradebook.core.result import (
    Result as Result,
)
from tradebook.core.result import (
    first_failure as first_failure,
)
from tradebook.core.types import (
    Clock as Clock,
)
from tradebook.core.types import (
    UtcDatetime as UtcDatetime,
)
