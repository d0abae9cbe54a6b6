"""Error value hierarchy: no domain function raises exceptions.

Every error is a frozen dataclass value that can be pattern-matched,
serialized, and stored. Base class TradebookError, four @final subclasses:
the two the booking surface exposes (NotFoundError, BusinessRuleViolation)
and the two the persistence boundary produces (PersistenceError,
DuplicateKeyError).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from tradebook.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class TradebookError:
    """Base error value. NOT @final: has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> TradebookError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        """Serialize to dict with stable keys."""
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single malformed input field."""

    path: str  # e.g. "notional_amount"
    constraint: str  # e.g. "must be a decimal number"
    actual_value: str  # e.g. "ten"


@final
@dataclass(frozen=True, slots=True)
class NotFoundError(TradebookError):
    """A referenced counterparty or trade does not exist."""

    entity: str  # "Counterparty" | "Trade"
    key: str

    def to_dict(self) -> dict[str, object]:
        return {**TradebookError.to_dict(self), "entity": self.entity, "key": self.key}


@final
@dataclass(frozen=True, slots=True)
class BusinessRuleViolation(TradebookError):
    """A request or state change breaks a business rule.

    ``fields`` is populated only when the violation comes from parsing a
    loosely-typed payload; rule checks carry a single message.
    """

    rule: str
    fields: tuple[FieldViolation, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            **TradebookError.to_dict(self),
            "rule": self.rule,
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class PersistenceError(TradebookError):
    """Database or storage operation failed."""

    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**TradebookError.to_dict(self), "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class DuplicateKeyError(TradebookError):
    """Storage rejected an insert because a unique key is already taken."""

    key: str

    def to_dict(self) -> dict[str, object]:
        return {**TradebookError.to_dict(self), "key": self.key}


def business_rule_violation(message: str, *, rule: str, source: str) -> BusinessRuleViolation:
    """Build a BusinessRuleViolation stamped with the current time."""
    return BusinessRuleViolation(
        message=message,
        code="BUSINESS_RULE_VIOLATION",
        timestamp=UtcDatetime.now(),
        source=source,
        rule=rule,
    )


def not_found(entity: str, key: object, *, source: str, by: str = "ID") -> NotFoundError:
    """Build a NotFoundError: "<entity> not found with <by>: <key>"."""
    return NotFoundError(
        message=f"{entity} not found with {by}: {key}",
        code="NOT_FOUND",
        timestamp=UtcDatetime.now(),
        source=source,
        entity=entity,
        key=str(key),
    )
