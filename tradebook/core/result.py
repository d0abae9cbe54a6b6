"""Ok / Err values for fallible operations.

Validators, the orchestrator and the repositories return ``Ok[T] | Err[E]``
and callers branch with ``match``. ``first_failure`` runs an ordered
tuple of checks and reports the earliest one that fails.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Ok(f(value))."""
        return Ok(f(self.value))


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Errors pass through untouched."""
        return self


type Result[T, E] = Ok[T] | Err[E]


def first_failure[A, E](
    subject: A,
    checks: Iterable[Callable[[A], Ok[None] | Err[E]]],
) -> Ok[None] | Err[E]:
    """Run checks against subject in order, stopping at the first Err.

    Checks after the failing one are never called.
    """
    for check in checks:
        outcome = check(subject)
        if isinstance(outcome, Err):
            return outcome
    return Ok(None)
