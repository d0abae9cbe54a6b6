"""Validated identifier newtypes: LEI, BIC.

Each wraps a string validated at construction time via parse().
Used by counterparty maintenance; trades refer to counterparties by id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import final

from tradebook.core.result import Err, Ok

_BIC_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")


@final
@dataclass(frozen=True, slots=True)
class LEI:
    """Legal Entity Identifier: exactly 20 uppercase alphanumeric characters."""

    value: str

    @staticmethod
    def parse(raw: str) -> Ok[LEI] | Err[str]:
        if len(raw) != 20:
            return Err(f"LEI must be 20 characters, got {len(raw)}")
        if not raw.isascii() or not raw.isalnum() or raw.upper() != raw:
            return Err(f"LEI must be uppercase alphanumeric, got '{raw}'")
        return Ok(LEI(value=raw))


@final
@dataclass(frozen=True, slots=True)
class BIC:
    """SWIFT Business Identifier Code: 8 or 11 characters.

    4-letter institution code, 2-letter country code, 2 alphanumeric
    location characters, optional 3 alphanumeric branch characters.
    """

    value: str

    @staticmethod
    def parse(raw: str) -> Ok[BIC] | Err[str]:
        if len(raw) not in (8, 11):
            return Err(f"BIC must be 8 or 11 characters, got {len(raw)}")
        if _BIC_PATTERN.match(raw) is None:
            return Err(f"BIC format invalid: '{raw}'")
        return Ok(BIC(value=raw))
