from __future__ import annotations

import re
from decimal import Decimal

from inline_calc.models.result import Base, Separator

# Tested in order; the first full match decides the base.
_LITERAL_PATTERNS: tuple[tuple[re.Pattern[str], Base], ...] = (
    (re.compile(r"^0x[0-9a-fA-F_]+$"), Base.HEXADECIMAL),
    (re.compile(r"^0o[0-7_]+$"), Base.OCTAL),
    (re.compile(r"^0b[01_]+$"), Base.BINARY),
    (re.compile(r"^-?[\d_]+$"), Base.UNDEFINED),
)

_RADIX_PREFIX = re.compile(r"^-?0[xXoObB]")


def classify_literal(raw: str) -> tuple[Base, Separator]:
    """Return the display base and digit separator for a literal's source text.

    Anything that is not a plain or prefixed integer (fixed point, exponent
    notation) is classified as DECIMAL so the result is never re-expressed
    in another base.
    """
    for pattern, base in _LITERAL_PATTERNS:
        if pattern.match(raw):
            separator = Separator.UNDERSCORE if "_" in raw else Separator.NONE
            return base, separator
    return Base.DECIMAL, Separator.NONE


def parse_literal_value(raw: str) -> Decimal:
    """Parse literal text exactly, in the radix it was written in."""
    cleaned = raw.replace("_", "")
    if _RADIX_PREFIX.match(cleaned):
        return Decimal(int(cleaned, 0))
    return Decimal(cleaned)
