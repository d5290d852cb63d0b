from __future__ import annotations

from dataclasses import dataclass, field
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from enum import Enum


class Base(Enum):
    """Numeric base a result is redisplayed in.

    UNDEFINED carries no information and yields to any sibling base.
    DECIMAL is explicit: something in the expression (a fixed point or
    exponent literal, or two different typed bases) forces plain decimal.
    """

    UNDEFINED = 0
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16

    @property
    def prefix(self) -> str:
        return _BASE_PREFIXES.get(self, "")

    @property
    def radix(self) -> int:
        return self.value or 10

    def merge(self, other: Base) -> Base:
        if _BASE_DOMINANCE[other] > _BASE_DOMINANCE[self]:
            return other
        return self


_BASE_PREFIXES = {
    Base.BINARY: "0b",
    Base.OCTAL: "0o",
    Base.HEXADECIMAL: "0x",
}

# Higher wins a merge.
_BASE_DOMINANCE = {
    Base.UNDEFINED: 0,
    Base.BINARY: 1,
    Base.OCTAL: 2,
    Base.HEXADECIMAL: 3,
    Base.DECIMAL: 4,
}


class Separator(Enum):
    """Digit grouping style seen in the source literals."""

    NONE = ""
    UNDERSCORE = "_"
    COMMA = ","

    def merge(self, other: Separator) -> Separator:
        # Two grouped operands cancel out, even when they use the same style.
        if self is Separator.NONE:
            return other
        if other is Separator.NONE:
            return self
        return Separator.NONE


DEFAULT_FRACTION_DIGITS = 20

_INTEGER_FORMATS = {2: "b", 8: "o", 16: "x"}


def render_decimal(value: Decimal, radix: int = 10, fraction_digits: int = DEFAULT_FRACTION_DIGITS) -> str:
    """Render ``value`` in positional notation for ``radix``.

    The fractional part is rounded half-up to ``fraction_digits`` digits of
    the target radix and trailing zeros are dropped. Non-finite values render
    as ``Infinity``, ``-Infinity`` or ``NaN``.
    """
    if value.is_nan():
        return "NaN"
    if value.is_infinite():
        return "-Infinity" if value.is_signed() else "Infinity"

    if radix == 10:
        return _render_base10(value, fraction_digits)
    spec = _INTEGER_FORMATS.get(radix)
    if spec is None:
        raise ValueError(f"Unsupported radix: {radix}")

    numerator, denominator = value.copy_abs().as_integer_ratio()
    scale = radix**fraction_digits
    scaled = (2 * numerator * scale + denominator) // (2 * denominator)
    integer_part, fraction_part = divmod(scaled, scale)

    text = format(integer_part, spec)
    if fraction_part:
        digits = format(fraction_part, f"0{fraction_digits}{spec}").rstrip("0")
        text = f"{text}.{digits}"
    if value.is_signed() and scaled:
        text = f"-{text}"
    return text


def _render_base10(value: Decimal, fraction_digits: int) -> str:
    # int-to-str conversion is capped at 4300 digits; Decimal formatting is not.
    if value.as_tuple().exponent < -fraction_digits:
        ctx = Context(
            prec=max(value.adjusted(), 0) + fraction_digits + 2,
            rounding=ROUND_HALF_UP,
            Emax=MAX_EMAX,
            Emin=MIN_EMIN,
        )
        value = value.quantize(Decimal(1).scaleb(-fraction_digits), context=ctx)
    text = format(value.copy_abs(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if value.is_signed() and not value.is_zero():
        text = f"-{text}"
    return text


@dataclass(frozen=True)
class Result:
    """Outcome of evaluating an expression or any of its subtrees.

    ``value``, ``base`` and ``separator`` are always populated; ``success``
    says whether the value means anything.
    """

    success: bool
    value: Decimal = field(default_factory=lambda: Decimal(0))
    separator: Separator = Separator.NONE
    base: Base = Base.UNDEFINED

    @classmethod
    def failure(cls) -> Result:
        return cls(success=False)

    def to_string(self, fraction_digits: int = DEFAULT_FRACTION_DIGITS) -> str:
        # Separator grouping is tracked but not re-inserted.
        return self.base.prefix + render_decimal(self.value, self.base.radix, fraction_digits)

    def __str__(self) -> str:
        return self.to_string()
