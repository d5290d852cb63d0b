from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis.strategies import booleans, integers, sampled_from

from inline_calc.models.result import Base, Separator
from inline_calc.services.literals import classify_literal, parse_literal_value


@pytest.mark.parametrize(
    ("raw", "base", "separator"),
    [
        ("0xabcd", Base.HEXADECIMAL, Separator.NONE),
        ("0xbeef_1234", Base.HEXADECIMAL, Separator.UNDERSCORE),
        ("0o1000", Base.OCTAL, Separator.NONE),
        ("0o7_7", Base.OCTAL, Separator.UNDERSCORE),
        ("0b1000", Base.BINARY, Separator.NONE),
        ("0b1_0", Base.BINARY, Separator.UNDERSCORE),
        ("123", Base.UNDEFINED, Separator.NONE),
        ("-123", Base.UNDEFINED, Separator.NONE),
        ("1_432", Base.UNDEFINED, Separator.UNDERSCORE),
        ("1.5", Base.DECIMAL, Separator.NONE),
        ("1e-1", Base.DECIMAL, Separator.NONE),
        ("1_000.5", Base.DECIMAL, Separator.NONE),
        ("0XAB", Base.DECIMAL, Separator.NONE),
        ("0o8", Base.DECIMAL, Separator.NONE),
    ],
)
def test_classify_literal(raw: str, base: Base, separator: Separator) -> None:
    assert classify_literal(raw) == (base, separator)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0xabcd", Decimal(0xABCD)),
        ("0XAB", Decimal(0xAB)),
        ("0o1000", Decimal(0o1000)),
        ("0b1_000", Decimal(8)),
        ("1_432", Decimal(1432)),
        ("-12", Decimal(-12)),
        ("1.1", Decimal("1.1")),
        ("1e-1", Decimal("0.1")),
        (".5", Decimal("0.5")),
    ],
)
def test_parse_literal_value(raw: str, expected: Decimal) -> None:
    assert parse_literal_value(raw) == expected


def test_fixed_point_literals_parse_exactly() -> None:
    assert parse_literal_value("0.1") + parse_literal_value("0.2") == Decimal("0.3")


_PREFIXES = {Base.HEXADECIMAL: ("0x", "x"), Base.OCTAL: ("0o", "o"), Base.BINARY: ("0b", "b")}


def _with_underscores(digits: str) -> str:
    return "_".join(digits[i : i + 3] for i in range(0, len(digits), 3))


@given(
    value=integers(min_value=0, max_value=10**40),
    base=sampled_from(list(_PREFIXES)),
    grouped=booleans(),
)
def test_prefixed_literals_round_trip(value: int, base: Base, grouped: bool) -> None:
    prefix, spec = _PREFIXES[base]
    digits = format(value, spec)
    raw = prefix + (_with_underscores(digits) if grouped else digits)

    classified_base, separator = classify_literal(raw)

    assert classified_base is base
    assert (separator is Separator.UNDERSCORE) == ("_" in raw)
    assert parse_literal_value(raw) == Decimal(value)


@given(value=integers(min_value=-(10**40), max_value=10**40), grouped=booleans())
def test_plain_integer_literals_round_trip(value: int, grouped: bool) -> None:
    digits = str(abs(value))
    body = _with_underscores(digits) if grouped else digits
    raw = ("-" if value < 0 else "") + body

    assert classify_literal(raw)[0] is Base.UNDEFINED
    assert parse_literal_value(raw) == Decimal(value)
