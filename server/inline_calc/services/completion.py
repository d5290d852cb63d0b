from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from inline_calc.services.calculator import Calculator


def _build_expression_pattern() -> re.Pattern[str]:
    binary = r"\b0b([01_]+)"
    octal = r"\b0o([0-7_]+)"
    hexadecimal = r"\b0x([0-9a-fA-F_]+)"
    floating_point = r"\b([\d_]+)(\.([\d_]+))?e(\+|-)?([\d_]+)"
    fixed_point = r"\b([\d_]+)(\.([\d_]+))?"
    number = f"({binary})|({octal})|({hexadecimal})|({floating_point})|({fixed_point})"
    operator = r"(\+|-|\*|/|\*\*|\(|\)|,|\||&|\^)"
    return re.compile(rf"(?P<expression>({number}|{operator}|\s)+)\s*=\s*$")


_EXPRESSION_PATTERN = _build_expression_pattern()


@dataclass(frozen=True)
class CompletionItem:
    label: str
    detail: str


def find_expression(line_prefix: str) -> Optional[str]:
    """Return the expression typed before a trailing ``=``, if there is one."""
    match = _EXPRESSION_PATTERN.search(line_prefix)
    if match is None:
        return None
    return match.group("expression")


def suggest(calculator: Calculator, line_prefix: str) -> Optional[CompletionItem]:
    """Evaluate the expression before a trailing ``=`` and offer its result."""
    expression = find_expression(line_prefix)
    if expression is None:
        return None

    result = calculator.evaluate(expression)
    if not result.success:
        return None

    label = calculator.to_string(result)
    return CompletionItem(label=label, detail=f"{expression} = {label}")
