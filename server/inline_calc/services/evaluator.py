from __future__ import annotations

from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from typing import Callable

from inline_calc.models.result import Result
from inline_calc.services.literals import classify_literal, parse_literal_value
from inline_calc.services.syntax import (
    BinaryExpression,
    Literal,
    Node,
    UnaryExpression,
)

DEFAULT_PRECISION = 1000
DEFAULT_DIVISION_PLACES = 20
DEFAULT_MAX_EXACT_DIGITS = 100_000

_ONE = Decimal(1)
# Exponents with more digits than this are treated as too large to expand exactly.
_MAX_EXPONENT_MAGNITUDE = 18


def is_integral(value: Decimal) -> bool:
    return value.is_finite() and value == value.to_integral_value()


def _exponent(value: Decimal) -> int:
    return value.as_tuple().exponent if value.is_finite() else 0


def _magnitude(value: Decimal) -> int:
    return value.adjusted() if value.is_finite() else 0


def _digits(value: Decimal) -> int:
    return _magnitude(value) - _exponent(value) + 1


class Evaluator:
    """Exact evaluator for expression syntax trees.

    ``evaluate`` is total: unsupported nodes, unsupported operators and
    non-integer exponents yield an unsuccessful Result instead of raising.

    Each operation runs under a trap-free decimal context whose precision is
    sized to the digits its exact result can need, so ``+ - * %`` and
    non-negative powers never round. Quotients and negative powers are rounded
    half-up to ``division_places`` fractional digits. Results that would need
    more than ``max_exact_digits`` digits fall back to ``precision``
    significant digits; division by zero produces Infinity or NaN.
    """

    def __init__(
        self,
        precision: int = DEFAULT_PRECISION,
        division_places: int = DEFAULT_DIVISION_PLACES,
        max_exact_digits: int = DEFAULT_MAX_EXACT_DIGITS,
    ) -> None:
        self._precision = precision
        self._division_places = division_places
        self._max_exact_digits = max_exact_digits
        self._quantum = Decimal(1).scaleb(-division_places)
        self._binary_operators: dict[str, Callable[[Decimal, Decimal], Decimal]] = {
            "+": self._add,
            "-": self._subtract,
            "*": self._multiply,
            "/": self._divide,
            "%": self._remainder,
        }

    def evaluate(self, node: Node) -> Result:
        if isinstance(node, BinaryExpression):
            return self._evaluate_binary(node)
        if isinstance(node, Literal):
            return self._evaluate_literal(node)
        if isinstance(node, UnaryExpression):
            return self._evaluate_unary(node)
        # Identifier, CallExpression, Compound and anything unrecognised.
        return Result.failure()

    def _evaluate_binary(self, node: BinaryExpression) -> Result:
        # Operand success is not consulted; a failed operand contributes zero.
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        separator = left.separator.merge(right.separator)
        base = left.base.merge(right.base)

        if node.operator == "**":
            if not is_integral(right.value):
                return Result.failure()
            return Result(True, self._power(left.value, right.value), separator, base)

        operator_fn = self._binary_operators.get(node.operator)
        if operator_fn is None:
            return Result.failure()
        return Result(True, operator_fn(left.value, right.value), separator, base)

    def _evaluate_literal(self, node: Literal) -> Result:
        base, separator = classify_literal(node.raw)
        try:
            value = parse_literal_value(node.raw)
        except (ArithmeticError, ValueError):
            return Result.failure()
        return Result(True, value, separator, base)

    def _evaluate_unary(self, node: UnaryExpression) -> Result:
        argument = self.evaluate(node.argument)
        if node.operator != "-":
            return Result.failure()
        return Result(True, argument.value.copy_negate(), argument.separator, argument.base)

    def _context(self, digits: int) -> Context:
        """Context able to hold ``digits`` significant digits without rounding."""
        precision = self._precision
        if digits <= self._max_exact_digits:
            precision = max(precision, digits)
        return Context(prec=precision, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[])

    def _sum_context(self, left: Decimal, right: Decimal) -> Context:
        top = max(_magnitude(left), _magnitude(right))
        bottom = min(_exponent(left), _exponent(right))
        return self._context(top - bottom + 2)

    def _add(self, left: Decimal, right: Decimal) -> Decimal:
        return self._sum_context(left, right).add(left, right)

    def _subtract(self, left: Decimal, right: Decimal) -> Decimal:
        return self._sum_context(left, right).subtract(left, right)

    def _multiply(self, left: Decimal, right: Decimal) -> Decimal:
        return self._context(_digits(left) + _digits(right)).multiply(left, right)

    def _remainder(self, left: Decimal, right: Decimal) -> Decimal:
        return self._sum_context(left, right).remainder(left, right)

    def _divide(self, left: Decimal, right: Decimal) -> Decimal:
        integer_digits = max(_magnitude(left) - _magnitude(right), 0) + 2
        ctx = self._context(integer_digits + self._division_places + 1)
        value = ctx.divide(left, right)
        if value.is_finite() and _exponent(value) < -self._division_places:
            return ctx.quantize(value, self._quantum)
        return value

    def _power(self, base: Decimal, exponent: Decimal) -> Decimal:
        if exponent.is_zero():
            return _ONE
        if exponent.is_signed():
            return self._divide(_ONE, self._power(base, exponent.copy_negate()))
        if exponent.adjusted() > _MAX_EXPONENT_MAGNITUDE:
            digits = self._max_exact_digits + 1
        else:
            digits = _digits(base) * int(exponent) + 1
        return self._context(digits).power(base, exponent)
