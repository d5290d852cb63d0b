from __future__ import annotations

import logging
from typing import Optional

from inline_calc.core.config import AppSettings, get_settings
from inline_calc.models.result import DEFAULT_FRACTION_DIGITS, Result
from inline_calc.services.cache import ResultCache
from inline_calc.services.errors import ExpressionSyntaxError
from inline_calc.services.evaluator import (
    DEFAULT_DIVISION_PLACES,
    DEFAULT_MAX_EXACT_DIGITS,
    DEFAULT_PRECISION,
    Evaluator,
)
from inline_calc.services.syntax import parse

logger = logging.getLogger(__name__)


class Calculator:
    """Evaluates expression text, memoising every outcome by its exact text.

    ``evaluate`` never raises: text that does not parse, or whose tree
    cannot be evaluated, produces an unsuccessful Result that is cached like
    any other.
    """

    def __init__(
        self,
        *,
        precision: int = DEFAULT_PRECISION,
        division_places: int = DEFAULT_DIVISION_PLACES,
        max_exact_digits: int = DEFAULT_MAX_EXACT_DIGITS,
        fraction_digits: int = DEFAULT_FRACTION_DIGITS,
        cache: Optional[ResultCache] = None,
    ) -> None:
        self._evaluator = Evaluator(
            precision=precision,
            division_places=division_places,
            max_exact_digits=max_exact_digits,
        )
        self._fraction_digits = fraction_digits
        self._cache = cache if cache is not None else ResultCache()

    @classmethod
    def from_settings(cls, settings: Optional[AppSettings] = None) -> "Calculator":
        settings = settings or get_settings()
        return cls(
            precision=settings.decimal_precision,
            division_places=settings.division_places,
            max_exact_digits=settings.max_exact_digits,
            fraction_digits=settings.fraction_digits,
            cache=ResultCache(max_entries=settings.cache_max_entries),
        )

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def evaluate(self, expression: str) -> Result:
        return self._cache.get_or_compute(expression, self._compute)

    def to_string(self, result: Result) -> str:
        return result.to_string(self._fraction_digits)

    def _compute(self, expression: str) -> Result:
        logger.debug("calculator.cache_miss", extra={"expression": expression})
        try:
            syntax_tree = parse(expression)
        except ExpressionSyntaxError:
            logger.debug("calculator.parse_failed", extra={"expression": expression})
            return Result.failure()

        try:
            return self._evaluator.evaluate(syntax_tree)
        except RecursionError:
            logger.warning("calculator.expression_too_deep", extra={"expression_length": len(expression)})
            return Result.failure()
