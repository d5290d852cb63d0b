from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, TextIO

from inline_calc.core.config import get_settings
from inline_calc.models.calculator import CalculationResponse
from inline_calc.services.calculator import Calculator
from inline_calc.services.calculator_http import CalculatorHttpService
from inline_calc.services.errors import CalculatorError

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger("evaluate_expressions")


def read_expressions(path: Path) -> List[str]:
    """One expression per line; blank lines are skipped."""
    with path.open(encoding="utf-8") as handle:
        return [line.rstrip("\n") for line in handle if line.strip()]


def evaluate_locally(expressions: Iterable[str], calculator: Calculator) -> List[CalculationResponse]:
    responses: list[CalculationResponse] = []
    for expression in expressions:
        result = calculator.evaluate(expression)
        responses.append(CalculationResponse.from_result(expression, result, calculator.to_string(result)))
    return responses


def evaluate_remotely(expressions: Iterable[str], service: CalculatorHttpService) -> List[CalculationResponse]:
    responses: list[CalculationResponse] = []
    for expression in expressions:
        try:
            responses.append(service.evaluate(expression))
        except CalculatorError as exc:
            logger.warning("Skipping %r: %s", expression, exc.message)
    return responses


def write_responses(responses: Iterable[CalculationResponse], stream: TextIO) -> int:
    count = 0
    for response in responses:
        stream.write(json.dumps(response.model_dump()) + "\n")
        count += 1
    return count


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate arithmetic expressions and print JSON lines.")
    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate.")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read additional expressions from this file, one per line.",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Evaluate through the HTTP service configured by CALC_HTTP_BASE_URL.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    expressions = list(args.expressions)
    if args.file is not None:
        expressions.extend(read_expressions(args.file))
    if not expressions:
        logger.error("No expressions supplied.")
        return 1

    if args.remote:
        try:
            service = CalculatorHttpService.from_settings()
        except CalculatorError as exc:
            logger.error(exc.message)
            return 1
        responses = evaluate_remotely(expressions, service)
    else:
        responses = evaluate_locally(expressions, Calculator.from_settings(get_settings()))

    written = write_responses(responses, sys.stdout)
    logger.info("Evaluated %d expression(s).", written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
