from __future__ import annotations

from inline_calc.core.exceptions import AppError


class CalculatorError(AppError):
    status_code = 400
    error_type = "CALCULATOR_ERROR"


class ExpressionSyntaxError(CalculatorError):
    error_type = "EXPRESSION_SYNTAX_ERROR"
