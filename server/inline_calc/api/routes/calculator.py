from functools import lru_cache

from fastapi import APIRouter, Depends, Query

from inline_calc.models.calculator import CalculationResponse
from inline_calc.services.calculator import Calculator

router = APIRouter(tags=["calculator"])


@lru_cache
def get_calculator() -> Calculator:
    return Calculator.from_settings()


@router.get("/calc", response_model=CalculationResponse)
def evaluate_calculator_expression(
    query: str = Query(..., description="Arithmetic expression to evaluate."),
    calculator: Calculator = Depends(get_calculator),
) -> CalculationResponse:
    result = calculator.evaluate(query)
    return CalculationResponse.from_result(query, result, calculator.to_string(result))
