from fastapi import APIRouter, Depends

from inline_calc.api.routes.calculator import get_calculator
from inline_calc.models.calculator import CompletionItemModel, CompletionRequest, CompletionResponse
from inline_calc.services.calculator import Calculator
from inline_calc.services.completion import suggest

router = APIRouter(tags=["completion"])


@router.post("/complete", response_model=CompletionResponse)
def complete_expression(
    request: CompletionRequest,
    calculator: Calculator = Depends(get_calculator),
) -> CompletionResponse:
    item = suggest(calculator, request.linePrefix)
    if item is None:
        return CompletionResponse()
    return CompletionResponse(items=[CompletionItemModel(label=item.label, detail=item.detail)])
