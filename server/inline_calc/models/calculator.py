from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from inline_calc.models.result import Result


class CalculationResponse(BaseModel):
    expression: str = Field(..., description="The expression text exactly as submitted.")
    success: bool = Field(..., description="Whether the expression evaluated to a meaningful value.")
    value: str = Field(..., description="Exact decimal value of the result.")
    display: str | None = Field(
        None, description="Result rendered in the inferred base; null when evaluation failed."
    )
    base: str = Field("undefined", description="Numeric base inferred from the literals.")
    separator: str = Field("none", description="Digit separator inferred from the literals.")

    @classmethod
    def from_result(cls, expression: str, result: Result, display: str) -> "CalculationResponse":
        return cls(
            expression=expression,
            success=result.success,
            value=str(result.value),
            display=display if result.success else None,
            base=result.base.name.lower(),
            separator=result.separator.name.lower(),
        )


class CompletionRequest(BaseModel):
    linePrefix: str = Field(..., description="Text of the current line up to the cursor.")


class CompletionItemModel(BaseModel):
    label: str = Field(..., description="Literal result to insert.")
    detail: str = Field(..., description="Expression and result shown alongside the suggestion.")


class CompletionResponse(BaseModel):
    items: List[CompletionItemModel] = Field(default_factory=list)
