from __future__ import annotations

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from inline_calc.core.config import get_settings
from inline_calc.models.calculator import CalculationResponse
from inline_calc.services.errors import CalculatorError


class CalculatorHttpServiceError(CalculatorError):
    status_code = 502
    error_type = "CALCULATOR_HTTP_ERROR"


@dataclass
class CalculatorHttpService:
    """Evaluates expressions through a remote instance of the ``/calc`` endpoint."""

    base_url: str
    timeout: float = 5.0

    @classmethod
    def from_settings(cls) -> "CalculatorHttpService":
        settings = get_settings()
        if not settings.calc_http_base_url:
            raise CalculatorHttpServiceError("CALC_HTTP_BASE_URL is not configured.")
        return cls(
            base_url=settings.calc_http_base_url.rstrip("/"),
            timeout=float(settings.calc_http_timeout_sec),
        )

    def evaluate(self, expression: str) -> CalculationResponse:
        # Sent verbatim: the remote cache keys on the exact text.
        if not expression.strip():
            raise CalculatorError("Expression cannot be empty.")

        url = f"{self.base_url}/calc"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params={"query": expression})
        except httpx.RequestError as exc:
            raise CalculatorHttpServiceError("Calculator service is unavailable.") from exc

        if response.status_code != 200:
            message = "Calculator request failed."
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict):
                error = payload.get("error")
                if isinstance(error, dict):
                    message = error.get("message", message)
            raise CalculatorHttpServiceError(message, details={"status_code": response.status_code})

        try:
            payload = response.json()
        except ValueError as exc:
            raise CalculatorHttpServiceError("Calculator response was not valid JSON.") from exc

        try:
            return CalculationResponse.model_validate(payload)
        except ValidationError as exc:
            raise CalculatorHttpServiceError("Calculator response did not match the expected schema.") from exc
