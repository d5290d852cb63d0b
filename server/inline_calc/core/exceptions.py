from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from inline_calc.core.context import get_request_id

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = 500
    error_type: str = "APP_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        error: dict[str, Any] = {
            "type": self.error_type,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        trace_id = get_request_id()
        if trace_id:
            error["traceId"] = trace_id
        return {"error": error}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            "request.app_error",
            extra={"path": request.url.path, "error_type": exc.error_type, "status_code": exc.status_code},
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())
