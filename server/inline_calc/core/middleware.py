from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from inline_calc.core.context import request_id_scope

logger = logging.getLogger("inline_calc.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        with request_id_scope(request.headers.get(REQUEST_ID_HEADER)) as request_id:
            start_time = time.perf_counter()
            extra = {"path": request.url.path, "method": request.method}
            logger.info("request.start", extra=extra)

            status_code = 500
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000
                extra.update({"duration_ms": round(duration_ms, 2), "status_code": status_code})
                logger.info("request.end", extra=extra)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
