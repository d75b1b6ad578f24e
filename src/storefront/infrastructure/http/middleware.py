"""Request tracing middleware: request ids and per-request timing logs."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.infrastructure.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a request id to every log line written while serving a request.

    The id comes from the caller's ``X-Request-ID`` header when present and
    is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Request failed with unhandled exception",
                extra={"extra_fields": {
                    "error": str(exc),
                    "duration_ms": _elapsed_ms(start_time),
                }},
            )
            raise
        else:
            if request.url.path != "/health":
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    "%s %s -> %d",
                    request.method,
                    request.url.path,
                    response.status_code,
                    extra={"extra_fields": {
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(start_time),
                    }},
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
