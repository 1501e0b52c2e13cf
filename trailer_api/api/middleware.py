"""HTTP middleware for the Trailer Store API.

Stack, outermost first:
- ``RequestIdMiddleware``: correlation ID and one access log line per request
- ``PayloadSizeLimitMiddleware``: rejects oversized bodies with 413
- ``ErrorHandlerMiddleware``: last-resort 500 envelope for unhandled errors
"""

import time
from typing import Awaitable, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from trailer_api.api.responses import INTERNAL_ERROR_MESSAGE, error_response
from trailer_api.domain.exceptions import PayloadTooLargeError
from trailer_api.infrastructure.config import settings

logger = structlog.get_logger()

CallNext = Callable[[Request], Awaitable[Response]]

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its outcome.

    The ID is taken from the ``X-Request-ID`` header when the client
    sends one, bound into the structlog context for the duration of the
    request and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class PayloadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body exceeds the configured limit.

    Only ``Content-Length`` is inspected, so the body is never read for
    rejected requests.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int | None = None) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes or settings.max_body_bytes

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_body_bytes:
            error = PayloadTooLargeError(int(declared), self.max_body_bytes)
            logger.warning(
                "Payload too large",
                path=request.url.path,
                size=int(declared),
                limit=self.max_body_bytes,
            )
            return error_response(error.message, error.status_code)

        return await call_next(request)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Answer unhandled exceptions with a 500 envelope.

    Tagged catalog errors never get here; they are turned into responses
    by the exception handlers in ``trailer_api.api.errors``.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
            )
            return error_response(str(e) or INTERNAL_ERROR_MESSAGE)


def setup_middleware(app: FastAPI) -> None:
    """Install the middleware stack.

    Starlette runs the most recently added middleware first.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(PayloadSizeLimitMiddleware)
    app.add_middleware(RequestIdMiddleware)
