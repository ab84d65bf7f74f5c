"""
Custom middleware for the FastAPI application.
"""
import uuid
import time
from typing import Callable, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from contextvars import ContextVar

from ndis_directory.core.logging import logger

# Context variable to store request ID across async calls
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to attach a request ID to each request.

    The request ID is:
    1. Taken from an incoming X-Request-Id header, or generated as a UUID
    2. Stored in a context variable for access in other parts of the app
    3. Added to response headers (X-Request-Id)
    4. Included in request log messages and error responses
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

        request_id_var.set(request_id)
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            "Incoming request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed with exception: {str(e)}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                },
                exc_info=True,
            )
            raise

        latency = time.time() - start_time

        response.headers["X-Request-Id"] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "latency_seconds": round(latency, 4),
            },
        )

        return response


def get_request_id() -> str:
    """
    Get the current request ID from context.
    Returns a fresh UUID if not in a request context.
    """
    request_id = request_id_var.get()
    if request_id is None:
        return str(uuid.uuid4())
    return request_id
