"""
FastAPI middleware for request correlation and logging.

Adds a request ID to every request and response, and attaches request
details to every log record written while the request is handled.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from landquote.core.logging_config import LogContext

logger = logging.getLogger(__name__)


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns each request a correlation ID.

    Reuses the caller's X-Request-ID header when present, otherwise
    generates one, and echoes it on the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        """
        Initialize RequestCorrelationMiddleware.

        Args:
            app: ASGI application
            header_name: HTTP header carrying the request ID
        """
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Tag the request with an ID and time it.

        Args:
            request: Incoming request
            call_next: Next middleware/route handler

        Returns:
            Response carrying the request ID header
        """
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"- Error: {type(e).__name__} - Duration: {duration_ms:.2f}ms",
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[self.header_name] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.2f}ms)"
        )
        return response


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Attach request_id, http_method and request_path to log records."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        context = {
            "http_method": request.method,
            "request_path": request.url.path,
        }
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            context["request_id"] = request_id

        with LogContext(**context):
            return await call_next(request)
