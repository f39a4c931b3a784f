import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from exception_handlers import unhandled_error_handler

logger = logging.getLogger(__name__)

request_context: ContextVar[Optional[Request]] = ContextVar("request_context", default=None)


def get_request_id() -> str:
    """Id of the request currently being served, or "-" outside of a request"""
    request = request_context.get()
    if request is None:
        return "-"
    return getattr(request.state, "request_id", "-")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Bind the incoming request to `request_context` for the lifetime of the call
    and write one access log line per request

    Errors no exception handler claimed become an opaque 500 here, so they
    still carry the request id.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_context.set(request)
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = await unhandled_error_handler(request, exc)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s -> %s (%.1fms)",
                request.method, request.url.path, response.status_code, elapsed_ms
            )
            response.headers["X-Request-ID"] = request.state.request_id
            return response
        finally:
            request_context.reset(token)
