"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from tinylink.common.headers import get_serving_host


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the serving host from Host / X-Forwarded-* headers."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Store the serving host in request state."""
        request.state.serving_host = get_serving_host(dict(request.headers))

        response = await call_next(request)
        return response
