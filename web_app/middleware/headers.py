"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortener.common.headers import extract_forwarded_headers, get_client_address


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to extract X-Forwarded-* headers and the client address."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request and extract forwarded headers."""
        forwarded = extract_forwarded_headers(request.headers)

        # Store forwarded headers in request state for easy access
        request.state.forwarded_proto = forwarded["forwarded_proto"]
        request.state.forwarded_host = forwarded["forwarded_host"]
        request.state.forwarded_for = forwarded["forwarded_for"]

        peer = request.client.host if request.client else None
        request.state.client_address = get_client_address(request.headers, peer)

        response = await call_next(request)
        return response
