"""Redirect and health routes.

``/{short_code}`` matches any single path segment, so this router is
included after the API router and ``/health`` is declared before it.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from shortener.common.headers import get_client_address, get_header
from shortener.errors import NotFound
from ..api.schemas import HealthResponse, ErrorResponse

router = APIRouter()
logger = logging.getLogger("url_shortener.web")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(**health)


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found or expired"},
    },
    summary="Follow short URL",
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL and record the click."""
    service = request.app.state.service

    record = await service.get_original_url(short_code)

    if record is None:
        raise NotFound("Short URL not found or has expired")

    # Set by ForwardedHeadersMiddleware
    ip = getattr(request.state, "client_address", None)
    if ip is None:
        peer = request.client.host if request.client else None
        ip = get_client_address(request.headers, peer)
    referrer = get_header(request.headers, "referer")

    await service.record_click(
        short_code,
        referrer=referrer,
        user_agent=get_header(request.headers, "user-agent"),
        ip=ip,
    )

    logger.info(f"Redirecting {short_code} -> {record.original_url} (referrer {referrer or 'direct'}, ip {ip or 'unknown'})")

    # 302 so every visit comes back through here and gets counted
    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)
