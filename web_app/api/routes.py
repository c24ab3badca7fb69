"""API routes implementation."""

import logging

from fastapi import APIRouter, Request, status

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    AnalyticsResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortener.errors import NotFound

router = APIRouter()
logger = logging.getLogger("url_shortener.api")


@router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a validity in minutes and a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    # Errors propagate to the app's ShortenerError handler
    result = await service.create_short_url(
        original_url=body.url,
        validity=body.validity,
        custom_code=body.shortcode,
    )

    return ShortenResponse(short_link=result["short_link"], expiry=result["expiry"])


@router.get(
    "/shorturls/{short_code}",
    response_model=AnalyticsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL analytics",
    description="Get click analytics for a short URL. Expired short URLs still report.",
)
async def get_url_analytics(request: Request, short_code: str):
    """Get analytics for a shortened URL."""
    service = request.app.state.service

    analytics = await service.get_analytics(short_code)

    if not analytics:
        raise NotFound("Short URL not found")

    return AnalyticsResponse(**analytics)


@router.get(
    "/api/statistics",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get every short URL with its click count, plus totals.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()
    logger.info(f"All statistics retrieved ({stats['total_urls']} URLs)")

    return StatisticsResponse(**stats)
