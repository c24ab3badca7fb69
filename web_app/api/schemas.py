"""Pydantic schemas for API requests and responses.

JSON keys are camelCase; Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base model that accepts and emits camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: Optional[str] = Field(None, description="The URL to shorten")
    validity: Any = Field(None, description="Lifetime in minutes (default 30)")
    shortcode: Optional[str] = Field(None, description="Optional custom short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "validity": 60,
                    "shortcode": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_link: str = Field(..., alias="shortLink", description="The complete short URL")
    expiry: datetime = Field(..., description="Expiry timestamp")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shortLink": "http://localhost:3000/abc123",
                    "expiry": "2024-01-01T12:30:00Z"
                }
            ]
        },
    )


class ClickResponse(CamelModel):
    """A single recorded click."""

    timestamp: datetime
    referrer: str
    user_agent: str = Field(..., alias="userAgent")
    ip: str
    geolocation: str


class AnalyticsResponse(CamelModel):
    """Full analytics for one short code."""

    short_code: str = Field(..., alias="shortcode")
    original_url: str = Field(..., alias="originalUrl")
    created_at: datetime = Field(..., alias="createdAt")
    expiry_date: datetime = Field(..., alias="expiryDate")
    expired: bool
    total_clicks: int = Field(..., alias="totalClicks")
    clicks: List[ClickResponse]


class URLSummary(CamelModel):
    """One row of the aggregate statistics."""

    short_code: str = Field(..., alias="shortcode")
    original_url: str = Field(..., alias="originalUrl")
    short_link: str = Field(..., alias="shortLink")
    created_at: datetime = Field(..., alias="createdAt")
    expiry_date: datetime = Field(..., alias="expiryDate")
    expired: bool
    total_clicks: int = Field(..., alias="totalClicks")


class StatisticsResponse(CamelModel):
    """Statistics response."""

    urls: List[URLSummary]
    total_urls: int = Field(..., alias="totalUrls")
    total_clicks: int = Field(..., alias="totalClicks")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    timestamp: datetime = Field(..., description="Check timestamp")
    uptime: float = Field(..., description="Seconds since the service started")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="What went wrong")
