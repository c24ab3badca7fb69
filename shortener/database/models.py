"""Data models for URL shortener."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


DIRECT_REFERRER = "direct"


@dataclass(frozen=True)
class URLRecord:
    """A short code and the URL it points to."""

    short_code: str
    original_url: str
    created_at: datetime
    expires_at: datetime
    validity: int

    def is_expired(self, now: datetime) -> bool:
        """Expired once ``now`` is past the expiry timestamp."""
        return now > self.expires_at


@dataclass(frozen=True)
class ClickEvent:
    """A single visit through a short link."""

    timestamp: datetime
    referrer: str = DIRECT_REFERRER
    user_agent: str = ""
    ip: str = ""
    geolocation: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp,
            "referrer": self.referrer,
            "user_agent": self.user_agent,
            "ip": self.ip,
            "geolocation": self.geolocation,
        }


@dataclass
class AnalyticsRecord:
    """Click history for one short code. Clicks are kept in arrival order."""

    short_code: str
    total_clicks: int = 0
    clicks: List[ClickEvent] = field(default_factory=list)

    def add_click(self, click: ClickEvent) -> None:
        self.clicks.append(click)
        self.total_clicks += 1

    def snapshot(self) -> "AnalyticsRecord":
        """Copy that is safe to hand out while the original keeps growing."""
        return AnalyticsRecord(
            short_code=self.short_code,
            total_clicks=self.total_clicks,
            clicks=list(self.clicks),
        )
