"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple

from .models import URLRecord, AnalyticsRecord, ClickEvent


class URLStoreBase(ABC):
    """Abstract base class for short link storage."""

    @abstractmethod
    async def create_short_url(self, record: URLRecord) -> bool:
        """Insert a URL record together with an empty analytics record.

        The existence check and the insert happen as one step.

        Args:
            record: The URL record to store

        Returns:
            True if created, False if the short code already exists
        """

    @abstractmethod
    async def get_url_record(self, short_code: str) -> Optional[URLRecord]:
        """Get the URL record for a short code, expired or not.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None otherwise
        """

    @abstractmethod
    async def record_click(self, short_code: str, click: ClickEvent) -> Optional[int]:
        """Append a click to a short code's analytics.

        Args:
            short_code: The short code that was visited
            click: The click event

        Returns:
            New click count, or None when the code has no analytics record
        """

    @abstractmethod
    async def get_analytics(self, short_code: str) -> Optional[AnalyticsRecord]:
        """Get a snapshot of the analytics record for a short code."""

    @abstractmethod
    async def list_urls(self) -> List[Tuple[URLRecord, int]]:
        """List every URL record with its click count, in creation order."""

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""

    async def health_check(self) -> bool:
        """Check if the store is usable."""
        return True
