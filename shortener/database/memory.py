"""In-memory store for URL shortener.

Everything lives in process memory and is lost on restart.
"""

import asyncio
import logging
from typing import Optional, List, Tuple, Dict

from .base import URLStoreBase
from .models import URLRecord, AnalyticsRecord, ClickEvent


class InMemoryURLStore(URLStoreBase):
    """Dict-backed store with one lock around every read and write."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize an empty store.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

        # Both maps share keys; dicts keep creation order
        self._urls: Dict[str, URLRecord] = {}
        self._analytics: Dict[str, AnalyticsRecord] = {}
        self._lock = asyncio.Lock()

    async def create_short_url(self, record: URLRecord) -> bool:
        async with self._lock:
            if record.short_code in self._urls:
                self.logger.debug(f"Short code already stored: {record.short_code}")
                return False

            self._urls[record.short_code] = record
            self._analytics[record.short_code] = AnalyticsRecord(short_code=record.short_code)
            return True

    async def get_url_record(self, short_code: str) -> Optional[URLRecord]:
        async with self._lock:
            return self._urls.get(short_code)

    async def record_click(self, short_code: str, click: ClickEvent) -> Optional[int]:
        async with self._lock:
            analytics = self._analytics.get(short_code)
            if analytics is None:
                return None
            analytics.add_click(click)
            return analytics.total_clicks

    async def get_analytics(self, short_code: str) -> Optional[AnalyticsRecord]:
        async with self._lock:
            analytics = self._analytics.get(short_code)
            return analytics.snapshot() if analytics else None

    async def list_urls(self) -> List[Tuple[URLRecord, int]]:
        async with self._lock:
            return [
                (record, self._analytics[code].total_clicks if code in self._analytics else 0)
                for code, record in self._urls.items()
            ]

    async def close(self) -> None:
        async with self._lock:
            count = len(self._urls)
        self.logger.info(f"Discarding in-memory store ({count} short URLs)")
