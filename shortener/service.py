"""Business logic service for URL shortener."""

import logging
import time
from typing import Optional, Dict, Any, Callable, List
from datetime import datetime, timedelta, timezone

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .database.memory import InMemoryURLStore
from .database.models import URLRecord, ClickEvent, DIRECT_REFERRER
from .common.validators import is_valid_url, is_valid_short_code, parse_validity
from .common.geolocation import coarse_geolocation
from .common.url_builder import build_short_url
from .errors import (
    MissingField,
    InvalidValidity,
    InvalidUrl,
    InvalidShortcodeFormat,
    ShortcodeCollision,
    AllocationExhausted,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: Optional[URLStoreBase] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        base_url: str = "http://localhost:3000",
        path_prefix: str = "",
        enable_custom_codes: bool = True,
        max_collision_retries: int = 10,
        default_validity_minutes: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: Store instance (a fresh in-memory store if omitted)
            short_code_generator: Optional short code generator
            logger: Optional logger
            base_url: Base URL short links are built on
            path_prefix: Optional path segment between base URL and code
            enable_custom_codes: Whether to allow custom short codes
            max_collision_retries: Maximum generation attempts for random codes
            default_validity_minutes: Validity used when a request gives none
            clock: Callable returning the current aware UTC datetime
        """
        self.logger = logger or logging.getLogger(__name__)
        self.store = store or InMemoryURLStore(logger=self.logger)
        self.generator = short_code_generator or ShortCodeGenerator()
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.enable_custom_codes = enable_custom_codes
        self.max_collision_retries = max(1, max_collision_retries)
        self.default_validity_minutes = default_validity_minutes
        self.clock = clock or utc_now
        self._started = time.monotonic()

    def short_link(self, short_code: str) -> str:
        """Externally addressable link for a short code."""
        return build_short_url(short_code, self.base_url, self.path_prefix)

    async def create_short_url(
        self,
        original_url: Optional[str],
        validity: Any = None,
        custom_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new short URL.

        Every check runs before the store is touched, so a failure leaves
        nothing behind.

        Args:
            original_url: The original long URL
            validity: Lifetime in minutes (default used when None)
            custom_code: Optional custom short code

        Returns:
            Dictionary with short_code, short_link, original_url, created_at, expiry

        Raises:
            MissingField: No URL given
            InvalidValidity: Validity is not a positive integer
            InvalidUrl: URL is not an absolute http(s) URL
            InvalidShortcodeFormat: Custom code malformed, reserved or disabled
            ShortcodeCollision: Custom code already in use
            AllocationExhausted: No free random code within the retry limit
        """
        if not original_url:
            raise MissingField("Missing required field: url")

        minutes, error = parse_validity(validity, self.default_validity_minutes)
        if minutes is None:
            raise InvalidValidity(error)

        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            self.logger.warning(f"Rejected URL {original_url!r}: {error}")
            raise InvalidUrl(f"Invalid URL format: {error}")

        if custom_code:
            if not self.enable_custom_codes:
                raise InvalidShortcodeFormat("Custom short codes are not enabled")

            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                self.logger.warning(f"Rejected custom short code {custom_code!r}: {error}")
                raise InvalidShortcodeFormat(error)

            record = self._new_record(custom_code, original_url, minutes)
            if not await self.store.create_short_url(record):
                self.logger.warning(f"Short code collision: {custom_code}")
                raise ShortcodeCollision(f"Shortcode '{custom_code}' already exists")
        else:
            record = await self._insert_with_generated_code(original_url, minutes)

        self.logger.info(
            f"Created short URL: {record.short_code} -> {original_url} "
            f"(expires {record.expires_at.isoformat()})"
        )

        return {
            "short_code": record.short_code,
            "short_link": self.short_link(record.short_code),
            "original_url": record.original_url,
            "created_at": record.created_at,
            "expiry": record.expires_at,
        }

    async def get_original_url(self, short_code: str) -> Optional[URLRecord]:
        """Resolve a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The URL record, or None if unknown or expired
        """
        record = await self.store.get_url_record(short_code)

        if record is None:
            self.logger.warning(f"Short code not found: {short_code}")
            return None

        if record.is_expired(self.clock()):
            self.logger.warning(
                f"Short code expired: {short_code} (at {record.expires_at.isoformat()})"
            )
            return None

        self.logger.debug(f"Resolved URL: {short_code} -> {record.original_url}")
        return record

    async def record_click(
        self,
        short_code: str,
        referrer: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> None:
        """Record a visit. Unknown codes are ignored; expiry is not checked."""
        ip = ip or ""
        click = ClickEvent(
            timestamp=self.clock(),
            referrer=referrer or DIRECT_REFERRER,
            user_agent=user_agent or "",
            ip=ip,
            geolocation=coarse_geolocation(ip),
        )

        total = await self.store.record_click(short_code, click)
        if total is None:
            self.logger.debug(f"Click for unknown short code ignored: {short_code}")
            return

        self.logger.info(
            f"Click recorded: {short_code} (total {total}, referrer {click.referrer}, ip {ip or 'unknown'})"
        )

    async def get_analytics(self, short_code: str) -> Optional[Dict[str, Any]]:
        """Get full analytics for a short code, expired or not.

        Args:
            short_code: The short code to lookup

        Returns:
            Dictionary with URL data, click count and click history, or None
        """
        record = await self.store.get_url_record(short_code)
        analytics = await self.store.get_analytics(short_code)

        if record is None or analytics is None:
            self.logger.warning(f"Analytics not found for short code: {short_code}")
            return None

        return {
            "short_code": short_code,
            "original_url": record.original_url,
            "created_at": record.created_at,
            "expiry_date": record.expires_at,
            "expired": record.is_expired(self.clock()),
            "total_clicks": analytics.total_clicks,
            "clicks": [click.to_dict() for click in analytics.clicks],
        }

    async def list_urls(self) -> List[Dict[str, Any]]:
        """Summaries of every stored URL, in creation order."""
        now = self.clock()
        return [
            {
                "short_code": record.short_code,
                "original_url": record.original_url,
                "short_link": self.short_link(record.short_code),
                "created_at": record.created_at,
                "expiry_date": record.expires_at,
                "expired": record.is_expired(now),
                "total_clicks": clicks,
            }
            for record, clicks in await self.store.list_urls()
        ]

    async def get_statistics(self) -> Dict[str, Any]:
        """Aggregate statistics across all short URLs."""
        urls = await self.list_urls()
        return {
            "urls": urls,
            "total_urls": len(urls),
            "total_clicks": sum(url["total_clicks"] for url in urls),
        }

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        Returns:
            Dictionary with status, timestamp and uptime in seconds
        """
        healthy = await self.store.health_check()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": self.clock(),
            "uptime": time.monotonic() - self._started,
        }

    def _new_record(self, short_code: str, original_url: str, minutes: int) -> URLRecord:
        created_at = self.clock()
        return URLRecord(
            short_code=short_code,
            original_url=original_url,
            created_at=created_at,
            expires_at=created_at + timedelta(minutes=minutes),
            validity=minutes,
        )

    async def _insert_with_generated_code(self, original_url: str, minutes: int) -> URLRecord:
        """Store the URL under a fresh random code, retrying on collision.

        Raises:
            AllocationExhausted: If every attempt collided
        """
        for attempt in range(self.max_collision_retries):
            record = self._new_record(self.generator.generate_random(), original_url, minutes)

            if await self.store.create_short_url(record):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {record.short_code}")
                return record

        self.logger.error(
            f"Unable to allocate a short code after {self.max_collision_retries} attempts"
        )
        raise AllocationExhausted("Unable to generate unique short code after multiple attempts")

    async def close(self) -> None:
        """Close service resources."""
        await self.store.close()
