"""Tests for the in-memory store."""

import asyncio
import pytest
from datetime import datetime, timedelta, timezone

from shortener.database.models import URLRecord, ClickEvent


NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_record(code: str, url: str = "https://example.com", minutes: int = 30) -> URLRecord:
    return URLRecord(
        short_code=code,
        original_url=url,
        created_at=NOW,
        expires_at=NOW + timedelta(minutes=minutes),
        validity=minutes,
    )


@pytest.mark.asyncio
class TestInMemoryURLStore:
    """Test the dict-backed store."""

    async def test_create_and_get(self, store):
        """Inserted records can be read back."""
        assert await store.create_short_url(make_record("abc123"))

        record = await store.get_url_record("abc123")
        assert record.original_url == "https://example.com"
        assert await store.get_url_record("zzz") is None

    async def test_duplicate_insert_is_refused(self, store):
        """Second insert of a code leaves the first record in place."""
        assert await store.create_short_url(make_record("dup", "https://a.example"))
        assert not await store.create_short_url(make_record("dup", "https://b.example"))

        record = await store.get_url_record("dup")
        assert record.original_url == "https://a.example"

    async def test_analytics_created_with_record(self, store):
        """Every record starts with an empty analytics record."""
        await store.create_short_url(make_record("abc"))

        analytics = await store.get_analytics("abc")
        assert analytics.total_clicks == 0
        assert analytics.clicks == []

    async def test_record_click_unknown_code(self, store):
        """Clicks on unknown codes are dropped."""
        assert await store.record_click("missing", ClickEvent(timestamp=NOW)) is None
        assert await store.get_analytics("missing") is None

    async def test_record_click_counts(self, store):
        """Click count and history grow together."""
        await store.create_short_url(make_record("abc"))

        for i in range(3):
            total = await store.record_click("abc", ClickEvent(timestamp=NOW + timedelta(seconds=i)))
            assert total == i + 1

        analytics = await store.get_analytics("abc")
        assert analytics.total_clicks == 3
        assert [c.timestamp for c in analytics.clicks] == [NOW + timedelta(seconds=i) for i in range(3)]

    async def test_analytics_snapshot_is_detached(self, store):
        """A returned snapshot does not change when more clicks arrive."""
        await store.create_short_url(make_record("abc"))
        snapshot = await store.get_analytics("abc")

        await store.record_click("abc", ClickEvent(timestamp=NOW))

        assert snapshot.total_clicks == 0
        assert snapshot.clicks == []

    async def test_list_urls_in_creation_order(self, store):
        """Listing keeps insertion order and pairs click counts."""
        for code in ("zeta", "alpha", "mid"):
            await store.create_short_url(make_record(code))
        await store.record_click("alpha", ClickEvent(timestamp=NOW))

        listed = await store.list_urls()

        assert [record.short_code for record, _ in listed] == ["zeta", "alpha", "mid"]
        assert [clicks for _, clicks in listed] == [0, 1, 0]

    async def test_concurrent_inserts_same_code(self, store):
        """Only one of many simultaneous inserts of a code wins."""
        results = await asyncio.gather(
            *(store.create_short_url(make_record("race", f"https://example.com/{i}")) for i in range(20))
        )

        assert results.count(True) == 1
        assert len(await store.list_urls()) == 1

    async def test_health_check(self, store):
        """Memory store is always healthy."""
        assert await store.health_check()


class TestURLRecord:
    """Test URL record helpers."""

    def test_is_expired_boundary(self):
        """A record is still active at exactly its expiry instant."""
        record = make_record("abc", minutes=1)

        assert not record.is_expired(NOW)
        assert not record.is_expired(NOW + timedelta(minutes=1))
        assert record.is_expired(NOW + timedelta(minutes=1, microseconds=1))
