"""Tests that simultaneous requests keep the store consistent.

The app runs on a single event loop; the store's lock makes every
check-then-insert atomic, so concurrent creations never share a code.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Many simultaneous requests against one in-memory store."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /health requests all succeed."""
        concurrency = 50
        tasks = [client.get("/health") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            assert r.json()["status"] == "healthy"

    async def test_concurrent_shorten_requests(self, client):
        """Many concurrent POST /shorturls; all succeed and short links are unique."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [
            client.post("/shorturls", json={"url": url})
            for url in urls
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        links = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            links.append(r.json()["shortLink"])

        assert len(links) == len(set(links)), "All short links must be unique under concurrency"

        stats = (await client.get("/api/statistics")).json()
        assert stats["totalUrls"] == concurrency
        assert [u["originalUrl"] for u in stats["urls"]] == urls

    async def test_concurrent_same_custom_code(self, client):
        """Racing requests for one custom code: exactly one wins, the rest conflict."""
        concurrency = 20
        tasks = [
            client.post("/shorturls", json={"url": f"https://example.com/{i}", "shortcode": "contested"})
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses == [201] + [409] * (concurrency - 1)

        stats = (await client.get("/api/statistics")).json()
        assert stats["totalUrls"] == 1

    async def test_concurrent_redirect_requests(self, client):
        """Concurrent redirects all succeed and every click is counted once."""
        create_resp = await client.post(
            "/shorturls",
            json={"url": "https://example.com/redirect-target", "shortcode": "busy"},
        )
        assert create_resp.status_code == 201

        concurrency = 20
        tasks = [
            client.get("/busy", follow_redirects=False)
            for _ in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        analytics = (await client.get("/shorturls/busy")).json()
        assert analytics["totalClicks"] == concurrency
        assert len(analytics["clicks"]) == concurrency
