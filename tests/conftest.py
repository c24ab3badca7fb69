"""Pytest configuration and fixtures."""

import random
import pytest
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.database.memory import InMemoryURLStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


BASE_URL = "http://testserver"


class FakeClock:
    """Controllable UTC clock for expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant until advanced."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def short_code_generator():
    """Create short code generator with a seeded random source."""
    return ShortCodeGenerator(default_length=6, rng=random.Random(1234))


@pytest.fixture
def store(logger):
    """Create empty in-memory store."""
    return InMemoryURLStore(logger=logger)


@pytest.fixture
async def service(store, short_code_generator, logger, clock) -> AsyncGenerator[URLShortenerService, None]:
    """Create service instance."""
    service = URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
        base_url=BASE_URL,
        clock=clock,
    )

    yield service

    await service.close()


@pytest.fixture
def config():
    """Test configuration."""
    return Config(base_url=BASE_URL)


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
