"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .memory import InMemoryURLStore
from .models import URLRecord, AnalyticsRecord, ClickEvent

__all__ = ["URLStoreBase", "InMemoryURLStore", "URLRecord", "AnalyticsRecord", "ClickEvent"]
