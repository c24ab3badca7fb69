"""JSON API for creating short URLs and reading analytics."""

from .routes import router as api_router

__all__ = ["api_router"]
