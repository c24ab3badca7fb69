"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_valid_short_code, parse_validity
from .headers import extract_forwarded_headers, get_client_address, get_header
from .geolocation import coarse_geolocation
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "parse_validity",
    "extract_forwarded_headers",
    "get_client_address",
    "get_header",
    "coarse_geolocation",
    "build_short_url",
    "setup_logging",
]
