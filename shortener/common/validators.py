"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Any, Optional, Tuple

from ..shortcode import ShortCodeGenerator


MAX_URL_LENGTH = 2048

# Single-segment routes that a short code would shadow
RESERVED_CODES = {"health"}

# One hundred years; keeps expiry far inside datetime range
MAX_VALIDITY_MINUTES = 100 * 365 * 24 * 60
MAX_VALIDITY_DIGITS = 32
VALIDITY_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
        # Accessing port validates it
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    # Check if scheme is http or https
    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    # Check if netloc (domain) exists
    if not result.hostname:
        return False, "URL must have a valid domain"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, (
            "Invalid shortcode format. Must be alphanumeric and up to "
            f"{ShortCodeGenerator.MAX_LENGTH} characters"
        )

    if short_code.lower() in RESERVED_CODES:
        return False, f"'{short_code}' is a reserved word and cannot be used"

    return True, ""


def parse_validity(validity: Any, default: int) -> Tuple[Optional[int], str]:
    """Parse a validity period in minutes.

    Accepts ints and integer-valued strings up to ``MAX_VALIDITY_MINUTES``.
    ``None`` falls back to ``default``.

    Returns:
        Tuple of (minutes or None, error_message)
    """
    if validity is None:
        return default, ""

    error = (
        "Validity must be a positive integer representing minutes "
        f"(at most {MAX_VALIDITY_MINUTES})"
    )

    if isinstance(validity, bool):
        return None, error

    if isinstance(validity, str):
        validity = validity.strip()
        # ASCII digits only; str.isdigit() also accepts superscripts
        if len(validity) > MAX_VALIDITY_DIGITS or not VALIDITY_PATTERN.fullmatch(validity):
            return None, error
        try:
            validity = int(validity)
        except ValueError:
            return None, error
    elif isinstance(validity, float):
        if not validity.is_integer():
            return None, error
        validity = int(validity)
    elif not isinstance(validity, int):
        return None, error

    if not 0 < validity <= MAX_VALIDITY_MINUTES:
        return None, error

    return validity, ""
