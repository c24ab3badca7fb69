"""Header parsing utilities for URL shortener."""

from typing import Mapping, Dict, Optional


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers mapping

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def get_client_address(headers: Mapping[str, str], peer_address: Optional[str] = None) -> str:
    """Resolve the requester's address.

    Priority:
    1. First entry of X-Forwarded-For (original client behind a proxy)
    2. Socket peer address

    Args:
        headers: Request headers
        peer_address: Address of the connected peer, if known

    Returns:
        Client address, or empty string if unknown
    """
    forwarded_for = extract_forwarded_headers(headers)["forwarded_for"]
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return peer_address or ""


def get_header(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup returning empty string when absent."""
    name = name.lower()
    for k, v in headers.items():
        if k.lower() == name:
            return v or ""
    return ""
