"""Coarse location labels for click analytics.

Not a real geolocation lookup: addresses are only split into local and
unknown.
"""

import ipaddress

LOCAL_NETWORK = "Local Network"
UNKNOWN_LOCATION = "Unknown Location"


def coarse_geolocation(address: str) -> str:
    """Classify an address as local network or unknown."""
    if not address:
        return UNKNOWN_LOCATION

    try:
        ip = ipaddress.ip_address(address.strip())
    except ValueError:
        return UNKNOWN_LOCATION

    # IPv4-mapped IPv6 (::ffff:192.168.0.1)
    mapped = getattr(ip, "ipv4_mapped", None)
    if mapped is not None:
        ip = mapped

    if ip.is_loopback or ip.is_private or ip.is_link_local:
        return LOCAL_NETWORK
    return UNKNOWN_LOCATION
