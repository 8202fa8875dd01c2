"""Header parsing utilities for TinyLink."""

from typing import Dict, Optional


def get_serving_host(headers: Dict[str, str]) -> Optional[str]:
    """Host the request was addressed to, lowercased and without port.

    Priority:
    1. X-Forwarded-Host (first entry when a proxy chain appended several)
    2. Host

    Args:
        headers: Request headers

    Returns:
        Hostname, or None when the request carries neither header
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    host = headers_lower.get("x-forwarded-host")
    if host:
        host = host.split(",")[0]
    else:
        host = headers_lower.get("host")

    if not host:
        return None
    return _strip_port(host.strip()).lower() or None


def _strip_port(host: str) -> str:
    if host.startswith("["):
        # IPv6 literal, e.g. [::1]:3000
        return host[1:].split("]")[0]
    return host.split(":")[0]
