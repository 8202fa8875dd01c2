"""Validation utilities for TinyLink."""

import re
from urllib.parse import urlparse
from typing import Optional, Tuple


CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

_BARE_SCHEME = re.compile(r"^https?:?$", re.IGNORECASE)
_HAS_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_BARE_DOMAIN = re.compile(r"^\S+\.\S+$")

# Single path segments owned by the service itself.
RESERVED_NAMES = {"healthz", "code"}
RESERVED_PREFIX = "api"


def normalize_url(raw: Optional[str]) -> Optional[str]:
    """Normalize a submitted URL.

    Args:
        raw: The URL as typed by the client

    Returns:
        The URL with a scheme, or None if it cannot be normalized
    """
    if not raw or not isinstance(raw, str):
        return None

    text = raw.strip()

    if _BARE_SCHEME.match(text):
        return None

    if _HAS_SCHEME.match(text):
        return text

    if _BARE_DOMAIN.match(text):
        return "https://" + text

    return None


def is_valid_url(url: str, serving_host: Optional[str] = None) -> Tuple[bool, str]:
    """Validate a normalized URL.

    Args:
        url: The URL to validate
        serving_host: Host the service is reached at, without port

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    try:
        result = urlparse(url)
        hostname = result.hostname
        # Out-of-range or non-numeric ports raise here
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme.lower() not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not hostname or "." not in hostname or re.search(r"\s", hostname):
        return False, "URL must have a valid domain"

    if serving_host and hostname == serving_host.lower():
        return False, "URL must not point at this service"

    return True, ""


def is_valid_code(code: str) -> Tuple[bool, str]:
    """Validate a custom code.

    Args:
        code: The code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code or not isinstance(code, str):
        return False, "Code is required"

    if not CODE_PATTERN.fullmatch(code):
        return False, "Code must match [A-Za-z0-9]{6,8}"

    if is_reserved(code):
        return False, f"'{code}' is reserved and cannot be used"

    return True, ""


def is_reserved(segment: str) -> bool:
    """Check whether a single path segment belongs to an internal route."""
    return segment.startswith(RESERVED_PREFIX) or segment in RESERVED_NAMES
