"""Common utilities for TinyLink."""

from .validators import normalize_url, is_valid_url, is_valid_code, is_reserved
from .headers import get_serving_host
from .logging_config import setup_logging

__all__ = [
    "normalize_url",
    "is_valid_url",
    "is_valid_code",
    "is_reserved",
    "get_serving_host",
    "setup_logging",
]
