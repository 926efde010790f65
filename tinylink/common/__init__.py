"""Common utilities for TinyLink."""

from .validators import (
    is_valid_url,
    is_valid_title,
    is_valid_description,
    is_valid_short_code,
    is_reserved_code,
)
from .headers import extract_forwarded_headers, build_base_url, get_forwarded_path_prefix
from .url_builder import build_short_url, normalize_path_prefix
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_title",
    "is_valid_description",
    "is_valid_short_code",
    "is_reserved_code",
    "extract_forwarded_headers",
    "build_base_url",
    "get_forwarded_path_prefix",
    "build_short_url",
    "normalize_path_prefix",
    "setup_logging",
]
