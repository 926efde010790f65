"""Validation utilities for links."""

import re
from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000

# Paths served by the app itself; a link code must never shadow them
RESERVED_CODES = frozenset({
    "api", "health", "admin", "static", "assets", "favicon",
    "robots", "sitemap", "create", "delete", "list", "stats", "code",
})

_CODE_PATTERN = re.compile(r'[a-zA-Z0-9_-]+')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.netloc or not result.hostname:
            return False, "URL must have a valid domain"

        # Raises ValueError for a non-numeric or out-of-range port
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_title(title: str) -> Tuple[bool, str]:
    """Validate a link title.

    Args:
        title: The display title

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not title or not isinstance(title, str) or not title.strip():
        return False, "Title is required"

    if len(title) > MAX_TITLE_LENGTH:
        return False, f"Title is too long (max {MAX_TITLE_LENGTH} characters)"

    return True, ""


def is_valid_description(description: str) -> Tuple[bool, str]:
    """Validate an optional description."""
    if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
        return False, f"Description is too long (max {MAX_DESCRIPTION_LENGTH} characters)"
    return True, ""


def is_reserved_code(short_code: str) -> bool:
    """Check whether a code collides with a path the app serves."""
    return short_code.lower() in RESERVED_CODES


def is_valid_short_code(short_code: str, min_length: int = 3, max_length: int = 32) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not _CODE_PATTERN.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    if is_reserved_code(short_code):
        return False, f"'{short_code}' is a reserved word and cannot be used"

    return True, ""
