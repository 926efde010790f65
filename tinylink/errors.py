"""
Error classes for the short-code registry.

Every error carries the HTTP status the API layer reports it with, so the
store and service can raise them directly and the web layer only has to
translate them into the response envelope.
"""

from typing import Optional, Dict, Any


class LinkError(Exception):
    """
    Base error for link operations.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal server error")
        details: Optional additional error details
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize link error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(LinkError, ValueError):
    """400 Missing or malformed input."""
    status_code = 400
    message = "Validation error"


class DuplicateCode(LinkError):
    """409 Requested short code is already taken."""
    status_code = 409
    message = "Short code already exists"

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' already exists", {"code": code})


class NotFound(LinkError):
    """404 Unknown id or short code."""
    status_code = 404
    message = "Not found"


class GenerationExhausted(LinkError):
    """503 No free short code found within the attempt budget."""
    status_code = 503
    message = "Unable to generate a unique short code"

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Unable to generate a unique short code after {attempts} attempts",
            {"attempts": attempts},
        )
