"""Core business logic for the TinyLink short-code registry."""

from .shortcode import ShortCodeGenerator
from .resolver import LinkResolver
from .service import LinkService

__version__ = "1.0.0"

__all__ = ["ShortCodeGenerator", "LinkResolver", "LinkService"]
