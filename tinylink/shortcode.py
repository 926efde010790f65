"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes for links.

    The generator only proposes codes. Uniqueness is decided by the store
    when the candidate is inserted.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    # Characters accepted in codes besides the base62 alphabet
    EXTRA_CHARS = "-_"

    def __init__(self, default_length: int = 6, alphabet: Optional[str] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            alphabet: Characters to draw from (defaults to base62)

        Raises:
            ValueError: If the alphabet is empty, not URL-safe, or the length is not positive
        """
        alphabet = alphabet if alphabet is not None else self.BASE62_CHARS

        if default_length < 1:
            raise ValueError("Short code length must be at least 1")
        if not alphabet:
            raise ValueError("Short code alphabet must not be empty")
        if not self.is_valid_format(alphabet):
            raise ValueError("Short code alphabet must only contain letters, digits, '-' and '_'")

        self.default_length = default_length
        # Deduplicate while keeping order so every character has equal weight
        self.alphabet = "".join(dict.fromkeys(alphabet))

    @property
    def code_space(self) -> int:
        """Number of distinct codes of the default length."""
        return len(self.alphabet) ** self.default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(random.choices(self.alphabet, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (alphanumeric, '-' or '_').

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        allowed = ShortCodeGenerator.BASE62_CHARS + ShortCodeGenerator.EXTRA_CHARS
        return bool(code) and all(c in allowed for c in code)
