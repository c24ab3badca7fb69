"""Short code generation utilities."""

import random
import re
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate short codes for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    MAX_LENGTH = 20

    _FORMAT = re.compile(r"[A-Za-z0-9]{1,20}")

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (seeded in tests)
        """
        if not 1 <= default_length <= self.MAX_LENGTH:
            raise ValueError(f"Short code length must be between 1 and {self.MAX_LENGTH}")
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code is 1-20 alphanumeric characters."""
        return isinstance(code, str) and bool(cls._FORMAT.fullmatch(code))
