"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Random source (defaults to the OS entropy pool)
        """
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random alphanumeric code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

