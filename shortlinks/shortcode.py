"""Short code generation utilities."""

import random
import re
import string
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union


# Minimum and maximum length accepted for any short code
MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 8

CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")


class ShortCodeGenerator:
    """Generate short codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = MIN_CODE_LENGTH, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes (6-8)
            rng: Entropy source; a fresh ``random.Random`` when omitted
        """
        if not MIN_CODE_LENGTH <= default_length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"Code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH}"
            )
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each character is drawn uniformly from the 62-character alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))


@dataclass(frozen=True)
class Allocated:
    """A candidate code that no existing link uses."""

    code: str


@dataclass(frozen=True)
class Exhausted:
    """Every candidate collided."""

    attempts: int


AllocationResult = Union[Allocated, Exhausted]


async def find_free_code(
    generator: ShortCodeGenerator,
    exists: Callable[[str], Awaitable[bool]],
    max_attempts: int = 10,
) -> AllocationResult:
    """Draw random codes until one is unused, at most ``max_attempts`` times.

    Args:
        generator: Source of candidate codes
        exists: Async callback returning True when a code is already taken
        max_attempts: Upper bound on candidates tried

    Returns:
        ``Allocated`` with the free code, or ``Exhausted`` when all collided
    """
    for _ in range(max_attempts):
        candidate = generator.generate_random()
        if not await exists(candidate):
            return Allocated(candidate)
    return Exhausted(max_attempts)
