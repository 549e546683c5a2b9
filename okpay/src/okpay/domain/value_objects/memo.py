"""
Memo value object - per-session payment correlation token.
"""

import random
import re
from dataclasses import dataclass
from typing import ClassVar, Optional

MEMO_PREFIX = "kcs-hpos"


@dataclass(frozen=True)
class Memo:
    """
    Value object for the transfer memo.

    Format: kcs-hpos-dddd-dddd. Not a secret and not cryptographically
    random; it only lets a merchant match incoming transfers to a
    checkout session.
    """

    value: str

    PATTERN: ClassVar[re.Pattern] = re.compile(r"^kcs-hpos-\d{4}-\d{4}$")

    def __post_init__(self):
        """Validate memo format."""
        if not self.PATTERN.match(self.value):
            raise ValueError(f"Invalid memo format: {self.value!r}")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check a raw string against the memo format."""
        return bool(value) and bool(cls.PATTERN.match(value))

    def __str__(self) -> str:
        return self.value


def generate_memo(rng: Optional[random.Random] = None) -> Memo:
    """Draw two independent 0000-9999 blocks."""
    rng = rng or random
    part1 = rng.randrange(10000)
    part2 = rng.randrange(10000)
    return Memo(f"{MEMO_PREFIX}-{part1:04d}-{part2:04d}")
