"""
AccountName value object - sanitized Hive account identifier.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional

MAX_ACCOUNT_LENGTH = 16
MIN_ACCOUNT_LENGTH = 3

_DISALLOWED = re.compile(r"[^a-z0-9\-.]")


def sanitize_account(raw: Optional[str]) -> str:
    """
    Normalize raw user input into a candidate account name.

    Trims, lowercases, drops every character outside a-z, 0-9, hyphen
    and dot, then truncates to 16 characters. Never fails; empty input
    yields an empty string.
    """
    if not raw:
        return ""
    return _DISALLOWED.sub("", raw.strip().lower())[:MAX_ACCOUNT_LENGTH]


@dataclass(frozen=True)
class AccountName:
    """
    Value object representing a sanitized Hive account name.

    Only produced through from_raw(), so the value is always in
    canonical form. Well-formedness (length 3-16, alphanumeric first
    character) is checked separately because partially typed names
    are legitimate candidates.
    """

    value: str

    PATTERN: ClassVar[re.Pattern] = re.compile(r"^[a-z0-9][a-z0-9\-.]{2,15}$")

    def __post_init__(self):
        """Reject values that are not in sanitized form."""
        if sanitize_account(self.value) != self.value:
            raise ValueError(f"Account name is not sanitized: {self.value!r}")

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> "AccountName":
        """Create AccountName from untrusted input."""
        return cls(sanitize_account(raw))

    def is_empty(self) -> bool:
        """Check if there is no candidate at all."""
        return not self.value

    def is_well_formed(self) -> bool:
        """Check the Hive account name pattern."""
        return bool(self.PATTERN.match(self.value))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AccountName({self.value!r})"
