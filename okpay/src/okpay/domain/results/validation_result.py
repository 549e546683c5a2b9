"""
Account validation results.

A validation attempt ends either Valid (with the registry record) or
Invalid (with a reason). Both variants expose the status line shown
next to the account input.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from okpay.domain.exceptions import (
    AccountNotFoundError,
    InvalidAccountFormatError,
    InvalidRecipientError,
)
from okpay.domain.value_objects.account_name import AccountName


class InvalidReason(str, Enum):
    """Why a candidate account was rejected."""

    EMPTY = "empty"
    FORMAT = "format"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class AccountRecord:
    """
    Account as returned by the registry.

    Attributes:
        name: Canonical account name
        raw: Registry record, untouched
    """

    name: AccountName
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def avatar_url(self, template: str) -> str:
        """Avatar image URL for this account."""
        return template.format(account=self.name.value)


@dataclass(frozen=True)
class Valid:
    """Candidate resolved to an existing account."""

    account: AccountRecord

    is_valid = True

    @property
    def status_text(self) -> str:
        return "Account valid"

    def require_valid(self) -> AccountRecord:
        return self.account


@dataclass(frozen=True)
class Invalid:
    """Candidate rejected before or after the registry lookup."""

    candidate: AccountName
    reason: InvalidReason

    is_valid = False

    @property
    def status_text(self) -> str:
        if self.reason == InvalidReason.EMPTY:
            return ""
        if self.reason == InvalidReason.NOT_FOUND:
            return "Account not found"
        return "Invalid account"

    def require_valid(self) -> AccountRecord:
        """
        Raise the error matching the rejection reason.

        Raises:
            InvalidRecipientError: No candidate was entered
            InvalidAccountFormatError: Candidate fails the name pattern
            AccountNotFoundError: Registry has no such account
        """
        if self.reason == InvalidReason.EMPTY:
            raise InvalidRecipientError("Recipient account is required")
        if self.reason == InvalidReason.FORMAT:
            raise InvalidAccountFormatError(self.candidate.value)
        raise AccountNotFoundError(self.candidate.value)


ValidationResult = Union[Valid, Invalid]
