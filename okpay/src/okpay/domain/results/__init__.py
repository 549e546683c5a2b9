"""
Tagged result variants for validation and delivery.
"""

from okpay.domain.results.delivery_outcome import (
    ChannelRaced,
    DeliveryOutcome,
    ExtensionHandled,
    RaceTarget,
)
from okpay.domain.results.validation_result import (
    AccountRecord,
    Invalid,
    InvalidReason,
    Valid,
    ValidationResult,
)

__all__ = [
    "AccountRecord",
    "Valid",
    "Invalid",
    "InvalidReason",
    "ValidationResult",
    "ExtensionHandled",
    "ChannelRaced",
    "RaceTarget",
    "DeliveryOutcome",
]
