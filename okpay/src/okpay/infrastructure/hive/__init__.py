"""Hive blockchain adapters."""

from okpay.infrastructure.hive.account_registry_client import (
    HiveAccountRegistryClient,
)
from okpay.infrastructure.hive.signing_links import (
    FROM_PLACEHOLDER,
    build_keychain_deep_link,
    build_signer_url,
    transfer_operation,
)

__all__ = [
    "HiveAccountRegistryClient",
    "FROM_PLACEHOLDER",
    "build_keychain_deep_link",
    "build_signer_url",
    "transfer_operation",
]
