"""
Signing link encoders.

Two URL forms for the same transfer:
- keychain deep link (requestBroadcast with one transfer operation)
- hosted signer page with to/amount/memo query parameters
"""

import json
from urllib.parse import quote, urlencode

from okpay.domain.entities.transfer_directive import TransferDirective

# Sender placeholder; the signing agent substitutes the user's account.
FROM_PLACEHOLDER = "<FROM>"

# Characters encodeURIComponent leaves alone beyond quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"


def transfer_operation(directive: TransferDirective) -> list:
    """Hive operation tuple for the directive."""
    return [
        "transfer",
        {
            "from": FROM_PLACEHOLDER,
            "to": directive.to.value,
            "amount": directive.amount_with_unit,
            "memo": directive.memo.value,
        },
    ]


def build_keychain_deep_link(
    directive: TransferDirective, scheme: str = "keychain"
) -> str:
    """
    Deep link asking a native handler to broadcast the transfer.

    Example:
        keychain://requestBroadcast?operations=%5B%22transfer%22%2C...
    """
    operations = json.dumps(
        transfer_operation(directive), separators=(",", ":"), ensure_ascii=False
    )
    return f"{scheme}://requestBroadcast?operations=" + quote(
        operations, safe=_URI_COMPONENT_SAFE
    )


def build_signer_url(
    directive: TransferDirective,
    signer_url: str = "https://hivesigner.com/sign/transfer",
) -> str:
    """Hosted signer page prefilled with the transfer."""
    query = urlencode(
        {
            "to": directive.to.value,
            "amount": directive.amount_with_unit,
            "memo": directive.memo.value,
        }
    )
    return f"{signer_url}?{query}"
