"""
Validate account use case.

Resolves a user-entered recipient against the Hive account registry.
"""

from typing import Optional, Union

from okpay.domain.results.validation_result import (
    AccountRecord,
    Invalid,
    InvalidReason,
    Valid,
    ValidationResult,
)
from okpay.domain.services.i_account_registry import IAccountRegistry
from okpay.domain.value_objects.account_name import AccountName
from okpay.infrastructure.monitoring.metrics import account_validations_total
from shared.reporter import SystemReporter


class ValidateAccount:
    """
    Use case for checking that a recipient account exists.

    Flow:
    1. Sanitize the candidate
    2. Empty or malformed candidates are rejected without a lookup
    3. Query the registry for the single candidate
    4. No record means NOT_FOUND; otherwise the first record is returned
    """

    def __init__(
        self,
        registry: IAccountRegistry,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case.

        Args:
            registry: Account registry
            reporter: Optional SystemReporter for logging
        """
        self.registry = registry
        self.reporter = reporter or SystemReporter(name="validate_account", verbose=1)

    async def execute(self, candidate: Union[str, AccountName, None]) -> ValidationResult:
        """
        Validate a candidate account.

        Args:
            candidate: Raw input or an already sanitized AccountName

        Returns:
            Valid with the registry record, or Invalid with the reason
        """
        name = (
            candidate
            if isinstance(candidate, AccountName)
            else AccountName.from_raw(candidate)
        )

        if name.is_empty():
            return self._record(Invalid(name, InvalidReason.EMPTY))

        if not name.is_well_formed():
            return self._record(Invalid(name, InvalidReason.FORMAT))

        try:
            records = await self.registry.get_accounts([name.value])
        except Exception as e:
            self.reporter.error(
                f"Registry lookup for {name} failed: {e}", context="ValidateAccount"
            )
            records = []

        if not records:
            return self._record(Invalid(name, InvalidReason.NOT_FOUND))

        return self._record(Valid(AccountRecord(name=name, raw=records[0])))

    def _record(self, result: ValidationResult) -> ValidationResult:
        verdict = "valid" if result.is_valid else result.reason.value
        account_validations_total.labels(verdict=verdict).inc()
        return result
