"""
Hive account registry client.

JSON-RPC client for ``condenser_api.get_accounts`` on a Hive API node.
Retries transient failures, then degrades to "no results" so callers
never see a transport exception.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from okpay.domain.exceptions import RegistryUnavailableError
from okpay.domain.services.i_account_registry import IAccountRegistry
from okpay.infrastructure.monitoring.metrics import (
    registry_request_duration,
    registry_requests_total,
)
from shared.reporter import SystemReporter
from shared.resilience import BackoffStrategy, Retry, RetryConfig, RetryError

GET_ACCOUNTS_METHOD = "condenser_api.get_accounts"


class HiveAccountRegistryClient(IAccountRegistry):
    """
    Hive JSON-RPC account lookup.

    - Exponential retry with jitter on transport errors, 5xx answers and
      JSON-RPC error objects
    - 4xx answers are not retried
    - Every failure ends as an empty result plus a warning
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_initial_delay: float = 0.5,
        session: Optional[aiohttp.ClientSession] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize registry client.

        Args:
            rpc_url: Hive API node URL
            timeout: Total request timeout in seconds
            max_retries: Max attempts per lookup
            retry_initial_delay: First backoff delay in seconds
            session: Optional shared aiohttp session (not closed by close())
            reporter: Optional SystemReporter for logging
        """
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None
        self.reporter = reporter or SystemReporter(name="hive_registry", verbose=1)
        self._request_id = 0

        self.retry = Retry(
            RetryConfig(
                max_attempts=max_retries,
                initial_delay=retry_initial_delay,
                max_delay=5.0,
                backoff_strategy=BackoffStrategy.EXPONENTIAL,
                jitter=True,
                retry_on=(aiohttp.ClientError, asyncio.TimeoutError),
            )
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _next_payload(self, names: List[str]) -> dict:
        self._request_id += 1
        return {
            "jsonrpc": "2.0",
            "method": GET_ACCOUNTS_METHOD,
            "params": [names],
            "id": self._request_id,
        }

    async def _request_once(self, payload: dict) -> List[Dict[str, Any]]:
        """
        Single JSON-RPC attempt.

        Raises:
            RegistryUnavailableError: On 4xx answers (not retried)
            aiohttp.ClientError: On transport errors, 5xx answers and
                JSON-RPC errors (retried)
        """
        session = await self._get_session()

        async with session.post(self.rpc_url, json=payload) as response:
            if response.status != 200:
                error_text = await response.text()
                if 400 <= response.status < 500:
                    raise RegistryUnavailableError(
                        f"Registry rejected request: {error_text[:200]}",
                        status_code=response.status,
                    )
                raise aiohttp.ClientError(
                    f"Registry server error {response.status}: {error_text[:200]}"
                )

            data = await response.json(content_type=None)

        if not isinstance(data, dict):
            raise aiohttp.ClientError("Registry returned a non-object body")
        if data.get("error"):
            raise aiohttp.ClientError(f"Registry RPC error: {data['error']}")

        result = data.get("result") or []
        if not isinstance(result, list):
            raise aiohttp.ClientError("Registry result is not a list")
        return [record for record in result if isinstance(record, dict)]

    async def get_accounts(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Look up accounts by name.

        Args:
            names: Account names to resolve

        Returns:
            Registry records (empty on any failure)
        """
        names = [name for name in names if name]
        if not names:
            return []

        payload = self._next_payload(names)

        try:
            with registry_request_duration.time():
                accounts = await self.retry.execute_async(self._request_once, payload)
        except (RetryError, RegistryUnavailableError, ValueError) as e:
            registry_requests_total.labels(status="error").inc()
            self.reporter.warning(
                f"Account fetch failed for {names}: {e}", context="HiveRegistry"
            )
            return []

        registry_requests_total.labels(status="success").inc()
        self.reporter.debug(
            f"Registry returned {len(accounts)} of {len(names)} accounts",
            context="HiveRegistry",
        )
        return accounts
