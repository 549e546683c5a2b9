"""
Dependency Injection container for OKpay.

Manages lifecycle and dependencies of all application components.
"""

import logging
from pathlib import Path
from typing import Optional

from okpay.application.services import CurrencyConverter, MemoProvider
from okpay.application.session import PaymentSession
from okpay.application.use_cases import (
    BuildPaymentLink,
    BuildTransferDirective,
    DeliverTransfer,
    DeliveryPolicy,
    ValidateAccount,
)
from okpay.config.settings import Settings
from okpay.domain.services import (
    IAccountRegistry,
    IExchangeRateProvider,
    IKeyValueStore,
    INavigator,
    ISigningExtension,
)
from okpay.infrastructure.cache import RateCache
from okpay.infrastructure.hive import HiveAccountRegistryClient
from okpay.infrastructure.rates import ExchangeRateClient
from okpay.infrastructure.signing import (
    BrowserNavigator,
    CallbackSigningExtension,
    CallbackTransferFn,
)
from okpay.infrastructure.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from shared.reporter import SystemReporter

RATE_STORE_FILENAME = "rates.json"


class Container:
    """
    Dependency Injection container.

    Creates and manages all application dependencies.
    Implements singleton pattern for shared resources; any adapter can be
    replaced by passing it to the constructor.
    """

    def __init__(
        self,
        settings: Settings,
        reporter: Optional[SystemReporter] = None,
        registry: Optional[IAccountRegistry] = None,
        rate_provider: Optional[IExchangeRateProvider] = None,
        rate_store: Optional[IKeyValueStore] = None,
        session_store: Optional[IKeyValueStore] = None,
        navigator: Optional[INavigator] = None,
        extension: Optional[ISigningExtension] = None,
        extension_fn: Optional[CallbackTransferFn] = None,
    ):
        """
        Initialize container with settings.

        Args:
            settings: Application settings
            reporter: Shared reporter (built from settings when omitted)
            registry: Account registry override
            rate_provider: Exchange-rate source override
            rate_store: Persistent store override for the rate cache
            session_store: Session store override for the memo
            navigator: URL opener override
            extension: In-process signing extension, if one is available
            extension_fn: Callback-style extension entry point, wrapped in
                CallbackSigningExtension when no extension is given
        """
        self.settings = settings
        self._reporter = reporter
        self._registry = registry
        self._rate_provider = rate_provider
        self._rate_store = rate_store
        self._session_store = session_store
        self._navigator = navigator
        self._extension = extension
        self._extension_fn = extension_fn

        self._rate_cache: Optional[RateCache] = None
        self._converter: Optional[CurrencyConverter] = None
        self._memo_provider: Optional[MemoProvider] = None

    @property
    def reporter(self) -> SystemReporter:
        """
        Get SystemReporter singleton configured from settings.

        Returns:
            SystemReporter instance
        """
        if self._reporter is None:
            log_dir = None
            name = "okpay"
            if self.settings.log_file:
                log_path = Path(self.settings.log_file).expanduser()
                log_dir, name = str(log_path.parent), log_path.stem
            self._reporter = SystemReporter(
                name=name,
                log_dir=log_dir,
                level=getattr(logging, self.settings.log_level.upper()),
                verbose=self.settings.verbose,
            )
        return self._reporter

    @property
    def registry(self) -> IAccountRegistry:
        """Get Hive account registry client singleton."""
        if self._registry is None:
            self._registry = HiveAccountRegistryClient(
                rpc_url=self.settings.hive_rpc_url,
                timeout=self.settings.http_timeout_seconds,
                max_retries=self.settings.http_max_retries,
                retry_initial_delay=self.settings.http_retry_initial_delay,
                reporter=self.reporter,
            )
        return self._registry

    @property
    def rate_provider(self) -> IExchangeRateProvider:
        """Get exchange-rate client singleton."""
        if self._rate_provider is None:
            self._rate_provider = ExchangeRateClient(
                url=self.settings.exchange_rate_url,
                timeout=self.settings.http_timeout_seconds,
                max_retries=self.settings.http_max_retries,
                retry_initial_delay=self.settings.http_retry_initial_delay,
                reporter=self.reporter,
            )
        return self._rate_provider

    @property
    def rate_store(self) -> IKeyValueStore:
        """Get persistent store backing the rate cache."""
        if self._rate_store is None:
            self._rate_store = JsonFileKeyValueStore(
                self.settings.storage_path / RATE_STORE_FILENAME
            )
        return self._rate_store

    @property
    def session_store(self) -> IKeyValueStore:
        """Get session-scoped store holding the memo."""
        if self._session_store is None:
            self._session_store = InMemoryKeyValueStore()
        return self._session_store

    @property
    def navigator(self) -> INavigator:
        """Get URL navigator singleton."""
        if self._navigator is None:
            self._navigator = BrowserNavigator(reporter=self.reporter)
        return self._navigator

    @property
    def extension(self) -> Optional[ISigningExtension]:
        """Get the signing extension, if one was provided."""
        if self._extension is None and self._extension_fn is not None:
            self._extension = CallbackSigningExtension(
                self._extension_fn,
                timeout=self.settings.extension_timeout_seconds,
                reporter=self.reporter,
            )
        return self._extension

    @property
    def rate_cache(self) -> RateCache:
        """Get rate cache singleton."""
        if self._rate_cache is None:
            self._rate_cache = RateCache(
                self.rate_store,
                prefix=self.settings.rate_cache_prefix,
                reporter=self.reporter,
            )
        return self._rate_cache

    @property
    def converter(self) -> CurrencyConverter:
        """Get currency converter singleton."""
        if self._converter is None:
            self._converter = CurrencyConverter(
                self.rate_provider, self.rate_cache, reporter=self.reporter
            )
        return self._converter

    @property
    def memo_provider(self) -> MemoProvider:
        """Get memo provider singleton (one memo per container)."""
        if self._memo_provider is None:
            self._memo_provider = MemoProvider(
                self.session_store,
                key=self.settings.memo_storage_key,
                reporter=self.reporter,
            )
        return self._memo_provider

    def get_validate_account_use_case(self) -> ValidateAccount:
        return ValidateAccount(self.registry, reporter=self.reporter)

    def get_build_directive_use_case(self) -> BuildTransferDirective:
        return BuildTransferDirective(asset=self.settings.settlement_asset)

    def get_deliver_transfer_use_case(self) -> DeliverTransfer:
        """
        Get DeliverTransfer configured with the delivery policy.

        Returns:
            Use case instance
        """
        return DeliverTransfer(
            navigator=self.navigator,
            extension=self.extension,
            policy=DeliveryPolicy(self.settings.delivery_policy),
            fallback_seconds=self.settings.deep_link_fallback_seconds,
            keychain_scheme=self.settings.keychain_scheme,
            signer_url=self.settings.signer_transfer_url,
            reporter=self.reporter,
        )

    def get_payment_link_use_case(self) -> BuildPaymentLink:
        return BuildPaymentLink(self.settings.payment_base_url)

    def create_session(self) -> PaymentSession:
        """
        Create a PaymentSession wired to this container.

        Returns:
            New session sharing the container's memo provider
        """
        return PaymentSession(
            validate_account=self.get_validate_account_use_case(),
            converter=self.converter,
            memo_provider=self.memo_provider,
            build_directive=self.get_build_directive_use_case(),
            deliver_transfer=self.get_deliver_transfer_use_case(),
            debounce_seconds=self.settings.validation_debounce_seconds,
            default_currency=self.settings.default_currency,
            reporter=self.reporter,
        )

    async def close(self) -> None:
        """Close HTTP sessions owned by the clients."""
        for client in (self._registry, self._rate_provider):
            close = getattr(client, "close", None)
            if close is not None:
                await close()
