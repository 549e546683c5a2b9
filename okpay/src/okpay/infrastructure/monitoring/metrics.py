"""
Prometheus metrics for OKpay.

Module-level collectors registered once on the default registry.
"""

from prometheus_client import Counter, Histogram

registry_requests_total = Counter(
    "okpay_registry_requests_total",
    "Total Hive account registry requests",
    ["status"],
)

registry_request_duration = Histogram(
    "okpay_registry_request_duration_seconds",
    "Hive account registry request duration",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

rate_requests_total = Counter(
    "okpay_rate_requests_total",
    "Total exchange-rate requests",
    ["status"],
)

rate_cache_events_total = Counter(
    "okpay_rate_cache_events_total",
    "Rate cache reads and writes by outcome",
    ["event"],
)

account_validations_total = Counter(
    "okpay_account_validations_total",
    "Account validations by verdict",
    ["verdict"],
)

stale_validations_total = Counter(
    "okpay_stale_validations_total",
    "Validation results dropped because a newer candidate was issued",
)

deliveries_total = Counter(
    "okpay_deliveries_total",
    "Transfer deliveries by terminal channel",
    ["channel"],
)
