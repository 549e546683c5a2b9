"""
Shared utilities for OKpay components.

Logging (SystemReporter), resilience patterns and the LaborantTest
base used by every component test suite.
"""
