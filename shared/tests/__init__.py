"""
Shared testing utilities for OKpay components.

- LaborantTest: base class for all component tests (pytest-collectable)
- Test result models and output formatting for direct execution
"""

from shared.tests.base import LaborantTest
from shared.tests.models import (
    IndividualTestResult,
    TestFileResult,
    TestStatus,
    format_output,
)

__all__ = [
    "LaborantTest",
    "TestStatus",
    "IndividualTestResult",
    "TestFileResult",
    "format_output",
]
