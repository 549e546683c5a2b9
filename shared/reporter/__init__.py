"""System reporting for OKpay components."""

from shared.reporter.system_reporter import SystemReporter

__all__ = ["SystemReporter"]
