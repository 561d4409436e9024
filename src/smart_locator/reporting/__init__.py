"""
Reporting module for smart-locator.

Turns the locator history into HTML/JSON reports for humans.
"""

from smart_locator.reporting.locator_report import (
    DEFAULT_REPORT_DIR,
    LocatorReport,
    LocatorRow,
    RateStatus,
    rate_status,
)

__all__ = [
    "DEFAULT_REPORT_DIR",
    "LocatorReport",
    "LocatorRow",
    "RateStatus",
    "rate_status",
]
