"""
Locator-related exceptions.

Resolution, interaction and stability errors always propagate to the
calling test. HistoryStoreIOError is raised by history backends and is
absorbed by the history store.
"""

from typing import List, Optional

from smart_locator.exceptions.base import SmartLocatorError


class LocatorError(SmartLocatorError):
    """Base exception for locator-related errors."""
    pass


class ElementResolutionError(LocatorError):
    """
    Neither the primary selector nor any alternative became visible.

    The message is the full diagnostic report, so a failing test carries
    everything needed for triage without a re-run.

    Attributes:
        key: Logical element key
        selector: Primary selector supplied by the caller
        alternatives_tried: Alternative selectors that were probed
        page_url: Page URL at the time of failure
    """

    def __init__(
        self,
        report: str,
        key: str,
        selector: str,
        alternatives_tried: Optional[List[str]] = None,
        page_url: Optional[str] = None,
    ):
        super().__init__(report)
        self.key = key
        self.selector = selector
        self.alternatives_tried = list(alternatives_tried or [])
        self.page_url = page_url


class InteractionFailureError(LocatorError):
    """
    An interaction failed after every attempt and strategy.

    Raised by click_with_retry once standard, forced and script clicks
    have failed on every attempt, and by the smart_* helpers when the
    underlying action fails.
    """

    def __init__(
        self,
        message: str,
        action: str,
        attempts: int,
        last_error: Optional[str] = None,
    ):
        super().__init__(message, {"action": action, "attempts": attempts})
        self.action = action
        self.attempts = attempts
        self.last_error = last_error


class StabilityTimeoutError(LocatorError):
    """
    Element never became visible and still within the timeout.
    """

    def __init__(self, message: str, timeout_ms: int, last_position: Optional[tuple] = None):
        super().__init__(message, {"timeout_ms": timeout_ms, "last_position": last_position})
        self.timeout_ms = timeout_ms
        self.last_position = last_position


class HistoryStoreIOError(LocatorError):
    """
    Locator history could not be read or written.

    Never surfaced to callers of the history store.
    """

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message, {"location": location})
        self.location = location
