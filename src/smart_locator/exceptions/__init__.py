"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Smart Locator,
providing clear error types for different failure scenarios.
"""

from smart_locator.exceptions.base import (
    SmartLocatorError,
    ConfigurationError,
)
from smart_locator.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    BrowserConnectionError,
    NavigationError,
)
from smart_locator.exceptions.locator import (
    LocatorError,
    ElementResolutionError,
    InteractionFailureError,
    StabilityTimeoutError,
    HistoryStoreIOError,
)

__all__ = [
    # Base exceptions
    "SmartLocatorError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "BrowserConnectionError",
    "NavigationError",
    # Locator exceptions
    "LocatorError",
    "ElementResolutionError",
    "InteractionFailureError",
    "StabilityTimeoutError",
    "HistoryStoreIOError",
]
