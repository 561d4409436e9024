"""
Browser-related exceptions.
"""

from smart_locator.exceptions.base import SmartLocatorError


class BrowserError(SmartLocatorError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.

    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class BrowserConnectionError(BrowserError):
    """
    Error connecting to the browser.

    Raised when a page is requested before the browser was launched
    or after it was closed.
    """
    pass


class NavigationError(BrowserError):
    """Error during page navigation."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url
