"""
Interfaces module - Abstract contracts for the host automation layer.
"""

from smart_locator.interfaces.browser import (
    BrowserType,
    IBrowser,
    IPage,
    ILocator,
)

__all__ = [
    "BrowserType",
    "IBrowser",
    "IPage",
    "ILocator",
]
