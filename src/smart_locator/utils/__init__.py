"""
Utilities module - Common utility functions.
"""

from smart_locator.utils.logging import setup_logging, JsonFormatter

__all__ = [
    "setup_logging",
    "JsonFormatter",
]
