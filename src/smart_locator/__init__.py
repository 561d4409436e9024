"""
Smart Locator - Resilient element resolution for browser end-to-end tests.

Maps logical element keys to live elements through a primary selector and
generated fallbacks, keeps success/failure history across runs, and wraps
clicks and fills in retry, stability and diagnostic logic.

Example:
    >>> from smart_locator import HistoryStore, LocatorResolver, InteractionEngine
    >>> store = HistoryStore.from_path("test-results/locator-history.json")
    >>> resolver = LocatorResolver(page, store)
    >>> engine = InteractionEngine(page, resolver)
    >>> await engine.smart_click("loginButton", "#login")
"""

__version__ = "0.1.0"

from smart_locator.config.settings import Settings
from smart_locator.locator import (
    AlternativeSelectorGenerator,
    ClickOptions,
    DiagnosticsBuilder,
    HistoryStore,
    InteractionEngine,
    LocatorResolver,
    StabilityWaiter,
)
from smart_locator.pages import BasePage

__all__ = [
    "Settings",
    "AlternativeSelectorGenerator",
    "ClickOptions",
    "DiagnosticsBuilder",
    "HistoryStore",
    "InteractionEngine",
    "LocatorResolver",
    "StabilityWaiter",
    "BasePage",
    "__version__",
]
