"""
Locator module - Resilient element resolution and interaction.

Components:
- AlternativeSelectorGenerator: heuristic fallback selectors
- HistoryStore: cross-run success/failure statistics
- LocatorResolver: key + selector to a visible element
- StabilityWaiter: wait for an element to stop moving
- InteractionEngine: click/fill/select/hover with retries
- DiagnosticsBuilder: failure report for unresolved elements
"""

from smart_locator.locator.alternatives import (
    AlternativeSelectorGenerator,
    Candidate,
    SelectorStrategy,
)
from smart_locator.locator.history import (
    HistoryBackend,
    HistoryFile,
    HistoryStore,
    InMemoryBackend,
    JsonFileBackend,
    LocatorEntry,
)
from smart_locator.locator.diagnostics import DiagnosticsBuilder
from smart_locator.locator.resolver import LocatorResolver
from smart_locator.locator.stability import StabilityWaiter
from smart_locator.locator.highlight import Highlighter, HighlightConfig
from smart_locator.locator.interaction import (
    ClickOptions,
    ClickStrategy,
    InteractionEngine,
)

__all__ = [
    "AlternativeSelectorGenerator",
    "Candidate",
    "SelectorStrategy",
    "HistoryBackend",
    "HistoryFile",
    "HistoryStore",
    "InMemoryBackend",
    "JsonFileBackend",
    "LocatorEntry",
    "DiagnosticsBuilder",
    "LocatorResolver",
    "StabilityWaiter",
    "Highlighter",
    "HighlightConfig",
    "ClickOptions",
    "ClickStrategy",
    "InteractionEngine",
]
