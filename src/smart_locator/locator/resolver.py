"""
Locator Resolver - Map a logical element key to a visible element.

Candidates (probed in order, first visible wins):
1. The primary selector supplied by the caller
2. The key's cached alternative selectors, in generation order

The winning candidate, tagged with the strategy behind it, is kept on
`last_candidate`.

Each probe waits a short, fixed time for visibility. Every call records
one success or failure for the key and persists the history.

Success is recorded against the key and its primary selector even when an
alternative won, so a permanently broken primary can look healthy in the
history as long as some alternative keeps working.
"""

import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

from smart_locator.exceptions import ElementResolutionError
from smart_locator.locator.alternatives import Candidate, SelectorStrategy
from smart_locator.locator.diagnostics import DiagnosticsBuilder
from smart_locator.locator.history import HistoryStore

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import IPage, ILocator

logger = logging.getLogger(__name__)


DEFAULT_PROBE_TIMEOUT_MS = 1000


class LocatorResolver:
    """
    Resolve element keys with fallback selectors and persisted history.

    One resolver is built per page; it must not be shared across
    concurrently running tests.

    Usage:
        resolver = LocatorResolver(page, HistoryStore.from_path("history.json"))
        element = await resolver.find_element("loginButton", "#login")
        await element.click()
    """

    def __init__(
        self,
        page: "IPage",
        store: HistoryStore,
        probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
        diagnostics: Optional[DiagnosticsBuilder] = None,
    ):
        self.page = page
        self.store = store
        self.probe_timeout_ms = probe_timeout_ms
        self.diagnostics = diagnostics or DiagnosticsBuilder()
        # Candidate that satisfied the most recent find_element call
        self.last_candidate: Optional[Candidate] = None

    async def find_element(self, key: str, selector: str) -> "ILocator":
        """
        Resolve a key to a visible element.

        Args:
            key: Stable logical identifier for the element
            selector: Primary selector for the element

        Returns:
            Locator for the first visible candidate

        Raises:
            ElementResolutionError: No candidate became visible
        """
        self.last_candidate = None

        element, error = await self._probe(selector)
        if element is not None:
            self.last_candidate = Candidate(selector, SelectorStrategy.EXACT)
            self.store.update(key, selector, success=True)
            return element

        last_error = error
        entry = self.store.get_or_create_entry(key, selector)
        alternatives = self.store.generator.tag(selector, entry.alternative_selectors)

        for candidate in alternatives:
            element, error = await self._probe(candidate.selector)
            if element is not None:
                logger.info(
                    f"Resolved '{key}' via {candidate.strategy.value} alternative "
                    f"{candidate.selector!r} (primary {selector!r} failed)"
                )
                self.last_candidate = candidate
                self.store.update(key, selector, success=True)
                return element
            last_error = error or last_error

        self.store.update(key, selector, success=False)
        raise await self._resolution_error(key, selector, [c.selector for c in alternatives], last_error)

    async def _probe(self, selector: str) -> Tuple[Optional["ILocator"], Optional[str]]:
        """
        Wait briefly for a selector to become visible.

        Returns:
            (locator, None) on success, (None, error message) otherwise
        """
        try:
            locator = self.page.locator(selector)
            await locator.wait_for(state="visible", timeout=self.probe_timeout_ms)
            return locator, None
        except Exception as e:
            logger.debug(f"Probe failed for {selector!r}: {e}")
            return None, str(e) or e.__class__.__name__

    async def _resolution_error(
        self,
        key: str,
        selector: str,
        alternatives: List[str],
        underlying_error: Optional[str],
    ) -> ElementResolutionError:
        page_url = self._page_url()
        context = await self.diagnostics.element_context(self.page, selector)
        report = self.diagnostics.build(
            key=key,
            selector=selector,
            alternatives_tried=alternatives,
            page_url=page_url,
            element_context=context,
            underlying_error=underlying_error,
        )
        logger.warning(f"Could not resolve '{key}' ({selector}) after {len(alternatives) + 1} candidates")
        return ElementResolutionError(
            report,
            key=key,
            selector=selector,
            alternatives_tried=alternatives,
            page_url=page_url,
        )

    def _page_url(self) -> Optional[str]:
        try:
            return self.page.url
        except Exception as e:
            logger.debug(f"Page URL unavailable: {e}")
            return None
