"""
Interaction Engine - Fault-tolerant actions on resolved elements.

Click strategies (tried in order on every attempt):
1. STANDARD - normal click after visibility/stability wait
2. FORCED - click that skips the host's actionability checks
3. SCRIPT - element.click() invoked in the page

Highlighting is best-effort and never changes the outcome; resolution,
stability and interaction failures always reach the caller.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union, TYPE_CHECKING

from smart_locator.exceptions import InteractionFailureError
from smart_locator.locator.highlight import Highlighter
from smart_locator.locator.stability import StabilityWaiter

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import IPage, ILocator
    from smart_locator.locator.resolver import LocatorResolver

logger = logging.getLogger(__name__)


SCRIPT_CLICK_JS = "el => el.click()"


class ClickStrategy(Enum):
    """How a click was delivered."""
    STANDARD = "standard"
    FORCED = "forced"
    SCRIPT = "script"


@dataclass
class ClickOptions:
    """
    Retry budget for click_with_retry.

    Attributes:
        timeout_ms: Total timeout; each standard click gets timeout_ms / retries
        retries: Number of attempts
        delay_ms: Pause between attempts
    """
    timeout_ms: int = 15000
    retries: int = 3
    delay_ms: int = 1000

    def __post_init__(self):
        if self.retries < 1:
            raise ValueError("retries must be at least 1")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")


class InteractionEngine:
    """
    Click, fill, select and hover with waiting, highlighting and retries.

    Usage:
        engine = InteractionEngine(page, resolver)
        await engine.smart_click("loginButton", "#login")
        await engine.smart_fill("username", "#userName", "alice")
    """

    def __init__(
        self,
        page: "IPage",
        resolver: "LocatorResolver",
        stability: Optional[StabilityWaiter] = None,
        highlighter: Optional[Highlighter] = None,
        click_options: Optional[ClickOptions] = None,
        interactive_timeout_ms: int = 10000,
    ):
        self.page = page
        self.resolver = resolver
        self.stability = stability or StabilityWaiter()
        self.highlighter = highlighter or Highlighter()
        self.click_options = click_options or ClickOptions()
        self.interactive_timeout_ms = interactive_timeout_ms
        self.last_strategy: Optional[ClickStrategy] = None

    async def click_with_retry(
        self,
        target: Union[str, "ILocator"],
        options: Optional[ClickOptions] = None,
    ) -> bool:
        """
        Click an element, escalating through click strategies.

        Args:
            target: Selector string or already resolved locator
            options: Retry budget, defaults to the engine's

        Returns:
            True once a click went through

        Raises:
            InteractionFailureError: Every strategy failed on every attempt
        """
        options = options or self.click_options
        element = self.page.locator(target) if isinstance(target, str) else target
        per_attempt_timeout = max(1, options.timeout_ms // options.retries)
        last_error: Optional[Exception] = None

        for attempt in range(1, options.retries + 1):
            await self.highlighter.highlight(element)

            try:
                await self.stability.wait_for_interactive(element, options.timeout_ms)
                await element.click(timeout=per_attempt_timeout)
                self.last_strategy = ClickStrategy.STANDARD
                return True
            except Exception as e:
                last_error = e
                logger.info(f"Click attempt {attempt} failed, trying alternative methods...")

            if await self._fallback_click(element):
                return True

            if attempt < options.retries:
                await asyncio.sleep(options.delay_ms / 1000)

        message = f"Failed to click element after {options.retries} attempts. Last error: {last_error}"
        raise InteractionFailureError(
            message,
            action="click",
            attempts=options.retries,
            last_error=str(last_error) if last_error else None,
        )

    async def _fallback_click(self, element: "ILocator") -> bool:
        try:
            await element.click(force=True)
            self.last_strategy = ClickStrategy.FORCED
            return True
        except Exception as e:
            logger.debug(f"Forced click failed on {element.selector}: {e}")

        try:
            await element.evaluate(SCRIPT_CLICK_JS)
            self.last_strategy = ClickStrategy.SCRIPT
            return True
        except Exception as e:
            logger.debug(f"Script click failed on {element.selector}: {e}")

        return False

    # ------------------------------------------------------------------
    # Key-based helpers
    # ------------------------------------------------------------------

    async def _prepare(self, key: str, selector: str, wait: bool = True) -> "ILocator":
        element = await self.resolver.find_element(key, selector)
        await self.highlighter.highlight(element)
        if wait:
            await self.stability.wait_for_interactive(element, self.interactive_timeout_ms)
        return element

    async def smart_click(self, key: str, selector: str, options: Optional[ClickOptions] = None) -> bool:
        """Resolve a key and click it with retries."""
        element = await self.resolver.find_element(key, selector)
        return await self.click_with_retry(element, options)

    async def smart_fill(self, key: str, selector: str, value: str) -> None:
        """Resolve a key and fill it."""
        element = await self._prepare(key, selector)
        try:
            await element.fill(value)
        except Exception as e:
            raise self._action_error("fill", key, e) from e

    async def smart_select(self, key: str, selector: str, value: Union[str, List[str]]) -> List[str]:
        """Resolve a key and select option(s) in it."""
        element = await self._prepare(key, selector)
        try:
            return await element.select_option(value)
        except Exception as e:
            raise self._action_error("select", key, e) from e

    async def smart_hover(self, key: str, selector: str) -> None:
        """Resolve a key and hover over it."""
        element = await self._prepare(key, selector)
        try:
            await element.hover()
        except Exception as e:
            raise self._action_error("hover", key, e) from e

    async def smart_get_text(self, key: str, selector: str) -> str:
        """Resolve a key and return its trimmed text."""
        element = await self._prepare(key, selector, wait=False)
        text = await element.text_content()
        return (text or "").strip()

    async def smart_get_attribute(self, key: str, selector: str, name: str) -> str:
        """Resolve a key and return an attribute, empty when absent."""
        element = await self._prepare(key, selector, wait=False)
        value = await element.get_attribute(name)
        return value or ""

    async def is_element_visible(self, key: str, selector: str) -> bool:
        """
        Whether a key resolves to a visible element.

        Resolution failures are reported as False; the failure is still
        recorded in the history.
        """
        try:
            element = await self._prepare(key, selector, wait=False)
            return await element.is_visible()
        except Exception as e:
            logger.debug(f"'{key}' not visible: {e}")
            return False

    @staticmethod
    def _action_error(action: str, key: str, error: Exception) -> InteractionFailureError:
        return InteractionFailureError(
            f"Failed to {action} element '{key}': {error}",
            action=action,
            attempts=1,
            last_error=str(error),
        )
