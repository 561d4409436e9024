"""
Stability Waiter - Wait until an element stops moving.

An element is considered laid out once its bounding box leaves the
origin, and stable once two consecutive samples report the same
position. The stricter wait_for_stable additionally requires the
position to hold across a quiet period.
"""

import asyncio
import logging
from typing import Optional, Tuple, TYPE_CHECKING

from smart_locator.exceptions import StabilityTimeoutError

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import ILocator

logger = logging.getLogger(__name__)


Position = Tuple[float, float]

DEFAULT_POLL_INTERVAL_MS = 100


class StabilityWaiter:
    """
    Poll an element's position until it settles or the timeout elapses.

    Example:
        >>> waiter = StabilityWaiter()
        >>> await waiter.wait_for_interactive(page.locator("#submit"), timeout_ms=10000)
    """

    def __init__(self, poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS):
        self.poll_interval_ms = poll_interval_ms

    async def wait_for_interactive(self, element: "ILocator", timeout_ms: int) -> None:
        """
        Wait for the element to be visible and positioned.

        Args:
            element: Element to watch
            timeout_ms: Total budget for visibility and stability

        Raises:
            StabilityTimeoutError: The element did not settle in time
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000

        try:
            await element.wait_for(state="visible", timeout=timeout_ms)
        except Exception as e:
            raise StabilityTimeoutError(
                f"Element {element.selector} not visible within {timeout_ms}ms: {e}",
                timeout_ms=timeout_ms,
            ) from e

        await self._wait_until_still(element, deadline, timeout_ms, settle_ms=0)

    async def wait_for_stable(
        self,
        element: "ILocator",
        timeout_ms: int = 10000,
        stability_duration_ms: int = 1000,
    ) -> None:
        """
        Wait until the element holds still for a quiet period.

        Args:
            element: Element to watch
            timeout_ms: Total budget
            stability_duration_ms: How long a matching position must hold

        Raises:
            StabilityTimeoutError: The element did not settle in time
        """
        deadline = asyncio.get_running_loop().time() + timeout_ms / 1000
        await self._wait_until_still(element, deadline, timeout_ms, settle_ms=stability_duration_ms)

    async def _wait_until_still(
        self,
        element: "ILocator",
        deadline: float,
        timeout_ms: int,
        settle_ms: int,
    ) -> None:
        loop = asyncio.get_running_loop()
        previous: Optional[Position] = None

        while True:
            current = await self._sample(element)

            if current is not None and current == previous:
                if settle_ms <= 0:
                    return
                await asyncio.sleep(settle_ms / 1000)
                confirmed = await self._sample(element)
                if confirmed == current:
                    return
                current = confirmed

            previous = current

            if loop.time() >= deadline:
                raise StabilityTimeoutError(
                    f"Element {element.selector} did not stabilize within {timeout_ms}ms",
                    timeout_ms=timeout_ms,
                    last_position=previous,
                )
            remaining = deadline - loop.time()
            await asyncio.sleep(max(0.0, min(self.poll_interval_ms / 1000, remaining)))

    async def _sample(self, element: "ILocator") -> Optional[Position]:
        """Current (x, y), or None while the element is detached or at the origin."""
        try:
            box = await element.bounding_box()
        except Exception as e:
            logger.debug(f"Bounding box unavailable for {element.selector}: {e}")
            return None

        if not box:
            return None

        position = (box["x"], box["y"])
        if position == (0, 0):
            return None
        return position
