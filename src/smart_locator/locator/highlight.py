"""
Highlighter - Visual outline on an element before it is touched.

Purely cosmetic: failures are logged and reported as False, never raised.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import ILocator

logger = logging.getLogger(__name__)


HIGHLIGHT_ELEMENT_JS = """
(el, options) => {
    const originalTransition = el.style.transition;
    const originalOutline = el.style.outline;

    el.style.transition = 'all 0.2s ease-in-out';
    el.style.outline = '2px solid ' + options.color;

    setTimeout(() => {
        el.style.outline = originalOutline;
        el.style.transition = originalTransition;
    }, options.duration);
    return true;
}
"""


@dataclass
class HighlightConfig:
    """Highlight appearance."""
    enabled: bool = True
    color: str = "red"
    duration_ms: int = 1000


class Highlighter:
    """Outline elements for debugging runs and recordings."""

    def __init__(self, config: HighlightConfig | None = None):
        self.config = config or HighlightConfig()

    async def highlight(self, element: "ILocator") -> bool:
        """
        Outline an element for the configured duration.

        Returns:
            True if the outline was applied
        """
        if not self.config.enabled:
            return False

        try:
            result = await element.evaluate(
                HIGHLIGHT_ELEMENT_JS,
                {"color": self.config.color, "duration": self.config.duration_ms},
            )
            return result is True
        except Exception as e:
            logger.warning(f"Failed to highlight element {element.selector}: {e}")
            return False
