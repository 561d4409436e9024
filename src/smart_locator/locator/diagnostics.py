"""
Diagnostics - Failure report for elements that could not be resolved.
"""

import logging
from typing import List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import IPage

logger = logging.getLogger(__name__)


NO_CONTEXT = "Unable to get element context"

ELEMENT_CONTEXT_JS = """
(selector) => {
    let element = null;
    try {
        element = document.querySelector(selector);
    } catch (e) {
        return 'Element not found in DOM';
    }
    if (element) {
        return element.parentElement ? element.parentElement.innerHTML : 'No parent element found';
    }
    return 'Element not found in DOM';
}
"""

GENERIC_SUGGESTIONS = (
    "Check if the element is inside an iframe",
    "Verify the element is not hidden or removed from DOM",
    "Consider using a data-testid attribute for stable testing",
    "Check if the element is dynamically added to the page",
)

DEBUG_STEPS = (
    "Check if the element exists in the page source",
    "Verify the timing of the element appearance",
    "Check for iframes or shadow DOM",
    "Inspect the element's visibility state",
    "Review dynamic content loading",
)


class DiagnosticsBuilder:
    """
    Builds the human-readable report attached to ElementResolutionError.

    The report depends only on its inputs and building it never raises.
    """

    def suggestions(self, selector: str) -> List[str]:
        """Rule-based remediation hints, selector-specific first."""
        hints: List[str] = []

        if selector.startswith("#"):
            hints.extend([
                "Check if the ID is dynamically generated",
                "Try using a more stable attribute like data-testid",
                f"Try using a class selector instead: {selector.replace('#', '.', 1)}",
            ])
        elif selector.startswith("."):
            hints.extend([
                "Verify the class name is not dynamically changed",
                "Consider using a more specific selector",
                'Try combining with element type, e.g., "button.className"',
            ])

        hints.extend(GENERIC_SUGGESTIONS)
        return hints

    def build(
        self,
        key: str,
        selector: str,
        alternatives_tried: Optional[Sequence[str]],
        page_url: Optional[str],
        element_context: Optional[str],
        underlying_error: Optional[str] = None,
    ) -> str:
        """
        Assemble the failure report.

        Args:
            key: Logical element key
            selector: Primary selector
            alternatives_tried: Alternative selectors probed, in order
            page_url: Current page URL
            element_context: Surrounding HTML, None if it could not be read
            underlying_error: Last host error message, if any

        Returns:
            Multi-section report text
        """
        alternatives = list(alternatives_tried or [])
        lines = [
            f'Failed to find element with key "{key}"',
            "",
            f"Original Selector: {selector}",
            f"Current URL: {page_url or 'unknown'}",
            "",
            "Alternative Selectors Tried:",
        ]
        lines.extend(f"- {s}" for s in alternatives)
        if not alternatives:
            lines.append("- (none)")

        lines.extend([
            "",
            "Element Context:",
            element_context if element_context else NO_CONTEXT,
            "",
            "Suggestions:",
        ])
        lines.extend(f"- {s}" for s in self.suggestions(selector))

        if underlying_error:
            lines.extend(["", f"Original Error: {underlying_error}"])

        lines.extend(["", "Debug Steps:"])
        lines.extend(f"{i}. {step}" for i, step in enumerate(DEBUG_STEPS, start=1))

        return "\n".join(lines)

    async def element_context(self, page: "IPage", selector: str) -> str:
        """
        HTML surrounding the first element matching a CSS selector.

        Host-only selector syntax (text=, role=) is not valid CSS and
        reports the element as missing.
        """
        try:
            html = await page.evaluate(ELEMENT_CONTEXT_JS, selector)
        except Exception as e:
            logger.debug(f"Element context unavailable for {selector}: {e}")
            return NO_CONTEXT
        return html if isinstance(html, str) else NO_CONTEXT
