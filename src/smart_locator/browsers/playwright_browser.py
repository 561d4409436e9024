"""
Playwright Browser - Implementation of the browser interfaces using Playwright.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from smart_locator.config.settings import BrowserSettings
from smart_locator.interfaces.browser import (
    IBrowser,
    IPage,
    ILocator,
    BrowserType,
)
from smart_locator.exceptions.browser import (
    BrowserLaunchError,
    BrowserConnectionError,
    NavigationError,
)

logger = logging.getLogger(__name__)


class PlaywrightLocator(ILocator):
    """
    Playwright implementation of ILocator.

    Wraps a Playwright Locator; every call re-queries the DOM.
    """

    def __init__(self, locator: Any, selector: str):
        """
        Initialize the locator wrapper.

        Args:
            locator: Playwright Locator
            selector: The selector used to build it
        """
        self._locator = locator
        self._selector = selector

    @property
    def selector(self) -> str:
        return self._selector

    def first(self) -> "PlaywrightLocator":
        """Narrow to the first match."""
        return PlaywrightLocator(self._locator.first, self._selector)

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        """Wait for element state."""
        await self._locator.wait_for(state=state, timeout=timeout)

    async def click(self, **options: Any) -> None:
        """Click on this element."""
        await self._locator.click(**options)

    async def fill(self, value: str, **options: Any) -> None:
        """Fill this element with text."""
        await self._locator.fill(value, **options)

    async def select_option(self, value: Union[str, List[str]], **options: Any) -> List[str]:
        """Select option(s) in a <select> element."""
        result = await self._locator.select_option(value, **options)
        return result if isinstance(result, list) else [result]

    async def hover(self, **options: Any) -> None:
        """Hover over element."""
        await self._locator.hover(**options)

    async def text_content(self) -> Optional[str]:
        """Get text content."""
        return await self._locator.text_content()

    async def get_attribute(self, name: str) -> Optional[str]:
        """Get an attribute value."""
        return await self._locator.get_attribute(name)

    async def is_visible(self) -> bool:
        """Check if visible."""
        return await self._locator.is_visible()

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        """Get bounding box."""
        return await self._locator.bounding_box()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Run JavaScript against the element."""
        return await self._locator.evaluate(expression, arg)


class PlaywrightPage(IPage):
    """
    Playwright implementation of IPage.

    Wraps a Playwright Page and, when it owns one, its browser context.
    """

    def __init__(self, page: Any, context: Any = None):
        """
        Initialize the page wrapper.

        Args:
            page: Playwright Page object
            context: Browser context to close together with the page
        """
        self._page = page
        self._context = context

    @property
    def url(self) -> str:
        """Get current URL."""
        return self._page.url

    async def goto(self, url: str, **options: Any) -> None:
        """Navigate to URL."""
        try:
            await self._page.goto(url, **options)
        except Exception as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url)

    def locator(self, selector: str) -> ILocator:
        """Create a locator."""
        return PlaywrightLocator(self._page.locator(selector), selector)

    async def evaluate(self, expression: str, *args: Any) -> Any:
        """Execute JavaScript."""
        return await self._page.evaluate(expression, *args)

    async def close(self) -> None:
        """Close page and its owned context."""
        await self._page.close()
        if self._context:
            await self._context.close()
            self._context = None


class PlaywrightBrowser(IBrowser):
    """
    Playwright implementation of IBrowser.

    Every page lives in its own browser context, so concurrent test
    workers never share cookies or storage.

    Example:
        >>> browser = PlaywrightBrowser(get_settings().browser)
        >>> await browser.launch()
        >>> page = await browser.new_page()
        >>> await page.goto("https://example.com")
        >>> await browser.close()
    """

    def __init__(self, settings: Optional[BrowserSettings] = None):
        """
        Initialize the browser (not launched yet).

        Args:
            settings: Launch and context defaults
        """
        self.settings = settings or BrowserSettings()
        self._playwright: Any = None
        self._browser: Any = None

    @property
    def is_connected(self) -> bool:
        """Check if browser is connected."""
        return self._browser is not None and self._browser.is_connected()

    async def launch(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[BrowserType] = None,
        **options: Any,
    ) -> None:
        """
        Launch the browser.

        Args:
            headless: Whether to run headless (default from settings)
            browser_type: Type of browser to launch (default from settings)
            **options: Additional Playwright launch options
        """
        if headless is None:
            headless = self.settings.headless
        if browser_type is None:
            browser_type = BrowserType(self.settings.browser_type)
        options.setdefault("slow_mo", self.settings.slow_mo)

        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()

            browser_launchers = {
                BrowserType.CHROMIUM: self._playwright.chromium,
                BrowserType.FIREFOX: self._playwright.firefox,
                BrowserType.WEBKIT: self._playwright.webkit,
            }
            launcher = browser_launchers.get(browser_type, self._playwright.chromium)

            self._browser = await launcher.launch(
                headless=headless,
                **options,
            )

            logger.info(f"Launched {browser_type.value} browser (headless={headless})")

        except Exception as e:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
            raise BrowserLaunchError(f"Failed to launch browser: {e}")

    async def new_page(self, **options: Any) -> IPage:
        """
        Create a new page in a fresh context.

        Args:
            **options: Context options; the viewport defaults to the configured size

        Returns:
            New page instance
        """
        if not self._browser:
            raise BrowserConnectionError("Browser not launched. Call launch() first.")

        options.setdefault(
            "viewport",
            {"width": self.settings.viewport_width, "height": self.settings.viewport_height},
        )
        context = await self._browser.new_context(**options)
        page = await context.new_page()
        page.set_default_timeout(self.settings.timeout_ms)
        page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        return PlaywrightPage(page, context)

    async def close(self) -> None:
        """Close the browser and cleanup."""
        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")
