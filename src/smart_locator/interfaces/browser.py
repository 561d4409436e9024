"""
Browser Interface - Abstract base classes for the host automation layer.

The locator core only talks to these interfaces, so it can be driven by
Playwright in real runs and by lightweight fakes in unit tests.

Example:
    >>> from smart_locator.browsers import PlaywrightBrowser
    >>> browser = PlaywrightBrowser()
    >>> await browser.launch()
    >>> page = await browser.new_page()
    >>> await page.goto("https://example.com")
    >>> await page.locator("#login").click()
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class BrowserType(Enum):
    """Supported browser types."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class ILocator(ABC):
    """
    Abstract interface for a lazily resolved element reference.

    A locator is borrowed for the duration of one interaction; callers must
    not keep it across resolutions.
    """

    @property
    @abstractmethod
    def selector(self) -> str:
        """The selector this locator was created from."""
        ...

    @abstractmethod
    def first(self) -> "ILocator":
        """
        Narrow to the first matching element.

        Locators are strict: reading geometry from one that matches several
        elements fails. Does not touch the page.
        """
        ...

    @abstractmethod
    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        """
        Wait for the element to reach a state.

        Args:
            state: 'visible', 'hidden', 'attached' or 'detached'
            timeout: Maximum time to wait in milliseconds

        Raises:
            Any host error when the state is not reached in time
        """
        ...

    @abstractmethod
    async def click(self, **options: Any) -> None:
        """
        Click on this element.

        Args:
            **options: Host click options (e.g., force, timeout)
        """
        ...

    @abstractmethod
    async def fill(self, value: str, **options: Any) -> None:
        """
        Fill this element with text (for input/textarea elements).

        Args:
            value: The text to fill
            **options: Host fill options
        """
        ...

    @abstractmethod
    async def select_option(self, value: Union[str, List[str]], **options: Any) -> List[str]:
        """
        Select option(s) in a <select> element.

        Args:
            value: Option value(s) to select
            **options: Host options

        Returns:
            List of selected option values
        """
        ...

    @abstractmethod
    async def hover(self, **options: Any) -> None:
        """Hover over this element."""
        ...

    @abstractmethod
    async def text_content(self) -> Optional[str]:
        """Get the text content of this element."""
        ...

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value from this element.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if not present
        """
        ...

    @abstractmethod
    async def is_visible(self) -> bool:
        """Check if this element is visible."""
        ...

    @abstractmethod
    async def bounding_box(self) -> Optional[Dict[str, float]]:
        """
        Get the element's position and size.

        Returns:
            Dict with x, y, width and height, or None when not laid out
        """
        ...

    @abstractmethod
    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """
        Run a JavaScript function with the element as its first argument.

        Args:
            expression: JavaScript function source
            arg: Optional second argument

        Returns:
            The function's return value
        """
        ...


class IPage(ABC):
    """
    Abstract interface for browser page operations used by the locator core.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Get the current page URL."""
        ...

    @abstractmethod
    async def goto(self, url: str, **options: Any) -> None:
        """
        Navigate to a URL.

        Args:
            url: The URL to navigate to
            **options: Host navigation options (e.g., wait_until, timeout)
        """
        ...

    @abstractmethod
    def locator(self, selector: str) -> ILocator:
        """
        Create a locator for a selector. Does not touch the page.

        Args:
            selector: CSS selector or host selector syntax (text=, role=)
        """
        ...

    @abstractmethod
    async def evaluate(self, expression: str, *args: Any) -> Any:
        """
        Execute JavaScript in the page context.

        Args:
            expression: JavaScript expression or function to execute
            *args: Arguments to pass to the function

        Returns:
            The result of the JavaScript execution
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close this page."""
        ...


class IBrowser(ABC):
    """
    Abstract interface for browser management.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the browser is connected and running."""
        ...

    @abstractmethod
    async def launch(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[BrowserType] = None,
        **options: Any,
    ) -> None:
        """
        Launch a browser instance.

        Args:
            headless: Whether to run in headless mode
            browser_type: Type of browser to launch
            **options: Host launch options
        """
        ...

    @abstractmethod
    async def new_page(self, **options: Any) -> IPage:
        """
        Create a new page in a fresh, isolated context.

        Args:
            **options: Host context options (e.g., viewport)
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the browser and cleanup resources."""
        ...
