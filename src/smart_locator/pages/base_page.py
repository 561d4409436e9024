"""
Base Page - Page-object foundation with resilient element access.

Each page object builds its own history store, resolver and interaction
engine. Nothing is shared through module-level state, so parallel
workers with separate pages stay independent (apart from a shared
history file, where the last writer wins).

Example:
    >>> class LoginPage(BasePage):
    ...     path = "/login"
    ...
    ...     async def login(self, user: str, password: str) -> None:
    ...         await self.smart_fill("username", "#userName", user)
    ...         await self.smart_fill("password", "#password", password)
    ...         await self.smart_click("loginButton", "#login")
"""

import logging
from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from smart_locator.config import Settings, get_settings
from smart_locator.locator import (
    ClickOptions,
    HighlightConfig,
    Highlighter,
    HistoryStore,
    InteractionEngine,
    LocatorResolver,
    StabilityWaiter,
)
from smart_locator.reporting import LocatorReport

if TYPE_CHECKING:
    from smart_locator.interfaces.browser import IPage, ILocator

logger = logging.getLogger(__name__)


class BasePage:
    """
    Base class for page objects.

    Attributes:
        path: Page path, joined to settings.browser.base_url by goto()
    """

    path: str = "/"

    def __init__(
        self,
        page: "IPage",
        settings: Optional[Settings] = None,
        store: Optional[HistoryStore] = None,
    ):
        self.page = page
        self.settings = settings or get_settings()
        interaction = self.settings.interaction

        self.store = store or HistoryStore.from_path(self.settings.locator.history_file)
        self.resolver = LocatorResolver(
            page,
            self.store,
            probe_timeout_ms=self.settings.locator.probe_timeout_ms,
        )
        self.stability = StabilityWaiter(poll_interval_ms=interaction.poll_interval_ms)
        self.highlighter = Highlighter(HighlightConfig(
            enabled=interaction.highlight_elements,
            color=interaction.highlight_color,
            duration_ms=interaction.highlight_duration_ms,
        ))
        self.engine = InteractionEngine(
            page,
            self.resolver,
            stability=self.stability,
            highlighter=self.highlighter,
            click_options=ClickOptions(
                timeout_ms=interaction.element_timeout_ms,
                retries=interaction.retries,
                delay_ms=interaction.retry_delay_ms,
            ),
            interactive_timeout_ms=interaction.interactive_timeout_ms,
        )

    # Navigation

    @property
    def url(self) -> str:
        base = self.settings.browser.base_url
        return f"{base.rstrip('/')}{self.path}" if base else self.path

    async def goto(self) -> None:
        await self.page.goto(self.url, timeout=self.settings.browser.navigation_timeout_ms)

    def is_current_page(self) -> bool:
        return self.path in self.page.url

    # Plain resolution

    async def get_element(self, key: str, selector: str) -> "ILocator":
        return await self.resolver.find_element(key, selector)

    async def click_element(self, key: str, selector: str) -> None:
        element = await self.get_element(key, selector)
        await element.click()

    async def fill_element(self, key: str, selector: str, value: str) -> None:
        element = await self.get_element(key, selector)
        await element.fill(value)

    async def get_text(self, key: str, selector: str) -> str:
        element = await self.get_element(key, selector)
        text = await element.text_content()
        return (text or "").strip()

    async def get_attribute(self, key: str, selector: str, name: str) -> str:
        element = await self.get_element(key, selector)
        return await element.get_attribute(name) or ""

    async def select_option(self, key: str, selector: str, value: str) -> List[str]:
        element = await self.get_element(key, selector)
        return await element.select_option(value)

    async def hover(self, key: str, selector: str) -> None:
        element = await self.get_element(key, selector)
        await element.hover()

    async def is_visible(self, key: str, selector: str) -> bool:
        try:
            element = await self.get_element(key, selector)
            return await element.is_visible()
        except Exception as e:
            logger.debug(f"'{key}' not visible: {e}")
            return False

    async def wait_for_element(self, key: str, selector: str, timeout_ms: Optional[int] = None) -> "ILocator":
        element = await self.get_element(key, selector)
        await element.wait_for(
            state="visible",
            timeout=timeout_ms or self.settings.interaction.element_timeout_ms,
        )
        return element

    async def wait_for_element_stable(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        """Wait until the first element matching a raw selector holds still."""
        await self.stability.wait_for_stable(
            self.page.locator(selector).first(),
            timeout_ms=timeout_ms or self.settings.interaction.interactive_timeout_ms,
            stability_duration_ms=self.settings.interaction.stability_duration_ms,
        )

    # Smart interactions

    async def click_with_retry(
        self,
        target: Union[str, "ILocator"],
        options: Optional[ClickOptions] = None,
    ) -> bool:
        return await self.engine.click_with_retry(target, options)

    async def smart_click(self, key: str, selector: str) -> bool:
        return await self.engine.smart_click(key, selector)

    async def smart_fill(self, key: str, selector: str, value: str) -> None:
        await self.engine.smart_fill(key, selector, value)

    async def smart_select(self, key: str, selector: str, value: str) -> List[str]:
        return await self.engine.smart_select(key, selector, value)

    async def smart_hover(self, key: str, selector: str) -> None:
        await self.engine.smart_hover(key, selector)

    async def smart_get_text(self, key: str, selector: str) -> str:
        return await self.engine.smart_get_text(key, selector)

    async def smart_get_attribute(self, key: str, selector: str, name: str) -> str:
        return await self.engine.smart_get_attribute(key, selector, name)

    async def is_element_visible(self, key: str, selector: str) -> bool:
        return await self.engine.is_element_visible(key, selector)

    # Reporting

    def attach_locator_report(self, report_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the locator report for this page's history.

        Returns:
            Path of the HTML report
        """
        report = LocatorReport.from_history(self.store.history, page_url=self.page.url)
        html_path, _ = report.write(report_dir or self.settings.locator.report_dir)
        return html_path
