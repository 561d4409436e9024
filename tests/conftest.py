"""
Pytest configuration and fixtures.
"""

import pytest


@pytest.fixture
def settings(tmp_path):
    """Provide test settings writing history and reports under tmp_path."""
    from smart_locator.config import (
        Settings,
        BrowserSettings,
        LocatorSettings,
        InteractionSettings,
    )

    return Settings(
        browser=BrowserSettings(headless=True),
        locator=LocatorSettings(
            history_file=str(tmp_path / "locator-history.json"),
            report_dir=str(tmp_path / "locator-reports"),
            probe_timeout_ms=50,
        ),
        interaction=InteractionSettings(
            element_timeout_ms=300,
            interactive_timeout_ms=200,
            retry_delay_ms=0,
            poll_interval_ms=5,
            stability_duration_ms=10,
        ),
    )


@pytest.fixture
async def browser(settings):
    """Provide a browser launched from the test settings."""
    pytest.importorskip("playwright.async_api")
    from smart_locator.browsers import PlaywrightBrowser
    from smart_locator.exceptions import BrowserLaunchError

    browser = PlaywrightBrowser(settings.browser)
    try:
        await browser.launch()
    except BrowserLaunchError as e:
        pytest.skip(f"No browser available: {e}")

    yield browser

    await browser.close()


@pytest.fixture
async def page(browser):
    """Provide a page instance for integration tests."""
    page = await browser.new_page()
    yield page
    await page.close()
