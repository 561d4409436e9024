"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from smart_locator.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.locator.history_file)
    'test-results/locator-history.json'
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def deep_merge(base: dict, updates: dict) -> dict:
    """Recursively merge updates into a copy of base; updates win."""
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class BrowserSettings(BaseModel):
    """
    Browser automation settings.

    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser engine
        timeout_ms: Default timeout for page operations
        navigation_timeout_ms: Timeout for page navigation
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        slow_mo: Slow down operations by this amount (ms) - useful for debugging
        base_url: Prefix for relative page paths
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    navigation_timeout_ms: int = Field(default=45000, ge=1000, le=300000)
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    slow_mo: int = Field(default=0, ge=0, le=5000)
    base_url: Optional[str] = None


class LocatorSettings(BaseModel):
    """
    Element resolution settings.

    Attributes:
        history_file: JSON file holding locator history across runs
        report_dir: Directory the locator report is written to
        probe_timeout_ms: Visibility wait per candidate selector
    """
    history_file: str = "test-results/locator-history.json"
    report_dir: str = "test-results/locator-reports"
    probe_timeout_ms: int = Field(default=1000, ge=50, le=30000)


class InteractionSettings(BaseModel):
    """
    Interaction retry and stability settings.

    Attributes:
        element_timeout_ms: Overall budget for click_with_retry
        interactive_timeout_ms: Visibility + stability wait before an action
        retries: Click attempts before giving up
        retry_delay_ms: Pause between click attempts
        stability_duration_ms: Quiet period for the strict stability wait
        poll_interval_ms: Bounding-box sampling interval
        highlight_elements: Outline elements before interacting
        highlight_color: CSS colour of the outline
        highlight_duration_ms: How long the outline stays
    """
    element_timeout_ms: int = Field(default=15000, ge=100, le=300000)
    interactive_timeout_ms: int = Field(default=10000, ge=100, le=300000)
    retries: int = Field(default=3, ge=1, le=10)
    retry_delay_ms: int = Field(default=1000, ge=0, le=30000)
    stability_duration_ms: int = Field(default=1000, ge=0, le=30000)
    poll_interval_ms: int = Field(default=100, ge=1, le=5000)

    highlight_elements: bool = True
    highlight_color: str = "red"
    highlight_duration_ms: int = Field(default=1000, ge=100, le=5000)

    @model_validator(mode="after")
    def _poll_within_timeout(self) -> "InteractionSettings":
        if self.poll_interval_ms > self.interactive_timeout_ms:
            raise ValueError("poll_interval_ms must not exceed interactive_timeout_ms")
        return self


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for the file handler
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with SMART_LOCATOR__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(interaction=InteractionSettings(retries=5))
    """

    model_config = SettingsConfigDict(
        env_prefix="SMART_LOCATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    locator: LocatorSettings = Field(default_factory=LocatorSettings)
    interaction: InteractionSettings = Field(default_factory=InteractionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        return Settings(**deep_merge(self.model_dump(), overrides))
