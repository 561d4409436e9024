"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables and YAML files.

Usage:
    from smart_locator.config import get_settings, load_config

    # Get process-wide settings (loaded once)
    settings = get_settings()

    # Or load fresh settings with overrides
    settings = load_config(browser={"headless": False})

Environment Variables:
    SMART_LOCATOR__LOCATOR__HISTORY_FILE=test-results/locator-history.json
    SMART_LOCATOR__INTERACTION__RETRIES=5
    SMART_LOCATOR__BROWSER__HEADLESS=false
"""

from smart_locator.config.settings import (
    Settings,
    BrowserSettings,
    LocatorSettings,
    InteractionSettings,
    LoggingSettings,
)
from smart_locator.config.loader import ConfigLoader, load_config

_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the process-wide settings instance.

    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.

    Returns:
        Cached Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "BrowserSettings",
    "LocatorSettings",
    "InteractionSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
