"""
Tests for configuration system.
"""

import os

import pytest

from smart_locator.config import (
    BrowserSettings,
    ConfigLoader,
    InteractionSettings,
    LocatorSettings,
    Settings,
    get_settings,
    load_config,
    reset_settings,
)
from smart_locator.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test from an empty directory without SMART_LOCATOR__ variables."""
    for name in list(os.environ):
        if name.upper().startswith("SMART_LOCATOR__"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    # load_dotenv writes to os.environ directly
    for name in list(os.environ):
        if name.upper().startswith("SMART_LOCATOR__"):
            del os.environ[name]
    reset_settings()


class TestSettings:
    """Test the Settings classes."""

    def test_default_settings(self):
        """Test default settings match the documented defaults."""
        settings = Settings()

        assert settings.browser.headless is True
        assert settings.browser.navigation_timeout_ms == 45000
        assert settings.locator.history_file == "test-results/locator-history.json"
        assert settings.locator.probe_timeout_ms == 1000
        assert settings.interaction.element_timeout_ms == 15000
        assert settings.interaction.interactive_timeout_ms == 10000
        assert settings.interaction.retries == 3
        assert settings.interaction.retry_delay_ms == 1000
        assert settings.interaction.stability_duration_ms == 1000
        assert settings.interaction.poll_interval_ms == 100
        assert settings.interaction.highlight_elements is True

    def test_override_settings(self):
        """Test overriding settings."""
        settings = Settings(
            browser=BrowserSettings(browser_type="firefox", headless=False),
            interaction=InteractionSettings(retries=5),
        )

        assert settings.browser.browser_type == "firefox"
        assert settings.browser.headless is False
        assert settings.interaction.retries == 5

    def test_merge_with_overrides(self):
        """Test merging settings with overrides."""
        settings = Settings()
        new_settings = settings.merge_with({
            "browser": {"headless": False},
            "interaction": {"highlight_elements": False},
        })

        assert new_settings.browser.headless is False
        assert new_settings.interaction.highlight_elements is False
        # Other settings should remain default
        assert new_settings.interaction.retries == 3

    def test_env_variables(self, monkeypatch):
        """Nested values come from SMART_LOCATOR__ variables."""
        monkeypatch.setenv("SMART_LOCATOR__INTERACTION__RETRIES", "7")
        monkeypatch.setenv("SMART_LOCATOR__LOCATOR__HISTORY_FILE", "/tmp/h.json")

        settings = Settings()

        assert settings.interaction.retries == 7
        assert settings.locator.history_file == "/tmp/h.json"

    def test_probe_timeout_validation(self):
        assert LocatorSettings(probe_timeout_ms=50).probe_timeout_ms == 50

        with pytest.raises(ValueError):
            LocatorSettings(probe_timeout_ms=10)

    def test_retries_validation(self):
        with pytest.raises(ValueError):
            InteractionSettings(retries=0)

    def test_poll_must_fit_in_timeout(self):
        with pytest.raises(ValueError):
            InteractionSettings(interactive_timeout_ms=100, poll_interval_ms=500)


class TestConfigLoader:
    """Test YAML loading and precedence."""

    def test_defaults_without_file(self):
        settings = load_config()

        assert settings.interaction.retries == 3

    def test_default_yaml_location(self, tmp_path):
        (tmp_path / "smart-locator.yaml").write_text(
            "locator:\n  probe_timeout_ms: 250\ninteraction:\n  retries: 2\n"
        )

        settings = load_config()

        assert settings.locator.probe_timeout_ms == 250
        assert settings.interaction.retries == 2

    def test_overrides_beat_file(self, tmp_path):
        path = tmp_path / "ci.yaml"
        path.write_text("interaction:\n  retries: 2\n")

        settings = load_config(config_path=path, interaction={"retries": 4})

        assert settings.interaction.retries == 4

    def test_env_beats_file(self, tmp_path, monkeypatch):
        """Environment variables override YAML values, other YAML values survive."""
        path = tmp_path / "ci.yaml"
        path.write_text("locator:\n  probe_timeout_ms: 250\ninteraction:\n  retries: 2\n")
        monkeypatch.setenv("SMART_LOCATOR__INTERACTION__RETRIES", "7")

        settings = load_config(config_path=path)

        assert settings.interaction.retries == 7
        assert settings.locator.probe_timeout_ms == 250

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("SMART_LOCATOR__INTERACTION__RETRIES", "7")

        settings = load_config(interaction={"retries": 4})

        assert settings.interaction.retries == 4

    def test_env_file(self, tmp_path):
        env = tmp_path / "ci.env"
        env.write_text("SMART_LOCATOR__BROWSER__HEADLESS=false\n")

        settings = load_config(env_file=env)

        assert settings.browser.headless is False

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path / "nope.yaml").load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("interaction: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(config_path=path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config(config_path=path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(config_path=path).interaction.retries == 3


class TestGetSettings:
    """Test the process-wide settings cache."""

    def test_cached_until_reset(self):
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
