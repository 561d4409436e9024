"""
Tests for the locator history store.
"""

import json
import os
import stat

import pytest

from smart_locator.exceptions import HistoryStoreIOError
from smart_locator.locator.alternatives import AlternativeSelectorGenerator
from smart_locator.locator.history import (
    HistoryBackend,
    HistoryFile,
    HistoryStore,
    InMemoryBackend,
    JsonFileBackend,
    LocatorEntry,
)


class CountingGenerator(AlternativeSelectorGenerator):
    """Generator recording how often it was asked."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def generate(self, selector):
        self.calls += 1
        return super().generate(selector)


class BrokenBackend(HistoryBackend):
    """Backend failing every read and write."""

    def read(self):
        raise HistoryStoreIOError("disk on fire")

    def write(self, data):
        raise HistoryStoreIOError("disk on fire")


class TestLoad:
    """Test tolerant loading."""

    def test_missing_file_gives_empty_history(self, tmp_path):
        """A history file that does not exist yet is not an error."""
        store = HistoryStore.from_path(tmp_path / "missing.json")

        assert store.entries == {}

    def test_corrupt_file_gives_empty_history(self, tmp_path, caplog):
        """Invalid JSON is logged and ignored."""
        path = tmp_path / "history.json"
        path.write_text("{not json")

        store = HistoryStore.from_path(path)

        assert store.entries == {}
        assert "Failed to load locator history" in caplog.text

    def test_malformed_entries_give_empty_history(self, tmp_path):
        """Valid JSON with the wrong shape is ignored too."""
        path = tmp_path / "history.json"
        path.write_text(json.dumps({"entries": {"a": {"selector": "#a"}}}))

        store = HistoryStore.from_path(path)

        assert store.entries == {}

    def test_non_object_document_gives_empty_history(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("[1, 2, 3]")

        assert HistoryStore.from_path(path).entries == {}

    def test_unreadable_backend_never_raises(self):
        """Backend errors on load degrade to an empty history."""
        store = HistoryStore(BrokenBackend())

        assert store.load().entries == {}

    def test_reads_lastsuccess_with_z_suffix(self, tmp_path):
        """Timestamps written by other tools with a trailing Z are accepted."""
        path = tmp_path / "history.json"
        path.write_text(json.dumps({
            "entries": {
                "login": {
                    "key": "login",
                    "selector": "#login",
                    "alternativeSelectors": [".login"],
                    "successCount": 2,
                    "failureCount": 1,
                    "lastUsed": "2024-05-01T10:00:00.000Z",
                    "lastSuccess": "2024-05-01T09:00:00.000Z",
                },
            },
            "lastUpdated": "2024-05-01T10:00:00.000Z",
        }))

        entry = HistoryStore.from_path(path).get_entry("login")

        assert entry.success_count == 2
        assert entry.last_success.hour == 9
        assert entry.alternative_selectors == [".login"]


class TestUpdate:
    """Test recording attempts."""

    def test_first_success_creates_entry(self, store):
        entry = store.update("loginButton", "#login", success=True)

        assert entry.key == "loginButton"
        assert entry.selector == "#login"
        assert entry.success_count == 1
        assert entry.failure_count == 0
        assert entry.last_success == entry.last_used

    def test_failure_does_not_touch_last_success(self, store):
        store.update("ghost", "#ghost", success=False)
        entry = store.get_entry("ghost")

        assert entry.failure_count == 1
        assert entry.success_count == 0
        assert entry.last_success is None

    def test_last_used_never_before_last_success(self, store):
        store.update("k", "#k", success=True)
        entry = store.update("k", "#k", success=False)

        assert entry.last_used > entry.last_success

    def test_every_update_persists(self, store, backend):
        """The whole history is written after each update."""
        store.update("a", "#a", success=True)
        store.update("b", "#b", success=False)

        assert backend.writes == 2
        assert set(backend.data["entries"]) == {"a", "b"}

    def test_alternatives_generated_once_per_key(self, backend):
        """Alternatives are cached on the entry, not regenerated."""
        generator = CountingGenerator()
        store = HistoryStore(backend, generator=generator)

        store.get_or_create_entry("login", "#login")
        store.update("login", "#login", success=False)
        store.update("login", "#login", success=True)

        assert generator.calls == 1

    def test_save_failure_is_swallowed(self, caplog):
        """Persistence problems never reach the caller."""
        store = HistoryStore(BrokenBackend())

        entry = store.update("k", "#k", success=True)

        assert entry.success_count == 1
        assert "Failed to save locator history" in caplog.text


class TestRoundTrip:
    """Test persistence through a real file."""

    def test_file_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store = HistoryStore.from_path(path)
        store.update("login", "#login", success=True)
        store.update("login", "#login", success=True)
        store.update("ghost", ".ghost", success=False)

        reloaded = HistoryStore.from_path(path)

        for key in ("login", "ghost"):
            before, after = store.get_entry(key), reloaded.get_entry(key)
            assert after.success_count == before.success_count
            assert after.failure_count == before.failure_count
            assert after.alternative_selectors == before.alternative_selectors
            assert after.last_used == before.last_used

    def test_file_layout(self, tmp_path):
        """Written with 2-space indentation and camelCase keys."""
        path = tmp_path / "history.json"
        store = HistoryStore.from_path(path)
        store.update("login", "#login", success=False)

        text = path.read_text()
        data = json.loads(text)

        assert text.startswith('{\n  "entries"')
        assert set(data) == {"entries", "lastUpdated"}
        assert set(data["entries"]["login"]) == {
            "key", "selector", "alternativeSelectors",
            "successCount", "failureCount", "lastUsed",
        }

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / "history.json"
        HistoryStore.from_path(path).update("a", "#a", success=True)

        assert [p.name for p in tmp_path.iterdir()] == ["history.json"]

    def test_in_memory_backend_isolated_from_callers(self):
        backend = InMemoryBackend()
        backend.write({"entries": {}, "lastUpdated": "2024-05-01T10:00:00+00:00"})

        data = backend.read()
        data["entries"]["x"] = {}

        assert backend.data["entries"] == {}


class TestJsonFileBackend:
    """Test the file backend in isolation."""

    def test_read_missing_returns_none(self, tmp_path):
        assert JsonFileBackend(tmp_path / "nope.json").read() is None

    def test_read_corrupt_raises_io_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("]")

        with pytest.raises(HistoryStoreIOError):
            JsonFileBackend(path).read()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_new_file_follows_umask(self, tmp_path):
        """A new history file is as readable as any file the process creates."""
        path = tmp_path / "history.json"
        umask = os.umask(0o022)
        try:
            HistoryStore.from_path(path).update("loginButton", "#login", success=True)
        finally:
            os.umask(umask)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_existing_file_keeps_its_mode(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('{"entries": {}}')
        path.chmod(0o664)

        HistoryStore.from_path(path).update("loginButton", "#login", success=True)

        assert stat.S_IMODE(path.stat().st_mode) == 0o664

    def test_write_into_file_path_parent_raises_io_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(HistoryStoreIOError):
            JsonFileBackend(blocker / "history.json").write({"entries": {}})


class TestEntryModel:
    """Test LocatorEntry helpers."""

    def test_success_rate(self):
        entry = LocatorEntry(key="k", selector="#k", success_count=3, failure_count=1)
        assert entry.success_rate == 0.75

    def test_success_rate_without_attempts(self):
        assert LocatorEntry(key="k", selector="#k").success_rate is None

    def test_negative_counter_rejected(self):
        with pytest.raises(ValueError):
            LocatorEntry.from_dict({
                "key": "k",
                "selector": "#k",
                "successCount": -1,
                "lastUsed": "2024-05-01T10:00:00+00:00",
            })

    def test_history_file_uses_mapping_key(self):
        history = HistoryFile.from_dict({
            "entries": {
                "real": {
                    "key": "stale",
                    "selector": "#k",
                    "lastUsed": "2024-05-01T10:00:00+00:00",
                },
            },
        })

        assert history.entries["real"].key == "real"
