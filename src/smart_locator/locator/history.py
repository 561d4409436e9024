"""
Locator History - Cross-run success/failure statistics per element key.

The history is a single JSON document:

    {
      "entries": {
        "loginButton": {
          "key": "loginButton",
          "selector": "#login",
          "alternativeSelectors": [".login", ...],
          "successCount": 3,
          "failureCount": 1,
          "lastUsed": "2024-05-01T10:00:00+00:00",
          "lastSuccess": "2024-05-01T10:00:00+00:00"
        }
      },
      "lastUpdated": "2024-05-01T10:00:00+00:00"
    }

Every update rewrites the whole document. Workers that share one file
race on it and the last writer wins; there is no locking or merge.
"""

import json
import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from smart_locator.exceptions import HistoryStoreIOError
from smart_locator.locator.alternatives import AlternativeSelectorGenerator

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class LocatorEntry:
    """History for one logical element key."""

    key: str
    selector: str
    alternative_selectors: List[str] = field(default_factory=list)
    success_count: int = 0
    failure_count: int = 0
    last_used: datetime = field(default_factory=utc_now)
    last_success: Optional[datetime] = None

    @property
    def attempts(self) -> int:
        return self.success_count + self.failure_count

    @property
    def success_rate(self) -> Optional[float]:
        """Fraction of successful resolutions, None before the first attempt."""
        if self.attempts == 0:
            return None
        return self.success_count / self.attempts

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "selector": self.selector,
            "alternativeSelectors": list(self.alternative_selectors),
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "lastUsed": self.last_used.isoformat(),
        }
        if self.last_success is not None:
            data["lastSuccess"] = self.last_success.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocatorEntry":
        success_count = int(data.get("successCount", 0))
        failure_count = int(data.get("failureCount", 0))
        if success_count < 0 or failure_count < 0:
            raise ValueError(f"Negative counter in entry {data.get('key')!r}")

        alternatives = data.get("alternativeSelectors") or []
        if not isinstance(alternatives, list):
            raise ValueError(f"alternativeSelectors must be a list in entry {data.get('key')!r}")

        last_success = data.get("lastSuccess")
        return cls(
            key=data["key"],
            selector=data["selector"],
            alternative_selectors=[str(s) for s in alternatives],
            success_count=success_count,
            failure_count=failure_count,
            last_used=_parse_timestamp(data["lastUsed"]),
            last_success=_parse_timestamp(last_success) if last_success else None,
        )


@dataclass
class HistoryFile:
    """All locator entries plus the time of the last write."""

    entries: Dict[str, LocatorEntry] = field(default_factory=dict)
    last_updated: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": {key: entry.to_dict() for key, entry in self.entries.items()},
            "lastUpdated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryFile":
        raw_entries = data.get("entries") or {}
        if not isinstance(raw_entries, dict):
            raise ValueError("entries must be an object")

        entries = {}
        for key, raw in raw_entries.items():
            entry = LocatorEntry.from_dict(raw)
            # The mapping key is authoritative
            entry.key = key
            entries[key] = entry

        last_updated = data.get("lastUpdated")
        return cls(
            entries=entries,
            last_updated=_parse_timestamp(last_updated) if last_updated else utc_now(),
        )


# ============================================================================
# BACKENDS
# ============================================================================

class HistoryBackend(ABC):
    """Where the serialized history lives."""

    @abstractmethod
    def read(self) -> Optional[Dict[str, Any]]:
        """
        Read the raw history document.

        Returns:
            Parsed JSON object, or None when nothing has been stored yet

        Raises:
            HistoryStoreIOError: The stored document is unreadable
        """
        ...

    @abstractmethod
    def write(self, data: Dict[str, Any]) -> None:
        """
        Replace the stored document.

        Raises:
            HistoryStoreIOError: The document could not be written
        """
        ...

    @property
    def location(self) -> str:
        return self.__class__.__name__


class JsonFileBackend(HistoryBackend):
    """
    History stored as a JSON file with 2-space indentation.

    Writes go to a temporary file in the same directory which then
    replaces the target, so readers never see a half-written document.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise HistoryStoreIOError(f"Cannot read locator history: {e}", location=self.location)

        if not isinstance(data, dict):
            raise HistoryStoreIOError("Locator history is not a JSON object", location=self.location)
        return data

    def write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                # mkstemp creates 0600; keep the file readable like a plain open() would
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise HistoryStoreIOError(f"Cannot write locator history: {e}", location=self.location)

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


class InMemoryBackend(HistoryBackend):
    """History kept in process memory, for tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data = initial
        self.writes = 0

    def read(self) -> Optional[Dict[str, Any]]:
        # Round-trip through JSON so callers never share mutable state
        return json.loads(json.dumps(self.data)) if self.data is not None else None

    def write(self, data: Dict[str, Any]) -> None:
        self.data = json.loads(json.dumps(data))
        self.writes += 1


# ============================================================================
# STORE
# ============================================================================

class HistoryStore:
    """
    Owns the locator history and persists it after every update.

    Loading never fails: a missing document gives an empty history and an
    unreadable one is logged and replaced by an empty history. Save
    failures are logged and swallowed.

    Usage:
        store = HistoryStore(JsonFileBackend("test-results/locator-history.json"))
        store.update("loginButton", "#login", success=True)
    """

    def __init__(
        self,
        backend: HistoryBackend,
        generator: Optional[AlternativeSelectorGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.backend = backend
        self.generator = generator or AlternativeSelectorGenerator()
        self._clock = clock
        self._history = HistoryFile(last_updated=clock())
        self.load()

    @classmethod
    def from_path(cls, path: Union[str, Path], **kwargs: Any) -> "HistoryStore":
        """Create a store backed by a JSON file."""
        return cls(JsonFileBackend(path), **kwargs)

    @property
    def history(self) -> HistoryFile:
        return self._history

    @property
    def entries(self) -> Dict[str, LocatorEntry]:
        return self._history.entries

    def load(self) -> HistoryFile:
        """
        (Re)load the history from the backend.

        Returns:
            The loaded history, empty when absent or unreadable
        """
        try:
            data = self.backend.read()
            if data is None:
                self._history = HistoryFile(last_updated=self._clock())
            else:
                self._history = HistoryFile.from_dict(data)
                logger.info(
                    f"Loaded locator history from {self.backend.location} "
                    f"({len(self._history.entries)} entries)"
                )
        except HistoryStoreIOError as e:
            logger.warning(f"Failed to load locator history: {e}")
            self._history = HistoryFile(last_updated=self._clock())
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed locator history in {self.backend.location}: {e}")
            self._history = HistoryFile(last_updated=self._clock())

        return self._history

    def save(self) -> bool:
        """
        Persist the whole history, overwriting what was stored.

        Returns:
            True if the write succeeded
        """
        self._history.last_updated = self._clock()
        try:
            self.backend.write(self._history.to_dict())
            return True
        except HistoryStoreIOError as e:
            logger.warning(f"Failed to save locator history: {e}")
            return False

    def get_entry(self, key: str) -> Optional[LocatorEntry]:
        return self._history.entries.get(key)

    def get_or_create_entry(self, key: str, selector: str) -> LocatorEntry:
        """
        Return the entry for a key, creating it on first use.

        Alternatives are generated only when the entry is created and are
        reused for the rest of the key's lifetime.
        """
        entry = self._history.entries.get(key)
        if entry is None:
            entry = LocatorEntry(
                key=key,
                selector=selector,
                alternative_selectors=self.generator.generate(selector),
                last_used=self._clock(),
            )
            self._history.entries[key] = entry
        return entry

    def update(self, key: str, selector: str, success: bool) -> LocatorEntry:
        """
        Record one resolution attempt and persist.

        Args:
            key: Logical element key
            selector: Primary selector the caller supplied
            success: Whether the key resolved to a visible element

        Returns:
            The updated entry
        """
        entry = self.get_or_create_entry(key, selector)
        now = self._clock()

        if success:
            entry.success_count += 1
            entry.last_success = now
        else:
            entry.failure_count += 1
        entry.last_used = now

        self.save()
        return entry
