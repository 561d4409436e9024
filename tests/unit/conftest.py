"""
Fake page and locator for unit tests.
"""

import copy
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest

from smart_locator.locator import (
    ClickOptions,
    HistoryStore,
    InMemoryBackend,
    InteractionEngine,
    LocatorResolver,
    StabilityWaiter,
)
from smart_locator.locator.interaction import SCRIPT_CLICK_JS


# =============================================================================
# FAKES
# =============================================================================

class FakeLocator:
    """
    Scriptable element.

    Invisible by default; a stable box at (10, 20) once visible.
    """

    def __init__(self, selector: str):
        self._selector = selector
        self.visible = False
        self.box: Optional[Dict[str, float]] = {"x": 10, "y": 20, "width": 100, "height": 30}
        self.positions: Optional[List[Tuple[float, float]]] = None
        self.moving = False
        self.samples = 0
        self.matches = 1

        self.click_error: Optional[Exception] = None
        self.force_click_error: Optional[Exception] = None
        self.script_click_error: Optional[Exception] = None
        self.highlight_error: Optional[Exception] = None
        self.action_error: Optional[Exception] = None

        self.text = ""
        self.attributes: Dict[str, str] = {}
        self.calls: List[Tuple[str, Any]] = []

    @property
    def selector(self) -> str:
        return self._selector

    def first(self) -> "FakeLocator":
        if self.matches == 1:
            return self
        narrowed = copy.copy(self)
        narrowed.matches = 1
        return narrowed

    def calls_named(self, name: str) -> List[Tuple[str, Any]]:
        return [c for c in self.calls if c[0] == name]

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self.calls.append(("wait_for", {"state": state, "timeout": timeout}))
        if state == "visible" and not self.visible:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {self._selector}")

    async def click(self, **options: Any) -> None:
        self.calls.append(("click", options))
        error = self.force_click_error if options.get("force") else self.click_error
        if error:
            raise error

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        if expression == SCRIPT_CLICK_JS:
            self.calls.append(("script_click", None))
            if self.script_click_error:
                raise self.script_click_error
            return None
        self.calls.append(("highlight", arg))
        if self.highlight_error:
            raise self.highlight_error
        return True

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        if self.matches > 1:
            raise RuntimeError(
                f"strict mode violation: locator(\"{self._selector}\") resolved to {self.matches} elements"
            )
        self.samples += 1
        if self.moving:
            return {"x": 10 + self.samples, "y": 20, "width": 100, "height": 30}
        if self.positions:
            x, y = self.positions.pop(0) if len(self.positions) > 1 else self.positions[0]
            return {"x": x, "y": y, "width": 100, "height": 30}
        return self.box

    async def fill(self, value: str, **options: Any) -> None:
        self.calls.append(("fill", value))
        if self.action_error:
            raise self.action_error

    async def select_option(self, value: Any, **options: Any) -> List[str]:
        self.calls.append(("select_option", value))
        if self.action_error:
            raise self.action_error
        return value if isinstance(value, list) else [value]

    async def hover(self, **options: Any) -> None:
        self.calls.append(("hover", options))
        if self.action_error:
            raise self.action_error

    async def text_content(self) -> Optional[str]:
        return self.text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    async def is_visible(self) -> bool:
        return self.visible


class FakePage:
    """Page returning one FakeLocator per selector."""

    def __init__(self, url: str = "https://demoqa.com/login"):
        self._url = url
        self.elements: Dict[str, FakeLocator] = {}
        self.requested: List[str] = []
        self.context_html: Any = '<button id="login">Login</button>'
        self.evaluate_error: Optional[Exception] = None
        self.evaluate_calls: List[Tuple[str, Tuple[Any, ...]]] = []

    @property
    def url(self) -> str:
        return self._url

    def element(self, selector: str) -> FakeLocator:
        if selector not in self.elements:
            self.elements[selector] = FakeLocator(selector)
        return self.elements[selector]

    def show(self, *selectors: str) -> None:
        for selector in selectors:
            self.element(selector).visible = True

    def locator(self, selector: str) -> FakeLocator:
        self.requested.append(selector)
        return self.element(selector)

    async def goto(self, url: str, **options: Any) -> None:
        self._url = url

    async def evaluate(self, expression: str, *args: Any) -> Any:
        self.evaluate_calls.append((expression, args))
        if self.evaluate_error:
            raise self.evaluate_error
        return self.context_html

    async def close(self) -> None:
        pass


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self):
        self._start = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
        self._ticks = itertools.count()

    def __call__(self):
        return self._start + timedelta(seconds=next(self._ticks))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(backend, clock):
    return HistoryStore(backend, clock=clock)


@pytest.fixture
def resolver(fake_page, store):
    return LocatorResolver(fake_page, store, probe_timeout_ms=10)


@pytest.fixture
def engine(fake_page, resolver):
    return InteractionEngine(
        fake_page,
        resolver,
        stability=StabilityWaiter(poll_interval_ms=5),
        click_options=ClickOptions(timeout_ms=300, retries=3, delay_ms=1),
        interactive_timeout_ms=200,
    )
