"""
Fakes for harness unit tests.

The fakes implement the BrowserSession / ElementHandle protocols in memory
and a manual clock, so waits and lifecycle rules are checked without a
browser or wall-clock time.
"""

from typing import Callable, Dict, List, Optional, Tuple

import pytest

from testsuites.ui_testing.framework.config_provider import HarnessConfig
from testsuites.ui_testing.framework.evidence_capture import EvidenceCapture
from testsuites.ui_testing.framework.locator import ABSENT, Found, Locator
from testsuites.ui_testing.framework.waits import Clock


class FakeClock:
    """Manual monotonic clock; ``sleep`` advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.time = start
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self.time

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.time += seconds

    @property
    def clock(self) -> Clock:
        return Clock(now=self.now, sleep=self.sleep)


class FakeElement:
    def __init__(
        self,
        text: str = "",
        displayed: bool = True,
        enabled: bool = True,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self._text = text
        self.displayed = displayed
        self.enabled = enabled
        self.on_click = on_click
        self.clicks = 0

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def click(self) -> None:
        self.clicks += 1
        if self.on_click is not None:
            self.on_click()

    def text(self) -> str:
        return self._text


class FakeBrowserSession:
    """
    In-memory ``BrowserSession``.

    Elements can be scheduled to appear at a clock time to exercise waits.
    After ``quit`` every driver call raises, like a real closed session.
    """

    def __init__(self, clock: Optional[FakeClock] = None, session_id: str = "fake-session"):
        self.session_id = session_id
        self.clock = clock
        self.url = "about:blank"
        self.source = "<html><body></body></html>"
        self.png = b"\x89PNG fake"
        self.ready_state = "complete"
        self.elements: Dict[Locator, Tuple[FakeElement, float]] = {}
        self.visited: List[str] = []
        self.implicit_wait: Optional[float] = None
        self.page_load_timeout: Optional[float] = None
        self.maximized = False
        self.quit_calls = 0
        self.fail_on: Dict[str, Exception] = {}

    @property
    def closed(self) -> bool:
        return self.quit_calls > 0

    def add_element(self, locator: Locator, element: FakeElement, appear_at: float = 0.0) -> FakeElement:
        self.elements[locator] = (element, appear_at)
        return element

    def _call(self, name: str) -> None:
        if self.closed:
            raise RuntimeError(f"{name} called on a closed session")
        if name in self.fail_on:
            raise self.fail_on[name]

    def navigate(self, url: str) -> None:
        self._call("navigate")
        self.visited.append(url)
        self.url = url

    def find_element(self, locator: Locator):
        self._call("find_element")
        entry = self.elements.get(locator)
        if entry is None:
            return ABSENT
        element, appear_at = entry
        now = self.clock.now() if self.clock else 0.0
        return Found(element) if now >= appear_at else ABSENT

    def current_url(self) -> str:
        self._call("current_url")
        return self.url

    def page_source(self) -> str:
        self._call("page_source")
        return self.source

    def screenshot(self) -> bytes:
        self._call("screenshot")
        return self.png

    def evaluate(self, script: str):
        self._call("evaluate")
        if script == "document.readyState":
            return self.ready_state
        return None

    def set_implicit_wait(self, seconds: float) -> None:
        self._call("set_implicit_wait")
        self.implicit_wait = seconds

    def set_page_load_timeout(self, seconds: float) -> None:
        self._call("set_page_load_timeout")
        self.page_load_timeout = seconds

    def maximize_window(self) -> None:
        self._call("maximize_window")
        self.maximized = True

    def quit(self) -> None:
        self.quit_calls += 1
        if "quit" in self.fail_on:
            raise self.fail_on["quit"]


class FakeDriverFactory:
    def __init__(self, session: Optional[FakeBrowserSession] = None, error: Optional[Exception] = None):
        self.session = session or FakeBrowserSession()
        self.error = error
        self.calls: List[Tuple[str, bool]] = []

    def create(self, browser: str, headless: bool = False) -> FakeBrowserSession:
        self.calls.append((browser, headless))
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_session(fake_clock) -> FakeBrowserSession:
    return FakeBrowserSession(clock=fake_clock)


@pytest.fixture
def fake_factory(fake_session) -> FakeDriverFactory:
    return FakeDriverFactory(fake_session)


@pytest.fixture
def make_element():
    return FakeElement


@pytest.fixture
def harness_config(tmp_path) -> HarnessConfig:
    """Defaults, with evidence redirected to a temp directory."""
    return HarnessConfig.from_mapping({"evidence.dir": str(tmp_path / "screenshots")})


@pytest.fixture
def evidence_capture(harness_config) -> EvidenceCapture:
    return EvidenceCapture(harness_config.evidence_dir, attach_to_allure=False)


@pytest.fixture
def make_factory():
    return FakeDriverFactory


@pytest.fixture
def make_session():
    return FakeBrowserSession
