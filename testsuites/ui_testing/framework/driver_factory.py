"""
================================================================================
Driver Factory
================================================================================

Produces ready browser sessions for the harness.

Features:
    - Browser identifier mapping (chrome, firefox, edge, safari, ...)
    - Browser-specific launch bootstrap
    - Narrow session protocol the rest of the framework depends on
    - Playwright (sync API) implementation of that protocol

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Protocol, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Locator as PlaywrightLocator,
    Page,
    Playwright,
    sync_playwright,
)

from .locator import ABSENT, By, Found, Locator, LookupResult


# browser id -> (playwright engine, release channel)
BROWSER_ENGINES: Dict[str, Tuple[str, Optional[str]]] = {
    "chrome": ("chromium", None),
    "chromium": ("chromium", None),
    "edge": ("chromium", "msedge"),
    "firefox": ("firefox", None),
    "safari": ("webkit", None),
    "webkit": ("webkit", None),
}

DEFAULT_LAUNCH_ARGS: Dict[str, list] = {
    "chromium": [
        "--ignore-certificate-errors",
        "--disable-features=IsolateOrigins,site-per-process",
    ],
}

DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
    "viewport": {"width": 1280, "height": 800},
    "ignore_https_errors": True,
}

# Playwright has no window manager hook; "maximized" means a desktop viewport
MAXIMIZED_VIEWPORT: Dict[str, int] = {"width": 1920, "height": 1080}


class SessionAcquisitionError(Exception):
    """Raised when no browser session can be obtained."""
    pass


class ElementHandle(Protocol):
    """Element operations the interaction layer relies on."""

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def click(self) -> None: ...

    def text(self) -> str: ...


class BrowserSession(Protocol):
    """
    Opaque browser session handle.

    Implementations must not raise from ``find_element`` for a missing
    element; they return ``ABSENT`` instead.
    """

    session_id: str

    def navigate(self, url: str) -> None: ...

    def find_element(self, locator: Locator) -> LookupResult: ...

    def current_url(self) -> str: ...

    def page_source(self) -> str: ...

    def screenshot(self) -> bytes: ...

    def evaluate(self, script: str) -> Any: ...

    def set_implicit_wait(self, seconds: float) -> None: ...

    def set_page_load_timeout(self, seconds: float) -> None: ...

    def maximize_window(self) -> None: ...

    def quit(self) -> None: ...


def to_playwright_selector(locator: Locator) -> str:
    """Translate a harness locator into a Playwright selector string."""
    if locator.strategy == By.CSS:
        return locator.selector
    if locator.strategy == By.XPATH:
        return f"xpath={locator.selector}"
    if locator.strategy == By.ID:
        return f"[id='{locator.selector}']"
    if locator.strategy == By.TEXT:
        return f"text={locator.selector}"
    if locator.strategy == By.TEST_ID:
        return f"[data-testid='{locator.selector}']"
    raise ValueError(f"Unsupported locator strategy: {locator.strategy}")


class PlaywrightElement:
    """``ElementHandle`` backed by a Playwright locator."""

    def __init__(self, locator: PlaywrightLocator):
        self._locator = locator

    def is_displayed(self) -> bool:
        return self._locator.is_visible()

    def is_enabled(self) -> bool:
        return self._locator.is_enabled()

    def click(self) -> None:
        self._locator.click()

    def text(self) -> str:
        return self._locator.inner_text()


class PlaywrightSession:
    """
    ``BrowserSession`` backed by one Playwright browser/context/page.

    The session owns the whole Playwright stack it was started with and
    tears all of it down in ``quit()``.
    """

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
    ):
        self.session_id = uuid.uuid4().hex
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page

    @property
    def page(self) -> Page:
        return self._page

    def navigate(self, url: str) -> None:
        self._page.goto(url, wait_until="load")
        logger.debug(f"Navigated to: {url}")

    def find_element(self, locator: Locator) -> LookupResult:
        matches = self._page.locator(to_playwright_selector(locator))
        count = matches.count()
        if count == 0:
            return ABSENT

        # Prefer a visible match; responsive layouts often render hidden duplicates
        for index in range(count):
            candidate = matches.nth(index)
            if candidate.is_visible():
                return Found(PlaywrightElement(candidate))
        return Found(PlaywrightElement(matches.first))

    def current_url(self) -> str:
        return self._page.url

    def page_source(self) -> str:
        return self._page.content()

    def screenshot(self) -> bytes:
        return self._page.screenshot(full_page=True)

    def evaluate(self, script: str) -> Any:
        return self._page.evaluate(script)

    def set_implicit_wait(self, seconds: float) -> None:
        self._page.set_default_timeout(seconds * 1000)

    def set_page_load_timeout(self, seconds: float) -> None:
        self._page.set_default_navigation_timeout(seconds * 1000)

    def maximize_window(self) -> None:
        self._page.set_viewport_size(MAXIMIZED_VIEWPORT)

    def quit(self) -> None:
        """Close context and browser, then stop Playwright."""
        try:
            self._context.close()
        finally:
            try:
                self._browser.close()
            finally:
                self._playwright.stop()
        logger.debug(f"Browser session {self.session_id} closed")


class DriverFactory:
    """
    Creates ``BrowserSession`` instances from a browser identifier.

    Usage:
        factory = DriverFactory()
        session = factory.create("chrome", headless=True)
        session.navigate("https://example.com")
        session.quit()
    """

    def __init__(
        self,
        launch_args: Optional[Dict[str, list]] = None,
        context_options: Optional[Dict[str, Any]] = None,
    ):
        self.launch_args = launch_args if launch_args is not None else DEFAULT_LAUNCH_ARGS
        self.context_options = {**DEFAULT_CONTEXT_OPTIONS, **(context_options or {})}

    @staticmethod
    def resolve_engine(browser: str) -> Tuple[str, Optional[str]]:
        """
        Map a browser identifier to a Playwright engine and channel.

        Raises:
            SessionAcquisitionError: For an unknown identifier
        """
        key = (browser or "").strip().lower()
        if key not in BROWSER_ENGINES:
            raise SessionAcquisitionError(
                f"Unsupported browser '{browser}'. "
                f"Expected one of: {', '.join(sorted(BROWSER_ENGINES))}"
            )
        return BROWSER_ENGINES[key]

    def create(self, browser: str, headless: bool = False) -> BrowserSession:
        """
        Launch a browser and return a ready session.

        Raises:
            SessionAcquisitionError: If the browser cannot be started
        """
        engine, channel = self.resolve_engine(browser)

        launch_options: Dict[str, Any] = {
            "headless": headless,
            "args": list(self.launch_args.get(engine, [])),
        }
        if channel:
            launch_options["channel"] = channel

        try:
            playwright = sync_playwright().start()
        except Exception as e:
            raise SessionAcquisitionError(f"Failed to start Playwright: {e}") from e

        try:
            launcher = getattr(playwright, engine)
            browser_instance = launcher.launch(**launch_options)
            context = browser_instance.new_context(**self.context_options)
            page = context.new_page()
        except Exception as e:
            playwright.stop()
            raise SessionAcquisitionError(
                f"Failed to start {browser} ({engine}, headless={headless}): {e}"
            ) from e

        session = PlaywrightSession(playwright, browser_instance, context, page)
        logger.debug(
            f"Browser started: {browser} -> {engine} "
            f"(headless={headless}, session={session.session_id})"
        )
        return session


__all__ = [
    "BROWSER_ENGINES",
    "BrowserSession",
    "DriverFactory",
    "ElementHandle",
    "PlaywrightElement",
    "PlaywrightSession",
    "SessionAcquisitionError",
    "to_playwright_selector",
]
