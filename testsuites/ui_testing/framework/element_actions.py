# ================================================================================
# Element Actions Module
# ================================================================================
#
# Locator + action pairs wrapped in explicit waits. Every page object builds on
# this module.
#
# Key Features:
#   - Strict waits for actions: click/read_text wait for the element to exist
#     and become interactable, bounded by the configured explicit wait
#   - Tolerant checks for assertions: is_displayed returns False on absence
#   - URL and document-readiness conditions for navigation flows
#   - Allure step integration
#
# Failed clicks are never retried; the driver error propagates unchanged.
#
# ================================================================================

from typing import Optional

import allure
from loguru import logger

from .driver_factory import BrowserSession, ElementHandle
from .locator import Found, Locator, LookupResult
from .waits import DEFAULT_POLL_INTERVAL, SYSTEM_CLOCK, Clock, WaitTimeoutError, wait_until


DEFAULT_EXPLICIT_WAIT = 20.0
DEFAULT_DISPLAY_CHECK = 2.0


class InteractionTimeoutError(Exception):
    """Raised when a page condition is not met within the explicit wait."""
    pass


class ElementNotFoundError(InteractionTimeoutError):
    """Raised when no element matches a locator within the explicit wait."""
    pass


class ElementNotInteractableError(ElementNotFoundError):
    """Raised when a match exists but never becomes displayed and enabled."""
    pass


class ElementActions:
    """
    Explicit-wait wrapper around a browser session.

    The actions object holds a non-owning reference to the session; it
    never closes it.

    Example:
        actions = ElementActions(session, explicit_wait=20)
        actions.click(Locator.css("a[href^='/auth/signup']", "Start Free Trial"))
        assert actions.is_displayed(Locator.css("form"))
    """

    def __init__(
        self,
        session: BrowserSession,
        explicit_wait: float = DEFAULT_EXPLICIT_WAIT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        display_check: float = DEFAULT_DISPLAY_CHECK,
        clock: Clock = SYSTEM_CLOCK,
    ):
        """
        Initialize ElementActions.

        Args:
            session: Active browser session
            explicit_wait: Bound for locating operations in seconds
            poll_interval: Delay between checks in seconds
            display_check: Default bound for ``is_displayed`` in seconds
            clock: Time source for waits
        """
        self.session = session
        self.explicit_wait = explicit_wait
        self.poll_interval = poll_interval
        self.display_check = display_check
        self.clock = clock

    # =========================================================================
    # Lookup
    # =========================================================================

    def find(self, locator: Locator) -> LookupResult:
        """Look once for ``locator``; never waits and never raises on absence."""
        return self.session.find_element(locator)

    def wait_for_element(
        self,
        locator: Locator,
        timeout: Optional[float] = None,
    ) -> ElementHandle:
        """
        Wait for an element to exist, be displayed and be enabled.

        Args:
            locator: Element to wait for
            timeout: Bound in seconds (defaults to the explicit wait)

        Returns:
            The interactable element

        Raises:
            ElementNotFoundError: Nothing matched within the bound
            ElementNotInteractableError: A match existed but never became interactable
        """
        timeout = self.explicit_wait if timeout is None else timeout
        seen = False

        def check() -> Optional[ElementHandle]:
            nonlocal seen
            result = self.find(locator)
            if not isinstance(result, Found):
                return None
            seen = True
            element = result.element
            if element.is_displayed() and element.is_enabled():
                return element
            return None

        try:
            return wait_until(
                check,
                timeout=timeout,
                poll_interval=self.poll_interval,
                description=str(locator),
                clock=self.clock,
            )
        except WaitTimeoutError as e:
            if seen:
                raise ElementNotInteractableError(
                    f"Element never became interactable within {timeout}s: {locator}"
                ) from e
            logger.error(f"Element not found within {timeout}s: {locator}")
            raise ElementNotFoundError(
                f"Element not found within {timeout}s: {locator}"
            ) from e

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Click: {locator}")
    def click(self, locator: Locator) -> None:
        """Wait for ``locator`` to be interactable, then click it once."""
        element = self.wait_for_element(locator)
        logger.info(f"Clicking element: {locator}")
        element.click()

    @allure.step("Read text: {locator}")
    def read_text(self, locator: Locator) -> str:
        """Wait for ``locator`` and return its rendered text."""
        element = self.wait_for_element(locator)
        text = element.text()
        logger.debug(f"Got text from {locator}: '{text}'")
        return text

    # =========================================================================
    # Assertions
    # =========================================================================

    @allure.step("Check displayed: {locator}")
    def is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """
        Check whether an element is displayed.

        Absence is a valid negative result: the check polls for at most
        ``timeout`` seconds and returns False instead of raising.

        Args:
            locator: Element to check
            timeout: Bound in seconds (defaults to ``display_check``)

        Returns:
            True if a matching element became visible within the bound
        """
        timeout = self.display_check if timeout is None else timeout

        def check() -> bool:
            result = self.find(locator)
            return isinstance(result, Found) and result.element.is_displayed()

        try:
            return wait_until(
                check,
                timeout=timeout,
                poll_interval=self.poll_interval,
                description=f"{locator} displayed",
                clock=self.clock,
            )
        except WaitTimeoutError:
            logger.debug(f"Element not displayed within {timeout}s: {locator}")
            return False

    # =========================================================================
    # Page conditions
    # =========================================================================

    @allure.step("Wait for URL containing: {fragment}")
    def wait_for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> str:
        """
        Wait until the current URL contains ``fragment``.

        Returns:
            The matching URL

        Raises:
            InteractionTimeoutError: With the last observed URL
        """
        timeout = self.explicit_wait if timeout is None else timeout
        last_url = ""

        def check() -> Optional[str]:
            nonlocal last_url
            last_url = self.session.current_url()
            return last_url if fragment in last_url else None

        try:
            return wait_until(
                check,
                timeout=timeout,
                poll_interval=self.poll_interval,
                description=f"URL containing '{fragment}'",
                clock=self.clock,
            )
        except WaitTimeoutError as e:
            raise InteractionTimeoutError(
                f"Expected URL containing '{fragment}' within {timeout}s, "
                f"but was '{last_url}'"
            ) from e

    def url_contains(self, fragment: str, timeout: Optional[float] = None) -> bool:
        """Tolerant variant of ``wait_for_url_contains`` for assertions."""
        try:
            self.wait_for_url_contains(fragment, timeout)
            return True
        except InteractionTimeoutError as e:
            logger.warning(str(e))
            return False

    def wait_for_page_ready(self, timeout: Optional[float] = None) -> None:
        """
        Wait for ``document.readyState`` to reach ``complete``.

        A driver error while probing (the execution context is torn down
        mid-navigation or mid-redirect) counts as not ready yet.

        Raises:
            InteractionTimeoutError: If the document never settles
        """
        timeout = self.explicit_wait if timeout is None else timeout

        def check() -> bool:
            try:
                return self.session.evaluate("document.readyState") == "complete"
            except Exception as e:
                logger.debug(f"Document not ready ({type(e).__name__}: {e})")
                return False

        try:
            wait_until(
                check,
                timeout=timeout,
                poll_interval=self.poll_interval,
                description="document ready",
                clock=self.clock,
            )
        except WaitTimeoutError as e:
            raise InteractionTimeoutError(
                f"Page did not finish loading within {timeout}s: "
                f"{self.session.current_url()}"
            ) from e


__all__ = [
    "ElementActions",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "InteractionTimeoutError",
]
