"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - URL handling relative to the configured base URL
    - Navigation with a document-readiness wait
    - URL assertions used by call-to-action flows

Page objects share the interaction layer by composition: each page holds an
``ElementActions`` instance and keeps its locators private.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from .element_actions import ElementActions


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class PricingPage(BasePage):
            URL_PATH = "/pricing"
            _CONTACT_SALES = Locator.css("a[href='/contact']", "Contact Sales")

            def click_contact_sales(self) -> None:
                self.actions.click(self._CONTACT_SALES)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(self, actions: ElementActions, base_url: str):
        """
        Initialize page object.

        Args:
            actions: Interaction layer bound to the current session
            base_url: Base URL for the application under test
        """
        self.actions = actions
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.actions.session.current_url()

    def open(self):
        """Navigate to this page and wait for the document to settle."""
        with allure.step(f"Open {self.PAGE_TITLE or type(self).__name__} page"):
            return self.navigate_to(self.URL_PATH)

    def navigate_to(self, path: str):
        """
        Navigate to a path relative to the base URL.

        Args:
            path: URL path starting with ``/``
        """
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            self.actions.session.navigate(full_url)
            self.actions.wait_for_page_ready()
        logger.debug(f"Opened {type(self).__name__}: {full_url}")
        return self

    def wait_for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> str:
        return self.actions.wait_for_url_contains(fragment, timeout)

    def url_contains(self, fragment: str, timeout: Optional[float] = None) -> bool:
        """Tolerant URL check for assertions."""
        return self.actions.url_contains(fragment, timeout)


__all__ = [
    "BasePage",
]
