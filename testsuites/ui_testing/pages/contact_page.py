"""
Contact page object (destination of the demo/sales CTAs).
"""

from __future__ import annotations

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class ContactPage(BasePage):
    """Contact / request demo page object."""

    URL_PATH = "/contact"
    PAGE_TITLE = "Contact"

    _CONTACT_FORM = Locator.css("form", "Contact form")

    def is_form_displayed(self) -> bool:
        return self.actions.is_displayed(self._CONTACT_FORM, timeout=self.actions.explicit_wait)
