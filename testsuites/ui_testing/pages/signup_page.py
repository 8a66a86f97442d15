"""
Signup page object (destination of the trial CTAs).
"""

from __future__ import annotations

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class SignupPage(BasePage):
    """Signup page object."""

    URL_PATH = "/auth/signup"
    PAGE_TITLE = "Sign up"

    _EMAIL_INPUT = Locator.css("input[type='email'], input[name='email']", "Email input")

    def is_form_displayed(self) -> bool:
        """Verify the signup form rendered."""
        return self.actions.is_displayed(self._EMAIL_INPUT, timeout=self.actions.explicit_wait)
