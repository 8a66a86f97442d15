"""
Pricing page object.
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class PricingPage(BasePage):
    """Pricing page object."""

    URL_PATH = "/pricing"
    PAGE_TITLE = "Pricing"

    _START_FREE = Locator.css("a[href^='/auth/signup']", "Start Free")
    _CONTACT_SALES = Locator.css("a[href='/contact']", "Contact Sales")

    @allure.step("Click Start Free")
    def click_start_free(self) -> None:
        self.actions.click(self._START_FREE)

    @allure.step("Click Contact Sales")
    def click_contact_sales(self) -> None:
        self.actions.click(self._CONTACT_SALES)
