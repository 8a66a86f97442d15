"""
Product page object.
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class ProductPage(BasePage):
    """Product overview page object."""

    URL_PATH = "/product"
    PAGE_TITLE = "Product"

    _GET_STARTED = Locator.css("a[href^='/auth/signup']", "Get Started")
    _REQUEST_DEMO = Locator.css("a[href='/contact']", "Request Demo")

    @allure.step("Click Get Started")
    def click_get_started(self) -> None:
        self.actions.click(self._GET_STARTED)

    @allure.step("Click Request Demo")
    def click_request_demo(self) -> None:
        self.actions.click(self._REQUEST_DEMO)
