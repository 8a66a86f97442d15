from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class IndustriesPage(BasePage):
    """Industries landing page object."""

    URL_PATH = "/industries"
    PAGE_TITLE = "Industries"

    _START_FREE = Locator.css("a[href^='/auth/signup']", "Start Free")

    @allure.step("Click Start Free")
    def click_start_free(self) -> None:
        self.actions.click(self._START_FREE)
