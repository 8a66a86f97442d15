from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class SecurityPage(BasePage):
    """Security / trust page object."""

    URL_PATH = "/security"
    PAGE_TITLE = "Security"

    _START_FREE = Locator.css("a[href^='/auth/signup']", "Start Free")

    @allure.step("Click Start Free")
    def click_start_free(self) -> None:
        self.actions.click(self._START_FREE)
