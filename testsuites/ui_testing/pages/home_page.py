"""
================================================================================
Home Page Object
================================================================================

Landing page of the marketing site.

Primary calls to action:
  - "Start Free Trial" -> /auth/signup
  - "Request Demo"     -> /contact

NOTE:
  The CTA links are matched by href prefix rather than label text; the
  label copy changes with marketing experiments, the routes do not.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


class HomePage(BasePage):
    """Home page object."""

    URL_PATH = "/"
    PAGE_TITLE = "Home"

    _HERO_HEADING = Locator.css("main h1", "Hero heading")
    _START_FREE_TRIAL = Locator.css("a[href^='/auth/signup']", "Start Free Trial")
    _REQUEST_DEMO = Locator.css("a[href='/contact']", "Request Demo")
    _NAV_PRICING = Locator.css("header a[href='/pricing'], nav a[href='/pricing']", "Pricing nav link")

    @allure.step("Click Start Free Trial")
    def click_start_free_trial(self) -> None:
        self.actions.click(self._START_FREE_TRIAL)

    @allure.step("Click Request Demo")
    def click_request_demo(self) -> None:
        self.actions.click(self._REQUEST_DEMO)

    @allure.step("Navigate to Pricing")
    def navigate_to_pricing(self) -> None:
        """Open the pricing page through the site navigation."""
        self.actions.click(self._NAV_PRICING)
        self.actions.wait_for_url_contains("/pricing")

    def is_hero_displayed(self) -> bool:
        return self.actions.is_displayed(self._HERO_HEADING)
