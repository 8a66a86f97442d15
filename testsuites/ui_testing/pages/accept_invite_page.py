"""
================================================================================
Accept Invite Page Object
================================================================================

Team invitation route: ``/accept-invite/{token}``.

The token is supplied out-of-band (see ``E2E_INVITE_TOKEN``). Depending on
the token and the visitor, the route renders one of:
  - a welcome screen after joining the organization
  - an error screen (Invalid / Expired / Revoked / Already Accepted)
  - an email-mismatch screen
  - a redirect to sign-in for anonymous visitors

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import BasePage


INVALID_INVITATION_HEADINGS = (
    "Invalid Invitation",
    "Invitation Expired",
    "Invitation Revoked",
    "Already Accepted",
)


class AcceptInvitePage(BasePage):
    """Accept invite page object."""

    URL_PATH = "/accept-invite"
    PAGE_TITLE = "Accept Invitation"

    _HEADING = Locator.css("h1", "Invitation heading")

    @allure.step("Open invitation link")
    def open_with_token(self, token: str) -> "AcceptInvitePage":
        """Open the invitation link for ``token``."""
        self.navigate_to(f"{self.URL_PATH}/{token.strip()}")
        return self

    def heading_text(self) -> str:
        return self.actions.read_text(self._HEADING).strip()

    def is_invalid_invitation_displayed(self) -> bool:
        """True when the route rendered one of the invitation error screens."""
        if not self.actions.is_displayed(self._HEADING):
            return False
        return self.heading_text() in INVALID_INVITATION_HEADINGS
