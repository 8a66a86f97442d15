"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the application under test.

Each page class encapsulates:
    - Private element locators
    - User-intent actions (click_start_free_trial, navigate_to_pricing, ...)

Author: Automation Team
License: MIT
================================================================================
"""

from .accept_invite_page import AcceptInvitePage
from .contact_page import ContactPage
from .home_page import HomePage
from .industries_page import IndustriesPage
from .pricing_page import PricingPage
from .product_page import ProductPage
from .security_page import SecurityPage
from .signup_page import SignupPage

__all__ = [
    "AcceptInvitePage",
    "ContactPage",
    "HomePage",
    "IndustriesPage",
    "PricingPage",
    "ProductPage",
    "SecurityPage",
    "SignupPage",
]
