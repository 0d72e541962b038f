"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the StackDemo store.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Navigation methods return the page object of the screen they lead to.

Author: Automation Team
License: MIT
================================================================================
"""

from .checkout_page import CheckoutPage
from .home_page import HomePage, parse_price
from .login_page import DEFAULT_PASSWORD, LoginPage

__all__ = [
    "LoginPage",
    "HomePage",
    "CheckoutPage",
    "DEFAULT_PASSWORD",
    "parse_price",
]
