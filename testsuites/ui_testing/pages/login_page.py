"""
================================================================================
Login Page Object
================================================================================

Sign-in page of the StackDemo store (`/signin`).

Username and password are react-select dropdowns rather than text inputs:
the page opens the dropdown and clicks the option whose text matches.
Only the accounts in `DemoUser` exist; anything else is rejected before the
browser is touched.

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import allure
from loguru import logger

from testsuites.ui_testing.data import DemoUser
from testsuites.ui_testing.framework.exceptions import InvalidFixtureError
from testsuites.ui_testing.framework.page_base import SHORT_TIMEOUT, BasePage

if TYPE_CHECKING:
    from .home_page import HomePage


DEFAULT_PASSWORD = "testingisfun99"

# Option rendered inside an open react-select menu
_OPTION = "{dropdown} [id*='-option-']:text-is('{value}')"


class LoginPage(BasePage):
    """Sign-in page."""

    URL_PATH = "signin"
    PAGE_TITLE = "StackDemo"

    LOCATORS = {
        "username_dropdown": "#username",
        "password_dropdown": "#password",
        "login_button": "#login-btn",
        "error_message": ".api-error",
        "page_header": "h3:text-is('Login')",
        "new_user_link": "a:text-is('Login as a new user')",
    }

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        self.navigate()
        self.wait_page_ready()
        logger.info("Navigated to login page")
        return self

    def is_displayed_page(self) -> bool:
        displayed = self.is_displayed("page_header", SHORT_TIMEOUT) or self.is_displayed(
            "login_button"
        )
        logger.info(f"Login page displayed: {displayed}")
        return displayed

    @allure.step("Select username: {user}")
    def select_user(self, user: Union[DemoUser, str]) -> "LoginPage":
        """
        Pick an account from the username dropdown.

        Raises:
            InvalidFixtureError: `user` is not one of the demo accounts
        """
        try:
            account = DemoUser.parse(user)
        except InvalidFixtureError:
            logger.error(f"Invalid username provided: {user!r}")
            raise

        self.click("username_dropdown")
        self.click(_OPTION.format(dropdown=self.selector("username_dropdown"), value=account.value))
        logger.info(f"Selected username: {account.value}")
        return self

    @allure.step("Select password")
    def select_password(self, password: str = DEFAULT_PASSWORD) -> "LoginPage":
        self.click("password_dropdown")
        self.click(_OPTION.format(dropdown=self.selector("password_dropdown"), value=password))
        logger.info("Selected password")
        return self

    @allure.step("Submit login form")
    def submit(self) -> "HomePage":
        from .home_page import HomePage

        self.click("login_button")
        logger.info("Clicked login button")
        return self.next_page(HomePage)

    @allure.step("Login as {user}")
    def login(self, user: Union[DemoUser, str] = DemoUser.DEMOUSER) -> "HomePage":
        """Select the user and the shared password, then submit."""
        self.select_user(user)
        self.select_password()
        return self.submit()

    def error_message(self) -> str:
        if self.is_error_displayed():
            return self.read_text("error_message")
        return ""

    def is_error_displayed(self) -> bool:
        return self.is_displayed("error_message", SHORT_TIMEOUT)

    @allure.step("Click 'Login as a new user'")
    def click_login_as_new_user(self) -> "LoginPage":
        self.click("new_user_link")
        logger.info("Clicked on 'Login as a new user' link")
        return self

    def title(self) -> str:
        return self.page_title()

    def is_on_login_page(self) -> bool:
        return "signin" in self.current_url() and self.is_displayed_page()


__all__ = ["LoginPage", "DEFAULT_PASSWORD"]
