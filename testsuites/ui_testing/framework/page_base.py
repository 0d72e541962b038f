"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Named element locators per page
    - Wait primitives (visible, clickable, page ready, arbitrary condition)
    - Actions that wait first (click, type, select)
    - Non-throwing probes (is_displayed, read_text)
    - Screenshot capture with Allure attachment

All waits are bounded by a single timeout window and are never retried.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import time
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union
from urllib.parse import urljoin

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Locator

from .browser_manager import BrowserSession
from .exceptions import InteractionError, WaitTimeoutError


# Seconds
DEFAULT_TIMEOUT = 10
SHORT_TIMEOUT = 5
LONG_TIMEOUT = 30
POLL_INTERVAL = 0.25

# Playwright reads a 0ms timeout as "wait forever"
MIN_DRIVER_TIMEOUT_MS = 1

Target = Union[str, Locator]
P = TypeVar("P", bound="BasePage")


def _driver_ms(seconds: float) -> float:
    return max(seconds * 1000, MIN_DRIVER_TIMEOUT_MS)


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare `URL_PATH` and a `LOCATORS` map of element name to
    Playwright selector. Methods accept either a locator name or a raw selector.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "signin"
            LOCATORS = {"login_button": "#login-btn"}

            def submit(self) -> "HomePage":
                self.click("login_button")
                return self.next_page(HomePage)
    """

    # Override in subclasses
    URL_PATH: str = ""
    PAGE_TITLE: str = ""
    LOCATORS: Dict[str, str] = {}

    def __init__(
        self,
        session: BrowserSession,
        base_url: str = "",
        timeout: Optional[float] = None,
    ):
        """
        Initialize page object.

        Args:
            session: Live browser session this page acts on
            base_url: Application base URL (defaults to BASE_URL env)
            timeout: Default wait bound in seconds
        """
        self.session = session
        self.page = session.page
        if not base_url:
            base_url = os.getenv("BASE_URL", "https://bstackdemo.com/")
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout
        logger.info(f"Initialized {type(self).__name__}")

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return urljoin(self.base_url, self.URL_PATH)

    def next_page(self, page_cls: Type[P]) -> P:
        """Build the page object for the screen we just navigated to."""
        return page_cls(self.session, base_url=self.base_url, timeout=self.timeout)

    # =========================================================================
    # Locators
    # =========================================================================

    def selector(self, target: str) -> str:
        return self.LOCATORS.get(target, target)

    def locator(self, target: Target) -> Locator:
        if isinstance(target, str):
            return self.page.locator(self.selector(target))
        return target

    @staticmethod
    def describe(target: Target) -> str:
        return target if isinstance(target, str) else repr(target)

    def _bound(self, timeout: Optional[float]) -> float:
        return self.timeout if timeout is None else timeout

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_visible(self, target: Target, timeout: Optional[float] = None) -> Locator:
        """
        Block until the element is visible.

        Raises:
            WaitTimeoutError: Element not visible within the bound
        """
        name = self.describe(target)
        bound = self._bound(timeout)
        locator = self.locator(target)
        logger.debug(f"Waiting for element to be visible: {name}")
        try:
            locator.wait_for(state="visible", timeout=_driver_ms(bound))
        except PlaywrightError as e:
            logger.error(f"Element '{name}' not visible after {bound:g}s")
            raise WaitTimeoutError(name, bound, "visible") from e
        return locator

    def wait_clickable(self, target: Target, timeout: Optional[float] = None) -> Locator:
        """
        Block until the element is visible and enabled.

        Raises:
            WaitTimeoutError: Element not clickable within the bound
        """
        name = self.describe(target)
        bound = self._bound(timeout)
        deadline = time.monotonic() + bound
        locator = self.wait_visible(target, bound)
        logger.debug(f"Waiting for element to be clickable: {name}")
        try:
            self.wait_until(
                locator.is_enabled,
                name,
                max(deadline - time.monotonic(), 0),
                state="clickable",
            )
        except WaitTimeoutError as e:
            # Report the full bound, not the remainder
            raise WaitTimeoutError(name, bound, "clickable") from e
        return locator

    def wait_until(
        self,
        predicate: Callable[[], Any],
        description: str,
        timeout: Optional[float] = None,
        state: str = "ready",
    ) -> Any:
        """
        Poll `predicate` until it returns a truthy value.

        Driver errors raised by the predicate count as "not yet".

        Returns:
            The first truthy value returned by the predicate

        Raises:
            WaitTimeoutError: Predicate still falsy when the bound elapsed
        """
        bound = self._bound(timeout)
        deadline = time.monotonic() + bound
        while True:
            try:
                result = predicate()
            except PlaywrightError as e:
                logger.debug(f"Probe for '{description}' raised: {e}")
                result = None
            if result:
                return result
            if time.monotonic() >= deadline:
                logger.error(f"'{description}' not {state} after {bound:g}s")
                raise WaitTimeoutError(description, bound, state)
            time.sleep(POLL_INTERVAL)

    def wait_page_ready(self, timeout: Optional[float] = None) -> None:
        """Wait for document.readyState to become 'complete'."""
        self.wait_until(
            lambda: self.page.evaluate("document.readyState") == "complete",
            "document",
            LONG_TIMEOUT if timeout is None else timeout,
            state="loaded",
        )
        logger.debug("Page loaded completely")

    # =========================================================================
    # Actions
    # =========================================================================

    def navigate(self, url: Optional[str] = None) -> None:
        """
        Navigate to `url` (defaults to this page's URL).

        Raises:
            InteractionError: Navigation failed
        """
        url = url or self.url
        logger.info(f"Navigating to URL: {url}")
        with allure.step(f"Navigate to {url}"):
            try:
                self.page.goto(url)
            except PlaywrightError as e:
                logger.error(f"Failed to navigate to {url}: {e}")
                raise InteractionError("navigate to", url, str(e)) from e

    def click(self, target: Target, timeout: Optional[float] = None) -> None:
        """
        Wait until clickable, then click.

        Raises:
            InteractionError: Element never became clickable or the click failed
        """
        name = self.describe(target)
        with allure.step(f"Click: {name}"):
            try:
                locator = self.wait_clickable(target, timeout)
                locator.click(timeout=_driver_ms(self._bound(timeout)))
            except (WaitTimeoutError, PlaywrightError) as e:
                logger.error(f"Failed to click on element: {name}")
                raise InteractionError("click", name, str(e)) from e
        logger.info(f"Clicked on element: {name}")

    def type_text(self, target: Target, text: str, timeout: Optional[float] = None) -> None:
        """
        Wait until visible, clear, then input `text`.

        Raises:
            InteractionError: Element never became visible or input failed
        """
        name = self.describe(target)
        shown = "*" * len(text) if "password" in name.lower() else text
        with allure.step(f"Type into {name}: {shown}"):
            try:
                locator = self.wait_visible(target, timeout)
                locator.clear()
                locator.fill(text)
            except (WaitTimeoutError, PlaywrightError) as e:
                logger.error(f"Failed to enter text in element: {name}")
                raise InteractionError("type into", name, str(e)) from e
        logger.info(f"Entered text '{shown}' in element: {name}")

    def select_option(self, target: Target, label: str, timeout: Optional[float] = None) -> None:
        """Select a <select> option by its visible label."""
        name = self.describe(target)
        with allure.step(f"Select '{label}' in {name}"):
            try:
                locator = self.wait_visible(target, timeout)
                locator.select_option(label=label)
            except (WaitTimeoutError, PlaywrightError) as e:
                logger.error(f"Failed to select '{label}' in element: {name}")
                raise InteractionError(f"select '{label}' in", name, str(e)) from e
        logger.info(f"Selected '{label}' in element: {name}")

    def scroll_into_view(self, target: Target) -> None:
        try:
            self.locator(target).scroll_into_view_if_needed()
            logger.debug(f"Scrolled to element: {self.describe(target)}")
        except PlaywrightError as e:
            logger.debug(f"Could not scroll to element {self.describe(target)}: {e}")

    # =========================================================================
    # Probes (never raise)
    # =========================================================================

    def is_displayed(self, target: Target, timeout: float = 0) -> bool:
        """
        Check whether the element is visible.

        With `timeout` > 0, waits up to that many seconds for it to appear.
        """
        name = self.describe(target)
        try:
            if timeout > 0:
                self.locator(target).first.wait_for(state="visible", timeout=_driver_ms(timeout))
                displayed = True
            else:
                displayed = self.locator(target).first.is_visible()
        except PlaywrightError:
            logger.debug(f"Element not found or not displayed: {name}")
            return False
        logger.debug(f"Element display status: {displayed} for element: {name}")
        return displayed

    def read_text(self, target: Target, timeout: Optional[float] = None) -> str:
        """
        Wait until visible and return the element text.

        Returns:
            Stripped text, or "" when the element never appears
        """
        name = self.describe(target)
        try:
            text = self.wait_visible(target, timeout).inner_text()
        except (WaitTimeoutError, PlaywrightError):
            logger.debug(f"No text available from element: {name}")
            return ""
        text = (text or "").strip()
        logger.info(f"Retrieved text '{text}' from element: {name}")
        return text

    def count(self, target: Target) -> int:
        try:
            return self.locator(target).count()
        except PlaywrightError as e:
            logger.debug(f"Could not count elements {self.describe(target)}: {e}")
            return 0

    def texts(self, target: Target) -> List[str]:
        try:
            return [t.strip() for t in self.locator(target).all_inner_texts()]
        except PlaywrightError as e:
            logger.debug(f"Could not read texts of {self.describe(target)}: {e}")
            return []

    def current_url(self) -> str:
        url = self.page.url
        logger.info(f"Current page URL: {url}")
        return url

    def page_title(self) -> str:
        title = self.page.title()
        logger.info(f"Current page title: {title}")
        return title

    # =========================================================================
    # Screenshot
    # =========================================================================

    def screenshot(self, name: str, full_page: bool = False) -> bytes:
        """
        Capture the page and attach it to the Allure report.

        Returns:
            PNG bytes (b"" if capture failed)
        """
        data = self.session.screenshot(full_page=full_page)
        if data:
            allure.attach(data, name=name, attachment_type=allure.attachment_type.PNG)
            logger.debug(f"Screenshot captured: {name}")
        return data


__all__ = [
    "BasePage",
    "DEFAULT_TIMEOUT",
    "SHORT_TIMEOUT",
    "LONG_TIMEOUT",
]
