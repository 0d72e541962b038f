"""
================================================================================
Home Page Object
================================================================================

Product catalogue of the StackDemo store (`/`).

Covers the header (signed-in user, logout, cart bag), the vendor and
favourites filters, the price sort dropdown and the product shelf.

The shelf re-renders asynchronously after filtering or sorting, and the cart
badge after adding a product. Each action waits for the visible effect
(grid re-rendered, badge changed) instead of sleeping.

================================================================================
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Optional, Tuple, Union
from urllib.parse import urlparse

import allure
from loguru import logger

from testsuites.ui_testing.data import Brand, SortOrder
from testsuites.ui_testing.framework.page_base import SHORT_TIMEOUT, BasePage

if TYPE_CHECKING:
    from .checkout_page import CheckoutPage
    from .login_page import LoginPage


_PRICE_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")


def parse_price(text: str) -> Optional[float]:
    """'$1,099.00' -> 1099.0; None when no number is present."""
    match = _PRICE_RE.search(text or "")
    if not match:
        return None
    return float(match.group(0).replace(",", ""))


class HomePage(BasePage):
    """Catalogue page."""

    URL_PATH = ""
    PAGE_TITLE = "StackDemo"

    LOCATORS = {
        # Header
        "logged_in_username": ".username",
        "logout_button": "#logout",
        "cart_icon": ".bag",
        "cart_quantity": ".bag-quantity",
        "page_header": "h2:text-is('StackDemo')",
        # Shelf
        "product_items": "div.shelf-item",
        "product_prices": "div.shelf-item .shelf-item__price .val",
        "product_titles": "div.shelf-item .shelf-item__title",
        "first_add_to_cart": "div.shelf-item >> nth=0 >> .shelf-item__buy-btn",
        "first_title": "div.shelf-item >> nth=0 >> .shelf-item__title",
        "first_price": "div.shelf-item >> nth=0 >> .shelf-item__price",
        "first_favourite": "div.shelf-item >> nth=0 >> .shelf-item__favourite",
        # Filters and sort
        "favourites_filter": "span:text-is('Favourites')",
        "sort_dropdown": ".sort select",
    }

    @allure.step("Open home page")
    def open(self) -> "HomePage":
        self.navigate()
        self.wait_page_ready()
        logger.info("Navigated to home page")
        return self

    # =========================================================================
    # Header
    # =========================================================================

    def is_logged_in(self, timeout: float = SHORT_TIMEOUT) -> bool:
        logged_in = self.is_displayed("logged_in_username", timeout)
        logger.info(f"User logged in: {logged_in}")
        return logged_in

    def logged_in_username(self) -> str:
        if self.is_logged_in():
            return self.read_text("logged_in_username")
        return ""

    @allure.step("Logout")
    def logout(self) -> "LoginPage":
        from .login_page import LoginPage

        self.click("logout_button")
        self.wait_until(
            lambda: not self.is_displayed("logged_in_username"),
            "signed-in username",
            state="hidden",
        )
        logger.info("Clicked logout button")
        return self.next_page(LoginPage)

    def cart_quantity(self) -> int:
        """Number on the cart badge (0 when the badge is absent)."""
        if not self.is_displayed("cart_quantity"):
            return 0
        text = self.read_text("cart_quantity", SHORT_TIMEOUT)
        try:
            return int(text)
        except ValueError:
            logger.warning(f"Unexpected cart quantity text: {text!r}")
            return 0

    @allure.step("Open cart")
    def go_to_cart(self) -> "CheckoutPage":
        from .checkout_page import CheckoutPage

        self.click("cart_icon")
        logger.info("Clicked on cart icon")
        return self.next_page(CheckoutPage)

    # =========================================================================
    # Shelf
    # =========================================================================

    @allure.step("Add first product to cart")
    def add_first_product_to_cart(self) -> "HomePage":
        before = self.cart_quantity()
        self.scroll_into_view("first_add_to_cart")
        self.click("first_add_to_cart")
        self.wait_until(
            lambda: self.cart_quantity() > before,
            "cart quantity",
            state="incremented",
        )
        logger.info("Added first product to cart")
        return self

    def first_product_title(self) -> str:
        return self.read_text("first_title")

    def first_product_price(self) -> str:
        return self.read_text("first_price")

    @allure.step("Add first product to favourites")
    def add_first_product_to_favourites(self) -> "HomePage":
        self.click("first_favourite")
        logger.info("Added first product to favourites")
        return self

    def product_count(self) -> int:
        count = self.count("product_items")
        logger.info(f"Number of products displayed: {count}")
        return count

    def product_prices(self) -> List[float]:
        """Prices of the displayed products, in shelf order."""
        prices = [parse_price(text) for text in self.texts("product_prices")]
        return [p for p in prices if p is not None]

    def _shelf_state(self) -> Tuple[str, ...]:
        """Titles on the shelf, in display order."""
        return tuple(self.texts("product_titles"))

    def _wait_for_shelf_change(self, before: Tuple[str, ...], timeout: Optional[float] = None) -> None:
        """
        Wait until the shelf differs from `before` and two consecutive polls agree.

        Raises:
            WaitTimeoutError: Shelf never changed within the bound
        """
        last = {"state": before}

        def re_rendered() -> bool:
            current = self._shelf_state()
            stable = current != before and current == last["state"]
            last["state"] = current
            return stable

        self.wait_until(re_rendered, "product shelf", timeout, state="re-rendered")

    # =========================================================================
    # Filters and sort
    # =========================================================================

    @allure.step("Filter products by {brand}")
    def filter_by(self, brand: Union[Brand, str]) -> "HomePage":
        """
        Toggle a vendor checkbox.

        Raises:
            InvalidFixtureError: `brand` is not a known vendor
            WaitTimeoutError: Shelf did not re-render after the click
        """
        vendor = Brand.parse(brand)
        before = self._shelf_state()
        self.click(f"span.checkmark:text-is('{vendor.value}')")
        self._wait_for_shelf_change(before)
        logger.info(f"Filtered products by {vendor.value}")
        return self

    @allure.step("Filter products by favourites")
    def filter_by_favourites(self) -> "HomePage":
        before = self._shelf_state()
        self.click("favourites_filter")
        self._wait_for_shelf_change(before)
        logger.info("Filtered products by favourites")
        return self

    @allure.step("Sort products: {order}")
    def sort_by(self, order: Union[SortOrder, str]) -> "HomePage":
        """
        Sort the shelf by price.

        Raises:
            InvalidFixtureError: `order` is not a known sort option
            WaitTimeoutError: Shelf never showed the requested order
        """
        order = SortOrder.parse(order)
        self.select_option("sort_dropdown", order.value)

        def in_order() -> bool:
            prices = self.product_prices()
            wanted = sorted(prices, reverse=order is SortOrder.HIGH_TO_LOW)
            return bool(prices) and prices == wanted

        self.wait_until(in_order, "product prices", state=f"sorted {order.value.lower()}")
        logger.info(f"Sorted products by price: {order.value.lower()}")
        return self

    # =========================================================================
    # Page checks
    # =========================================================================

    def is_home_page_displayed(self) -> bool:
        displayed = self.is_displayed("page_header") or self.is_displayed(
            "product_items", SHORT_TIMEOUT
        )
        logger.info(f"Home page displayed: {displayed}")
        return displayed

    def is_on_home_page(self) -> bool:
        host = urlparse(self.base_url).netloc
        return host in self.current_url() and self.is_home_page_displayed()

    def title(self) -> str:
        return self.page_title()


__all__ = ["HomePage", "parse_price"]
