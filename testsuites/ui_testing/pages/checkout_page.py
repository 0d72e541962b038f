"""
================================================================================
Checkout Page Object
================================================================================

Floating cart panel and the `/checkout` shipping form of the StackDemo store.

Cart rows are addressed by zero-based index. Reading or removing an index
that does not exist is logged and ignored rather than raised, so removing
from an empty cart is a no-op.

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger

from testsuites.ui_testing.data import CheckoutDetails
from testsuites.ui_testing.framework.page_base import SHORT_TIMEOUT, BasePage

if TYPE_CHECKING:
    from .home_page import HomePage


class CheckoutPage(BasePage):
    """Cart panel and shipping form."""

    URL_PATH = "checkout"
    PAGE_TITLE = "StackDemo"

    LOCATORS = {
        # Cart panel
        "cart_items": ".float-cart__content .shelf-item",
        "close_cart_button": ".float-cart__close-btn",
        "subtotal": ".sub-price__val",
        "total": "p.total-price span",
        "checkout_button": ".buy-btn",
        "empty_cart_message": ".shelf-empty",
        # Shipping form
        "first_name_input": "#firstNameInput",
        "last_name_input": "#lastNameInput",
        "address_input": "#addressLine1Input",
        "state_input": "#provinceInput",
        "postal_code_input": "#postCodeInput",
        "submit_order_button": "#checkout-shipping-continue, #checkout-btn >> nth=0",
        # Confirmation
        "confirmation_message": "#confirmation-message",
        "confirmation_header": ".optimizedCheckout-contentPrimary h1",
        "home_link": "a:text-is('StackDemo') >> nth=0",
    }

    @allure.step("Open checkout page")
    def open(self) -> "CheckoutPage":
        self.navigate()
        self.wait_page_ready()
        logger.info("Navigated to checkout page")
        return self

    # =========================================================================
    # Cart panel
    # =========================================================================

    def _row(self, index: int, part: str) -> str:
        return f"{self.selector('cart_items')} >> nth={index} >> {part}"

    def _has_row(self, index: int) -> bool:
        return 0 <= index < self.cart_item_count()

    def cart_item_count(self) -> int:
        count = self.count("cart_items")
        logger.info(f"Number of items in cart: {count}")
        return count

    def cart_item_title(self, index: int) -> str:
        if not self._has_row(index):
            logger.error(f"Item index out of bounds: {index}")
            return ""
        return self.read_text(self._row(index, ".shelf-item__title"))

    def cart_item_price(self, index: int) -> str:
        if not self._has_row(index):
            logger.error(f"Item index out of bounds: {index}")
            return ""
        return self.read_text(self._row(index, ".shelf-item__price"))

    @allure.step("Remove cart item #{index}")
    def remove_cart_item(self, index: int) -> "CheckoutPage":
        """Remove the row at `index`; out-of-range indexes are ignored."""
        before = self.cart_item_count()
        if not 0 <= index < before:
            logger.error(f"Remove button index out of bounds: {index}")
            return self

        self.click(self._row(index, ".shelf-item__del"))
        self.wait_until(
            lambda: self.count("cart_items") < before,
            "cart items",
            state="reduced",
        )
        logger.info(f"Removed item at index: {index}")
        return self

    def subtotal(self) -> str:
        return self.read_text("subtotal")

    def total(self) -> str:
        return self.read_text("total")

    def is_cart_empty(self) -> bool:
        return self.is_displayed("empty_cart_message") or self.cart_item_count() == 0

    @allure.step("Close cart")
    def close_cart(self) -> "HomePage":
        from .home_page import HomePage

        self.click("close_cart_button")
        logger.info("Closed cart")
        return self.next_page(HomePage)

    # =========================================================================
    # Shipping form
    # =========================================================================

    @allure.step("Proceed to checkout")
    def proceed_to_checkout(self) -> "CheckoutPage":
        self.click("checkout_button")
        self.wait_page_ready()
        logger.info("Clicked checkout button")
        return self

    def enter_first_name(self, first_name: str) -> "CheckoutPage":
        self.type_text("first_name_input", first_name)
        return self

    def enter_last_name(self, last_name: str) -> "CheckoutPage":
        self.type_text("last_name_input", last_name)
        return self

    def enter_address(self, address: str) -> "CheckoutPage":
        self.type_text("address_input", address)
        return self

    def enter_state(self, state: str) -> "CheckoutPage":
        self.type_text("state_input", state)
        return self

    def enter_postal_code(self, postal_code: str) -> "CheckoutPage":
        self.type_text("postal_code_input", postal_code)
        return self

    @allure.step("Fill shipping form")
    def fill_checkout_form(self, details: CheckoutDetails) -> "CheckoutPage":
        self.enter_first_name(details.first_name)
        self.enter_last_name(details.last_name)
        self.enter_address(details.address)
        self.enter_state(details.state)
        self.enter_postal_code(details.postal_code)
        logger.info(f"Filled complete checkout form for {details.full_name}")
        return self

    @allure.step("Submit order")
    def submit_order(self) -> "CheckoutPage":
        self.click("submit_order_button")
        logger.info("Submitted order")
        return self

    @allure.step("Complete checkout")
    def complete_checkout(self, details: CheckoutDetails) -> "CheckoutPage":
        """Checkout button, shipping form, submit."""
        self.proceed_to_checkout()
        self.fill_checkout_form(details)
        self.submit_order()
        logger.info("Completed checkout process")
        return self

    # =========================================================================
    # Confirmation
    # =========================================================================

    def is_order_confirmation_displayed(self) -> bool:
        return self.is_displayed("confirmation_message", SHORT_TIMEOUT) or self.is_displayed(
            "confirmation_header"
        )

    def confirmation_message(self) -> str:
        if self.is_displayed("confirmation_message"):
            return self.read_text("confirmation_message")
        return ""

    @allure.step("Return to home page")
    def return_home(self) -> "HomePage":
        from .home_page import HomePage

        self.click("home_link")
        logger.info("Returned to home page")
        return self.next_page(HomePage)

    def is_on_checkout_page(self) -> bool:
        return "checkout" in self.current_url()

    def title(self) -> str:
        return self.page_title()


__all__ = ["CheckoutPage"]
