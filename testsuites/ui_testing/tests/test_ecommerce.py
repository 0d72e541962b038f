"""
================================================================================
E-Commerce Feature UI Tests
================================================================================

Cart, catalogue (filter, sort, favourites) and checkout scenarios, all run
as the signed-in demo user.

Checkout completion is verified up to submission; the confirmation screen
is logged but not asserted since the demo store does not always render it.

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.data import (
    CHECKOUT_ROWS,
    PRODUCT_FILTERS,
    Brand,
    CheckoutDetails,
    SortOrder,
    row_id,
)
from testsuites.ui_testing.pages import HomePage


@allure.epic("UI Testing")
@allure.feature("Shopping Cart")
@pytest.mark.cart
class TestShoppingCart:
    """Cart badge, cart panel rows and totals."""

    @allure.story("Add to Cart")
    @allure.title("Adding a product increments the cart badge")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_add_product_to_cart(self, logged_in_home: HomePage, new_scenario):
        """Verify user can add products to shopping cart."""
        scenario = new_scenario(
            "Test Add Product to Cart",
            "Verify user can add products to shopping cart",
            "Shopping Cart",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Verify initial cart state")
            initial_count = home.cart_quantity()

            scenario.step("Get product details before adding to cart")
            title = home.first_product_title()
            price = home.first_product_price()

            scenario.step("Add first product to cart")
            home.add_first_product_to_cart()

            scenario.step("Verify product added to cart")
            updated_count = home.cart_quantity()
            assert updated_count == initial_count + 1, "Cart quantity should increase by 1"
            scenario.passed(
                f"Added '{title}' with price {price} to cart. Cart count: {updated_count}"
            )

    @allure.story("Add to Cart")
    @allure.title("Adding the first product {times} time(s)")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.parametrize("times", [1, 2, 3])
    def test_add_product_multiple_times(self, logged_in_home: HomePage, new_scenario, times: int):
        """Verify the badge counts every addition of the same product."""
        scenario = new_scenario(
            f"Test Add Multiple Products to Cart - x{times}",
            "Verify user can add multiple products to shopping cart",
            "Shopping Cart",
        )
        home = logged_in_home
        with scenario.guard():
            for expected in range(1, times + 1):
                scenario.step(f"Add first product to cart ({expected}/{times})")
                home.add_first_product_to_cart()
                assert home.cart_quantity() == expected, (
                    f"Cart should have {expected} item(s) after addition {expected}"
                )
            scenario.passed(f"Added product {times} time(s). Final count: {home.cart_quantity()}")

    @allure.story("Remove from Cart")
    @allure.title("Removing the only item empties the cart")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_remove_item_from_cart(self, logged_in_home: HomePage, new_scenario):
        """Verify user can remove items from shopping cart."""
        scenario = new_scenario(
            "Test Remove Item from Cart",
            "Verify user can remove items from shopping cart",
            "Shopping Cart",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Add product to cart")
            home.add_first_product_to_cart()
            assert home.cart_quantity() == 1, "Cart should have 1 item"

            scenario.step("Open cart")
            cart = home.go_to_cart()
            assert cart.cart_item_count() == 1, "Cart should show 1 item"

            scenario.step("Remove item from cart")
            cart.remove_cart_item(0)

            scenario.step("Verify item removed")
            assert cart.is_cart_empty(), "Cart should be empty after removing item"

            scenario.step("Remove again from the empty cart")
            cart.remove_cart_item(0)
            assert cart.is_cart_empty(), "Removing from an empty cart should change nothing"
            scenario.passed("Cart item removal verified successfully")

    @allure.story("Totals")
    @allure.title("Cart shows subtotal and total")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_cart_total_calculation(self, logged_in_home: HomePage, new_scenario):
        """Verify cart total is calculated correctly."""
        scenario = new_scenario(
            "Test Cart Total Calculation",
            "Verify cart total is calculated correctly",
            "Shopping Cart",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Add multiple products to cart")
            home.add_first_product_to_cart()
            home.add_first_product_to_cart()
            assert home.cart_quantity() == 2, "Cart should have 2 items"

            scenario.step("Open cart and verify totals")
            cart = home.go_to_cart()
            subtotal = cart.subtotal()
            assert subtotal, "Subtotal should not be empty"
            scenario.step(f"Total line: {cart.total() or '<not shown>'}")
            scenario.passed(f"Cart totals shown. Subtotal: {subtotal}")


@allure.epic("UI Testing")
@allure.feature("Product Catalogue")
@pytest.mark.catalogue
class TestProductCatalogue:
    """Vendor filters, price sort and favourites."""

    @allure.story("Filter")
    @allure.title("Filtering by {brand}")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.parametrize("brand", PRODUCT_FILTERS, ids=row_id)
    def test_product_filtering(self, logged_in_home: HomePage, new_scenario, brand: Brand):
        """Verify products can be filtered by brand."""
        scenario = new_scenario(
            f"Test Product Filtering - {brand.value}",
            f"Verify products can be filtered by brand: {brand.value}",
            "Product Filter",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Get initial product count")
            initial_count = home.product_count()

            scenario.step(f"Apply {brand.value} filter")
            home.filter_by(brand)

            scenario.step("Verify filter applied")
            filtered_count = home.product_count()
            assert filtered_count > 0, "Filtered products should be displayed"
            assert filtered_count < initial_count, "Filter should narrow the shelf"
            scenario.passed(
                f"Filter applied. Initial count: {initial_count}, Filtered count: {filtered_count}"
            )

    @allure.story("Sort")
    @allure.title("Sorting by price in both directions")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_product_sorting(self, logged_in_home: HomePage, new_scenario):
        """Verify products can be sorted by price."""
        scenario = new_scenario(
            "Test Product Sorting",
            "Verify products can be sorted by price",
            "Product Sorting",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Sort products by price: Low to High")
            home.sort_by(SortOrder.LOW_TO_HIGH)
            product_count = home.product_count()
            assert product_count > 0, "Products should be displayed after sorting"
            prices = home.product_prices()
            assert prices == sorted(prices), "Prices should be ascending"

            scenario.step("Sort products by price: High to Low")
            home.sort_by(SortOrder.HIGH_TO_LOW)
            assert home.product_count() == product_count, (
                "Product count should remain same after sorting"
            )
            prices = home.product_prices()
            assert prices == sorted(prices, reverse=True), "Prices should be descending"
            scenario.passed("Product sorting verified successfully")

    @allure.story("Favourites")
    @allure.title("Favourited product appears under Favourites")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_favourites_functionality(self, logged_in_home: HomePage, new_scenario):
        """Verify user can add products to favourites and filter by favourites."""
        scenario = new_scenario(
            "Test Favourites Functionality",
            "Verify user can add products to favourites and filter by favourites",
            "Favourites",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Add first product to favourites")
            home.add_first_product_to_favourites()

            scenario.step("Filter by favourites")
            home.filter_by_favourites()
            favourites = home.product_count()
            assert favourites > 0, "Favourite products should be displayed"
            scenario.passed(f"Favourite products count: {favourites}")


@allure.epic("UI Testing")
@allure.feature("Checkout")
@pytest.mark.checkout
class TestCheckout:
    """Shipping form and order submission."""

    @allure.story("Complete Checkout")
    @allure.title("Checkout for {details.first_name} {details.last_name}")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.e2e
    @pytest.mark.parametrize("details", CHECKOUT_ROWS, ids=row_id)
    def test_complete_checkout_process(
        self,
        logged_in_home: HomePage,
        new_scenario,
        details: CheckoutDetails,
    ):
        """Verify user can complete entire checkout process."""
        scenario = new_scenario(
            f"Test Complete Checkout Process - {details.full_name}",
            "Verify user can complete entire checkout process",
            "Checkout",
        )
        home = logged_in_home
        with scenario.guard():
            scenario.step("Add product to cart")
            home.add_first_product_to_cart()
            assert home.cart_quantity() == 1, "Cart should have 1 item"

            scenario.step("Open cart")
            cart = home.go_to_cart()

            scenario.step("Verify cart items")
            assert cart.cart_item_count() == 1, "Cart should show 1 item"
            assert cart.cart_item_title(0), "Item title should not be empty"
            assert cart.cart_item_price(0), "Item price should not be empty"

            scenario.step(f"Complete checkout with details: {details.full_name}")
            cart.complete_checkout(details)

            scenario.step("Verify checkout completion")
            if cart.is_order_confirmation_displayed():
                scenario.step(f"Confirmation: {cart.confirmation_message() or 'shown'}")
            else:
                scenario.warning("Order confirmation not shown after submission")
            scenario.passed(f"Checkout process completed for: {details.full_name}")
