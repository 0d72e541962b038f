"""
================================================================================
Scenario Data Provider
================================================================================

Literal input tables for parametrised UI scenarios.

Symbolic values (users, brands, sort orders) are closed enums; `parse()`
turns a free-form string into a member or raises InvalidFixtureError, so an
unknown value fails where it is constructed rather than deep inside a page
object.

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple, Type, TypeVar, Union

from testsuites.ui_testing.framework.exceptions import InvalidFixtureError


E = TypeVar("E", bound="_SymbolicEnum")


class _SymbolicEnum(str, Enum):
    """String enum with case-insensitive parsing."""

    @classmethod
    def parse(cls: Type[E], value: Union[str, E]) -> E:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted or member.name.lower() == wanted:
                    return member
        raise InvalidFixtureError(cls._kind(), value, [m.value for m in cls])

    @classmethod
    def _kind(cls) -> str:
        return cls.__name__

    def __str__(self) -> str:
        return self.value


class DemoUser(_SymbolicEnum):
    """Accounts offered by the sign-in username dropdown."""
    DEMOUSER = "demouser"
    FAV_USER = "fav_user"
    IMAGE_NOT_LOADING_USER = "image_not_loading_user"
    EXISTING_ORDERS_USER = "existing_orders_user"

    @classmethod
    def _kind(cls) -> str:
        return "username"


class Brand(_SymbolicEnum):
    """Vendor checkboxes in the catalogue filter panel."""
    APPLE = "Apple"
    SAMSUNG = "Samsung"
    ONEPLUS = "OnePlus"
    GOOGLE = "Google"

    @classmethod
    def _kind(cls) -> str:
        return "brand filter"


class SortOrder(_SymbolicEnum):
    """Options of the catalogue price sort dropdown (values are option labels)."""
    LOW_TO_HIGH = "Lowest to highest"
    HIGH_TO_LOW = "Highest to lowest"

    @classmethod
    def _kind(cls) -> str:
        return "sort order"


class CheckoutDetails(NamedTuple):
    """Shipping form row."""
    first_name: str
    last_name: str
    address: str
    state: str
    postal_code: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class DeviceViewport(NamedTuple):
    name: str
    width: int
    height: int


# =============================================================================
# Tables
# =============================================================================

# Every account the sign-in dropdown offers
LOGIN_USERS: Tuple[DemoUser, ...] = tuple(DemoUser)

INVALID_USERNAMES: Tuple[str, ...] = (
    "invalid_user",
    "",
    "test_user",
)

CHECKOUT_ROWS: Tuple[CheckoutDetails, ...] = (
    CheckoutDetails("John", "Doe", "123 Main St", "California", "90210"),
    CheckoutDetails("Jane", "Smith", "456 Oak Ave", "New York", "10001"),
    CheckoutDetails("Mike", "Johnson", "789 Pine Rd", "Texas", "75001"),
)

PRODUCT_FILTERS: Tuple[Brand, ...] = tuple(Brand)

DEVICE_VIEWPORTS: Tuple[DeviceViewport, ...] = (
    DeviceViewport("iPhone 12", 390, 844),
    DeviceViewport("Samsung Galaxy S21", 384, 854),
    DeviceViewport("iPad", 768, 1024),
    DeviceViewport("Android Tablet", 800, 1280),
)


def row_id(row: object) -> str:
    """pytest id for a table row."""
    if isinstance(row, CheckoutDetails):
        return row.full_name.replace(" ", "_")
    if isinstance(row, DeviceViewport):
        return row.name.replace(" ", "_")
    return str(row) or "<empty>"


__all__ = [
    "DemoUser",
    "Brand",
    "SortOrder",
    "CheckoutDetails",
    "DeviceViewport",
    "LOGIN_USERS",
    "INVALID_USERNAMES",
    "CHECKOUT_ROWS",
    "PRODUCT_FILTERS",
    "DEVICE_VIEWPORTS",
    "row_id",
]
