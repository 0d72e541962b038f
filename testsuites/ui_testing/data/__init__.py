"""Literal scenario inputs."""

from .data_provider import (
    CHECKOUT_ROWS,
    DEVICE_VIEWPORTS,
    INVALID_USERNAMES,
    LOGIN_USERS,
    PRODUCT_FILTERS,
    Brand,
    CheckoutDetails,
    DemoUser,
    DeviceViewport,
    SortOrder,
    row_id,
)

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
