"""Storefront page helpers."""

from shopcheck.core.storefront.actions import (
    CheckoutResult,
    add_backpack_to_cart,
    add_to_cart,
    cart_badge_count,
    checkout,
    current_path,
    item_names,
    item_prices,
    login,
    logout,
    open_inventory,
    perform_login,
    remove_from_cart,
    reset_app_state,
    select_sort,
)
from shopcheck.core.storefront.ordering import (
    is_sorted_asc,
    is_sorted_desc,
    parse_prices,
    sorted_names,
)

__all__ = [
    "CheckoutResult",
    "add_backpack_to_cart",
    "add_to_cart",
    "cart_badge_count",
    "checkout",
    "current_path",
    "is_sorted_asc",
    "is_sorted_desc",
    "item_names",
    "item_prices",
    "login",
    "logout",
    "open_inventory",
    "parse_prices",
    "perform_login",
    "remove_from_cart",
    "reset_app_state",
    "select_sort",
    "sorted_names",
]
