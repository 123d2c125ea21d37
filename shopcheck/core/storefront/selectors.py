"""Storefront selectors and paths."""

from __future__ import annotations

USERNAME_INPUT = '[data-test="username"]'
PASSWORD_INPUT = '[data-test="password"]'
LOGIN_BUTTON = '[data-test="login-button"]'
ERROR_MESSAGE = '[data-test="error"]'

APP_LOGO = ".app_logo"
INVENTORY_LIST = ".inventory_list"
SORT_SELECT = ".product_sort_container"
ITEM_NAME = ".inventory_item_name"
ITEM_PRICE = ".inventory_item_price"

CART_BADGE = ".shopping_cart_badge"
CART_LINK = ".shopping_cart_link"
CART_ITEM = ".cart_item"
CONTINUE_SHOPPING = '[data-test="continue-shopping"]'

MENU_BUTTON = "#react-burger-menu-btn"
LOGOUT_LINK = "#logout_sidebar_link"
RESET_LINK = "#reset_sidebar_link"

DETAILS_NAME = ".inventory_details_name"
DETAILS_PRICE = ".inventory_details_price"
DETAILS_DESC = ".inventory_details_desc"
DETAILS_IMAGE = ".inventory_details_img"
BACK_TO_PRODUCTS = '[data-test="back-to-products"]'

CHECKOUT_BUTTON = '[data-test="checkout"]'
FIRST_NAME_INPUT = '[data-test="firstName"]'
LAST_NAME_INPUT = '[data-test="lastName"]'
POSTAL_CODE_INPUT = '[data-test="postalCode"]'
CONTINUE_BUTTON = '[data-test="continue"]'
FINISH_BUTTON = '[data-test="finish"]'
COMPLETE_HEADER = ".complete-header"

INVENTORY_PATH_RE = r"^/inventory(\.html)?$"
LOGIN_PATH_RE = r"^/(index\.html)?$"

BACKPACK = "sauce-labs-backpack"
BIKE_LIGHT = "sauce-labs-bike-light"
BOLT_TSHIRT = "sauce-labs-bolt-t-shirt"

# Values of the sort <select>.
SORT_NAME_ASC = "az"
SORT_NAME_DESC = "za"
SORT_PRICE_ASC = "lohi"
SORT_PRICE_DESC = "hilo"


def add_to_cart_button(product: str) -> str:
    return f'[data-test="add-to-cart-{product}"]'


def remove_button(product: str) -> str:
    return f'[data-test="remove-{product}"]'
