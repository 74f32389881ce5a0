"""
fruitbar.validation.rules

Single-field rules and the per-resource registries built from them.

Responsibilities:
- Product: name, symbol, price, numInStock.
- Item: orderid, productid, quantity.
- Order: ownerid, paymentinfo, taxrate, items.
- User: name, password, role.
"""

from __future__ import annotations

import re
from numbers import Real
from typing import Any

from fruitbar.auth.roles import is_valid_role, valid_roles_msg
from fruitbar.errors import ValidationError
from fruitbar.pagination import MAX_RECORD_ID
from fruitbar.validation.registry import FieldRegistry, FieldRule

USER_NAME_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 8
# bcrypt ignores input past 72 bytes.
PASSWORD_MAX_LENGTH = 72

_CARD_NUMBER_RE = re.compile(r"(\d\s*){16}")
_EXPIRATION_RE = re.compile(r"(0[1-9]|1[0-2])/\d{2}")
_CVV_RE = re.compile(r"\d{3,4}")
_ZIPCODE_RE = re.compile(r"\d{5}(-\d{4})?")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    # Integer columns are signed 64-bit; larger values cannot be stored.
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) <= MAX_RECORD_ID


def _positive_id(name: str):
    def check(value: Any) -> None:
        if isinstance(value, int) and value > MAX_RECORD_ID:
            raise ValidationError(f"{name} must be less than or equal to {MAX_RECORD_ID}", field=name)
        if not _is_int(value) or value <= 0:
            raise ValidationError(f"{name} must be greater than zero", field=name)

    return check


# --- Product -----------------------------------------------------------------


def check_product_name(name: Any) -> None:
    if not isinstance(name, str) or len(name) < 1:
        raise ValidationError("name must be at least 1 character", field="name")


def check_product_symbol(symbol: Any) -> None:
    if not isinstance(symbol, str) or len(symbol) != 1 or not symbol.isprintable():
        raise ValidationError("symbol must be exactly 1 printable character", field="symbol")


def check_product_price(price: Any) -> None:
    if not _is_number(price):
        raise ValidationError("price must be greater than zero, got none", field="price")
    if price <= 0:
        raise ValidationError(f"price must be greater than zero, got {price:.2f}", field="price")


def check_num_in_stock(num: Any) -> None:
    if not _is_int(num) or num < 0:
        raise ValidationError(
            f"numInStock must be greater than or equal to zero, got {num}", field="numInStock"
        )


PRODUCT_FIELDS = FieldRegistry(
    "Product",
    [
        FieldRule("name", "name", check_product_name),
        FieldRule("symbol", "symbol", check_product_symbol),
        FieldRule("price", "price", check_product_price),
        FieldRule("numInStock", "num_in_stock", check_num_in_stock),
    ],
)


# --- Item --------------------------------------------------------------------


def check_quantity(quantity: Any) -> None:
    if not _is_int(quantity) or quantity <= 0:
        raise ValidationError(
            f"an item's quantity must be greater than zero, got {quantity}", field="quantity"
        )


ITEM_FIELDS = FieldRegistry(
    "Item",
    [
        FieldRule("orderid", "order_id", _positive_id("orderid")),
        FieldRule("productid", "product_id", _positive_id("productid")),
        FieldRule("quantity", "quantity", check_quantity),
    ],
)


# --- Order -------------------------------------------------------------------


def check_card_info(card: Any) -> None:
    errors: list[str] = []
    if not _EXPIRATION_RE.fullmatch(getattr(card, "expiration_date", None) or ""):
        errors.append("expiration date is invalid. Must be in MM/YY format and must be a valid date")
    if not _CARD_NUMBER_RE.fullmatch((getattr(card, "number", None) or "").strip()):
        errors.append("card number is invalid. Must be a 16 digit string, whitespace ignored")
    if not _CVV_RE.fullmatch((getattr(card, "cvv", None) or "").replace(" ", "")):
        errors.append("the CVV is invalid. Must be a 3 or 4 digit string, whitespace ignored")
    if not _ZIPCODE_RE.fullmatch(getattr(card, "zipcode", None) or ""):
        errors.append("zipcode is invalid. Must be a 5 digit string")
    if errors:
        raise ValidationError(", ".join(errors), field="paymentinfo")


def check_payment_info(info: Any) -> None:
    if info is None:
        raise ValidationError("paymentinfo is required", field="paymentinfo")
    if info.cash:
        return
    check_card_info(info.card_info)


def check_tax_rate(rate: Any) -> None:
    if not _is_number(rate) or not 0 <= rate <= 1:
        raise ValidationError(f"taxrate must be between 0 and 1, got {rate}", field="taxrate")


def check_items(items: Any) -> None:
    if items is None:
        raise ValidationError("items are required", field="items")
    seen: set[int] = set()
    for item in items:
        ITEM_FIELDS.validate_partial(item, ("productid", "quantity"))
        if item.product_id in seen:
            raise ValidationError(
                f"item list contains duplicate product ID: {item.product_id}", field="items"
            )
        seen.add(item.product_id)


ORDER_FIELDS = FieldRegistry(
    "Order",
    [
        FieldRule("ownerid", "owner_id", _positive_id("ownerid")),
        FieldRule("paymentinfo", "payment_info", check_payment_info),
        FieldRule("taxrate", "tax_rate", check_tax_rate),
        FieldRule("items", "items", check_items),
    ],
)


def check_new_order_totals(order: Any) -> None:
    """Subtotal, tax and total are computed server-side; a new order must not carry them."""

    supplied = [
        name for name in ("subtotal", "tax", "total") if getattr(order, name, None) not in (None, 0)
    ]
    if supplied:
        raise ValidationError(", ".join(f"{name} must be empty" for name in supplied))


# --- User --------------------------------------------------------------------


def password_format_message() -> str:
    return (
        f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters "
        "long and contain at least one letter and one digit."
    )


def check_user_name(name: Any) -> None:
    if not isinstance(name, str) or not 1 <= len(name) <= USER_NAME_MAX_LENGTH:
        raise ValidationError(
            f"name must be between 1 and {USER_NAME_MAX_LENGTH} characters", field="name"
        )


def check_password(password: Any) -> None:
    if (
        not isinstance(password, str)
        or not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH
        or not any(c.isalpha() for c in password)
        or not any(c.isdigit() for c in password)
    ):
        raise ValidationError(password_format_message(), field="password")


def check_role(role: Any) -> None:
    if not is_valid_role(role):
        raise ValidationError(
            f"role is invalid, expected one of: {valid_roles_msg()} got {role}", field="role"
        )


USER_FIELDS = FieldRegistry(
    "User",
    [
        FieldRule("name", "name", check_user_name),
        FieldRule("password", "password", check_password),
        FieldRule("role", "role", check_role),
    ],
)


# --- Module Notes -----------------------------------------------------------
# Services prefix raised messages with "<Resource> validation failed: " before
# returning them to clients.
