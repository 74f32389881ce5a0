"""
fruitbar.validation

Field validation for full and partial updates.
"""

from fruitbar.validation.registry import FieldRegistry, FieldRule, parse_fields_param
from fruitbar.validation.rules import (
    ITEM_FIELDS,
    ORDER_FIELDS,
    PRODUCT_FIELDS,
    USER_FIELDS,
    password_format_message,
)

__all__ = [
    "ITEM_FIELDS",
    "ORDER_FIELDS",
    "PRODUCT_FIELDS",
    "USER_FIELDS",
    "FieldRegistry",
    "FieldRule",
    "parse_fields_param",
    "password_format_message",
]
