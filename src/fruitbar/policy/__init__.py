"""
fruitbar.policy

Authorization decision engine.

Responsibilities:
- Per-resource policy tables (Order, Product, User) keyed by (role, action).
- Read filters that prune listings to what a principal may see.
"""

from fruitbar.policy.decision import ALLOW, Action, AuthDecision, PolicyTable, deny
from fruitbar.policy.orders import (
    can_create_order,
    can_delete_order,
    can_read_order,
    can_update_order,
    filter_readable_orders,
)
from fruitbar.policy.products import (
    can_create_product,
    can_delete_product,
    can_read_product,
    can_update_product,
    filter_readable_products,
)
from fruitbar.policy.users import (
    can_create_user,
    can_delete_user,
    can_delete_user_id,
    can_read_user,
    can_read_user_id,
    can_update_user,
    filter_readable_users,
)

__all__ = [
    "ALLOW",
    "Action",
    "AuthDecision",
    "PolicyTable",
    "can_create_order",
    "can_create_product",
    "can_create_user",
    "can_delete_order",
    "can_delete_product",
    "can_delete_user",
    "can_delete_user_id",
    "can_read_order",
    "can_read_product",
    "can_read_user",
    "can_read_user_id",
    "can_update_order",
    "can_update_product",
    "can_update_user",
    "deny",
    "filter_readable_orders",
    "filter_readable_products",
    "filter_readable_users",
]
