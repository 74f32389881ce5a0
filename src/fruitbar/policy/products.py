"""
fruitbar.policy.products

Product authorization rules: catalogue changes are admin-only, reads are open to any
authenticated caller. Products carry no ownership.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.policy.decision import (
    FORBIDDEN_PREFIX,
    Action,
    AuthDecision,
    PolicyTable,
    always,
    never,
)

P = TypeVar("P")

PRODUCT_POLICY: PolicyTable[Any] = PolicyTable(
    "Product",
    {
        (Role.customer, Action.create): never,
        (Role.customer, Action.read): always,
        (Role.customer, Action.update): never,
        (Role.customer, Action.delete): never,
        (Role.employee, Action.create): never,
        (Role.employee, Action.read): always,
        (Role.employee, Action.update): never,
        (Role.employee, Action.delete): never,
        (Role.admin, Action.create): always,
        (Role.admin, Action.read): always,
        (Role.admin, Action.update): always,
        (Role.admin, Action.delete): always,
    },
    messages={
        Action.create: f"{FORBIDDEN_PREFIX}create a Product.",
        Action.update: f"{FORBIDDEN_PREFIX}update a Product.",
        Action.delete: f"{FORBIDDEN_PREFIX}delete a Product.",
    },
)


def can_create_product(principal: Principal, product: object = None) -> AuthDecision:
    return PRODUCT_POLICY.decide(principal, Action.create, product)


def can_read_product(principal: Principal, product: object = None) -> AuthDecision:
    return PRODUCT_POLICY.decide(principal, Action.read, product)


def can_update_product(principal: Principal, product: object = None) -> AuthDecision:
    return PRODUCT_POLICY.decide(principal, Action.update, product)


def can_delete_product(principal: Principal, product: object = None) -> AuthDecision:
    return PRODUCT_POLICY.decide(principal, Action.delete, product)


def filter_readable_products(principal: Principal, products: Iterable[P]) -> list[P]:
    return PRODUCT_POLICY.filter_readable(principal, products)
