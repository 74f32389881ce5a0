"""
fruitbar.policy.orders

Order authorization rules.

Customers act only on orders they own; employees and admins act on every order.
Listings are pruned to the caller's own orders instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar

from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.policy.decision import Action, AuthDecision, PolicyTable, always


class OwnedOrder(Protocol):
    @property
    def owner_id(self) -> int: ...


O = TypeVar("O", bound=OwnedOrder)


def _owns(principal: Principal, order: OwnedOrder) -> bool:
    return principal.owns(order.owner_id)


ORDER_POLICY: PolicyTable[OwnedOrder] = PolicyTable(
    "Order",
    {
        (Role.customer, Action.create): _owns,
        (Role.customer, Action.read): _owns,
        (Role.customer, Action.update): _owns,
        (Role.customer, Action.delete): _owns,
        (Role.employee, Action.create): always,
        (Role.employee, Action.read): always,
        (Role.employee, Action.update): always,
        (Role.employee, Action.delete): always,
        (Role.admin, Action.create): always,
        (Role.admin, Action.read): always,
        (Role.admin, Action.update): always,
        (Role.admin, Action.delete): always,
    },
)


def can_create_order(principal: Principal, order: OwnedOrder) -> AuthDecision:
    return ORDER_POLICY.decide(principal, Action.create, order)


def can_read_order(principal: Principal, order: OwnedOrder) -> AuthDecision:
    return ORDER_POLICY.decide(principal, Action.read, order)


def can_update_order(principal: Principal, order: OwnedOrder) -> AuthDecision:
    """
    Checked against the stored order; a customer may not hand an order to another
    owner, so services also check the candidate when `ownerid` changes.
    """

    return ORDER_POLICY.decide(principal, Action.update, order)


def can_delete_order(principal: Principal, order: OwnedOrder) -> AuthDecision:
    return ORDER_POLICY.decide(principal, Action.delete, order)


def filter_readable_orders(principal: Principal, orders: Iterable[O]) -> list[O]:
    return ORDER_POLICY.filter_readable(principal, orders)
