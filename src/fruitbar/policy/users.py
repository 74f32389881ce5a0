"""
fruitbar.policy.users

User account authorization rules.

Rules:
- create: customers and employees may only create customer accounts; admins any role.
- read/update: customers see only themselves; employees see themselves and every
  customer account; admins see everyone.
- delete: nobody deletes their own account. Customers never delete. Employees delete
  customer accounts only, which requires the stored target role, so callers re-read the
  target before asking. Admins delete anyone else.
- role changes: customers keep their role; employees may only assign `customer`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar

from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.policy.decision import (
    ALLOW,
    FORBIDDEN_PREFIX,
    Action,
    AuthDecision,
    PolicyTable,
    always,
    deny,
    never,
)


class UserRecord(Protocol):
    @property
    def id(self) -> int | None: ...

    @property
    def role(self) -> Role | str: ...


U = TypeVar("U", bound=UserRecord)

FORBIDDEN_CREATE_USER_MSG = f"{FORBIDDEN_PREFIX}create Users with the 'employee' or 'admin' roles."
FORBIDDEN_CHANGE_ROLE_MSG = f"{FORBIDDEN_PREFIX}change the role of this User."


def _is_self(principal: Principal, user: UserRecord) -> bool:
    return principal.owns(user.id)


def _is_customer(_principal: Principal, user: UserRecord) -> bool:
    return user.role == Role.customer


def _is_self_or_customer(principal: Principal, user: UserRecord) -> bool:
    return _is_self(principal, user) or user.role == Role.customer


def _is_other_customer(principal: Principal, user: UserRecord) -> bool:
    return not _is_self(principal, user) and user.role == Role.customer


def _is_other(principal: Principal, user: UserRecord) -> bool:
    return not _is_self(principal, user)


USER_POLICY: PolicyTable[UserRecord] = PolicyTable(
    "User",
    {
        (Role.customer, Action.create): _is_customer,
        (Role.customer, Action.read): _is_self,
        (Role.customer, Action.update): _is_self,
        (Role.customer, Action.delete): never,
        (Role.employee, Action.create): _is_customer,
        (Role.employee, Action.read): _is_self_or_customer,
        (Role.employee, Action.update): _is_self_or_customer,
        (Role.employee, Action.delete): _is_other_customer,
        (Role.admin, Action.create): always,
        (Role.admin, Action.read): always,
        (Role.admin, Action.update): always,
        (Role.admin, Action.delete): _is_other,
    },
    messages={Action.create: FORBIDDEN_CREATE_USER_MSG},
)


def can_create_user(principal: Principal, candidate: UserRecord) -> AuthDecision:
    return USER_POLICY.decide(principal, Action.create, candidate)


def can_read_user(principal: Principal, user: UserRecord) -> AuthDecision:
    return USER_POLICY.decide(principal, Action.read, user)


def can_read_user_id(principal: Principal, user_id: int) -> AuthDecision:
    """
    Early check before the record is loaded. Only a customer can be refused on the id
    alone; everyone else needs the stored role (see `can_read_user`).
    """

    if principal.role is Role.customer and user_id != principal.user_id:
        return deny(USER_POLICY.message(Action.read))
    return ALLOW


def can_update_user(
    principal: Principal,
    user: UserRecord,
    *,
    requested_role: Role | str | None = None,
) -> AuthDecision:
    """
    `user` is the stored record; `requested_role` is the role the update would set,
    when the update touches the role at all.
    """

    decision = USER_POLICY.decide(principal, Action.update, user)
    if not decision or requested_role is None or requested_role == user.role:
        return decision
    if principal.role is Role.admin:
        return ALLOW
    if principal.role is Role.employee and requested_role == Role.customer:
        return ALLOW
    return deny(FORBIDDEN_CHANGE_ROLE_MSG)


def can_delete_user_id(principal: Principal, user_id: int) -> AuthDecision:
    """
    Checks that need no stored record: self-deletion and customer callers. Runs before
    the target is re-read so those requests never touch storage.
    """

    if user_id == principal.user_id or principal.role is Role.customer:
        return deny(USER_POLICY.message(Action.delete))
    return ALLOW


def can_delete_user(principal: Principal, user: UserRecord) -> AuthDecision:
    # Self-deletion is refused for every role before the table is consulted.
    if _is_self(principal, user):
        return deny(USER_POLICY.message(Action.delete))
    return USER_POLICY.decide(principal, Action.delete, user)


def filter_readable_users(principal: Principal, users: Iterable[U]) -> list[U]:
    return USER_POLICY.filter_readable(principal, users)
