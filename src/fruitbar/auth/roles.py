"""
fruitbar.auth.roles

Role hierarchy.

Responsibilities:
- Define the closed set of roles (customer < employee < admin).
- Answer "does this role carry at least that privilege?" with one comparison.
- Reject unknown role strings at the claims boundary.
"""

from __future__ import annotations

import enum


class Role(enum.StrEnum):
    # Declaration order is privilege order; `rank` relies on it.
    customer = "customer"
    employee = "employee"
    admin = "admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS: dict[Role, int] = {role: i for i, role in enumerate(Role)}
_VALUES: frozenset[str] = frozenset(r.value for r in Role)


def valid_roles_msg() -> str:
    return ", ".join(r.value for r in Role)


def is_valid_role(role: object) -> bool:
    if isinstance(role, Role):
        return True
    return isinstance(role, str) and role in _VALUES


def satisfies(principal_role: Role, required_role: Role) -> bool:
    """
    True when `principal_role` carries at least the privilege of `required_role`.

    admin satisfies everything; employee satisfies employee and customer; customer
    satisfies customer only.
    """

    return principal_role.rank >= required_role.rank


# --- Module Notes -----------------------------------------------------------
# Privilege is a strict total order, so per-action role lists are never needed:
# route guards and policy tables compare ranks through `satisfies`.
