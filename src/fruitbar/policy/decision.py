"""
fruitbar.policy.decision

Authorization decisions and the per-resource policy table.

Responsibilities:
- Define `AuthDecision` (allowed + denial reason) and the `Action` vocabulary.
- Provide `PolicyTable`: one rule per (role, action) for a resource, evaluated
  without side effects, plus the read-filter built from the same rules.
- Own the user-facing "Forbidden" message wording.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.errors import ForbiddenError

T = TypeVar("T")

FORBIDDEN_PREFIX = "Forbidden: Not enough privileges to "


class Action(enum.StrEnum):
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"


@dataclass(frozen=True, slots=True)
class AuthDecision:
    allowed: bool
    denial_reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise ForbiddenError(self.denial_reason or f"{FORBIDDEN_PREFIX}perform this action.")


ALLOW = AuthDecision(allowed=True)


def deny(reason: str) -> AuthDecision:
    return AuthDecision(allowed=False, denial_reason=reason)


def forbidden_message(action: Action | str, resource: str) -> str:
    return f"{FORBIDDEN_PREFIX}{action} this {resource}."


Rule = Callable[[Principal, T], bool]


def always(_principal: Principal, _target: object) -> bool:
    return True


def never(_principal: Principal, _target: object) -> bool:
    return False


class PolicyTable(Generic[T]):
    """
    Authorization table for one resource type.

    Every (role, action) pair must have a rule; a table with gaps fails at import
    time rather than silently denying (or allowing) at request time.
    """

    def __init__(
        self,
        resource: str,
        rules: Mapping[tuple[Role, Action], Rule[T]],
        *,
        messages: Mapping[Action, str] | None = None,
    ) -> None:
        missing = [(r, a) for r in Role for a in Action if (r, a) not in rules]
        if missing:
            pairs = ", ".join(f"{r}/{a}" for r, a in missing)
            raise ValueError(f"{resource} policy table is missing rules for: {pairs}")
        self.resource = resource
        self._rules = dict(rules)
        self._messages = dict(messages or {})

    def message(self, action: Action) -> str:
        return self._messages.get(action) or forbidden_message(action, self.resource)

    def decide(self, principal: Principal, action: Action, target: T) -> AuthDecision:
        rule = self._rules[(principal.role, action)]
        if rule(principal, target):
            return ALLOW
        return deny(self.message(action))

    def filter_readable(self, principal: Principal, records: Iterable[T]) -> list[T]:
        # Listings drop what the caller cannot read instead of failing the page.
        rule = self._rules[(principal.role, Action.read)]
        return [record for record in records if rule(principal, record)]


# --- Module Notes -----------------------------------------------------------
# Resource modules (`policy.orders`, `policy.products`, `policy.users`) each build one
# table and expose `can_<action>_<resource>` wrappers for handlers/services.
