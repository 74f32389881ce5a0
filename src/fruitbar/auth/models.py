"""
fruitbar.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass

from fruitbar.auth.roles import Role, satisfies


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, built once per request from validated claims.
    """

    user_id: int
    role: Role

    def has_role(self, required: Role) -> bool:
        return satisfies(self.role, required)

    def owns(self, owner_id: int | None) -> bool:
        return owner_id is not None and owner_id == self.user_id


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is passed into every policy function.
