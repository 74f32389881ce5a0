"""
fruitbar.services.users_service

User account service (transaction owner).

Responsibilities:
- Create accounts (authenticated, or anonymous self-registration as a customer).
- Read, list, update and delete accounts under `fruitbar.policy.users`.
- Hash passwords on every write that sets one; never return hashes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.db.models import User
from fruitbar.db.repositories.users import UserRepo
from fruitbar.errors import ValidationError
from fruitbar.observability.logging import get_logger
from fruitbar.policy.users import (
    can_create_user,
    can_delete_user,
    can_delete_user_id,
    can_read_user,
    can_read_user_id,
    can_update_user,
    filter_readable_users,
)
from fruitbar.schemas import UserIn
from fruitbar.services.common import Page, read_page, validating
from fruitbar.services.passwords import hash_password
from fruitbar.settings import Settings
from fruitbar.validation.rules import USER_FIELDS

log = get_logger(__name__)

# Self-registration is decided as a customer that owns nothing.
REGISTRANT = Principal(user_id=0, role=Role.customer)


class UserService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._users = UserRepo(session)

    async def _ensure_name_free(self, name: str, *, exclude_id: int | None = None) -> None:
        if await self._users.name_taken(name, exclude_id=exclude_id):
            raise ValidationError(
                f"User validation failed: name is already taken: {name}", field="name"
            )

    async def create(self, *, principal: Principal | None, body: UserIn) -> User:
        if body.role is None:
            body = body.model_copy(update={"role": Role.customer.value})

        with validating("User"):
            USER_FIELDS.validate(body)
        can_create_user(principal or REGISTRANT, body).raise_if_denied()
        await self._ensure_name_free(body.name)  # type: ignore[arg-type]

        password_hash = hash_password(
            body.password, rounds=self._settings.bcrypt_rounds  # type: ignore[arg-type]
        )
        user = await self._users.create(
            User(name=body.name, password_hash=password_hash, role=Role(body.role))
        )
        await self._session.commit()
        log.info("user.created", created_user_id=user.id, created_role=user.role.value)
        return user

    async def get(self, *, principal: Principal, user_id: int) -> User:
        can_read_user_id(principal, user_id).raise_if_denied()
        user = await self._users.require(user_id)
        can_read_user(principal, user).raise_if_denied()
        return user

    async def list_page(self, *, principal: Principal, params: Mapping[str, Any]) -> Page[User]:
        page = await read_page(
            self._users,
            principal,
            params,
            resource_name="users",
            max_limit=self._settings.users_page_max,
            readable=filter_readable_users,
        )
        log.info("user.page_read", count=len(page.records), limit=page.seek.limit)
        return page

    async def update(
        self,
        *,
        principal: Principal,
        user_id: int,
        body: UserIn,
        fields: list[str] | None = None,
    ) -> User:
        user = await self._users.require(user_id, for_update=True)
        can_update_user(principal, user).raise_if_denied()

        if not fields and body.role is None:
            body = body.model_copy(update={"role": user.role.value})
        selected = fields or list(USER_FIELDS.field_names)

        with validating("User"):
            USER_FIELDS.validate_partial(body, selected)
        requested_role = Role(body.role) if "role" in selected else None
        if requested_role is not None:
            can_update_user(principal, user, requested_role=requested_role).raise_if_denied()

        values: dict[str, Any] = {}
        if "name" in selected:
            await self._ensure_name_free(body.name, exclude_id=user_id)  # type: ignore[arg-type]
            values["name"] = body.name
        if "password" in selected:
            log.info("user.password_changed", target_user_id=user_id)
            values["password_hash"] = hash_password(
                body.password, rounds=self._settings.bcrypt_rounds  # type: ignore[arg-type]
            )
        if requested_role is not None:
            values["role"] = requested_role

        user = await self._users.update(user_id, values)
        await self._session.commit()
        log.info("user.updated", target_user_id=user_id, fields=",".join(selected))
        return user

    async def delete(self, *, principal: Principal, user_id: int) -> None:
        can_delete_user_id(principal, user_id).raise_if_denied()
        # Re-read the target so an employee's decision sees its stored role. A role change
        # landing between this read and the delete is not guarded against.
        target = await self._users.require(user_id)
        can_delete_user(principal, target).raise_if_denied()
        await self._users.delete(user_id)
        await self._session.commit()
        log.info("user.deleted", target_user_id=user_id)
