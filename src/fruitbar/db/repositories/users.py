"""
fruitbar.db.repositories.users

Repository for `User` entities.
"""

from __future__ import annotations

from sqlalchemy import select

from fruitbar.db.models import User
from fruitbar.db.repositories.base import SeekableRepo


class UserRepo(SeekableRepo[User]):
    model = User
    not_found_msg = "The specified user could not be found."

    async def get_by_name(self, name: str) -> User | None:
        stmt = select(User).where(User.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def name_taken(self, name: str, *, exclude_id: int | None = None) -> bool:
        existing = await self.get_by_name(name)
        return existing is not None and existing.id != exclude_id
