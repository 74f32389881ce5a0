"""
fruitbar.db.repositories.base

Shared seekable repository.

Responsibilities:
- Translate `PageSeekOptions` into id-bounded queries for `count` and `fetch`.
- Provide the Create/Read/Update/Delete/Exists operations every resource shares.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fruitbar.db.base import Base
from fruitbar.errors import NotFoundError
from fruitbar.pagination import PageSeekOptions, SeekDirection

ModelT = TypeVar("ModelT", bound=Base)


class SeekableRepo(Generic[ModelT]):
    model: ClassVar[type[Any]]
    not_found_msg: ClassVar[str] = "The specified record could not be found."

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _bounded(self, stmt: Select[Any], seek: PageSeekOptions) -> Select[Any]:
        if seek.direction is SeekDirection.after:
            return stmt.where(self.model.id > seek.start_id)
        if seek.direction is SeekDirection.before:
            return stmt.where(self.model.id < seek.start_id)
        return stmt

    async def count(self, seek: PageSeekOptions) -> int:
        # Same bound as `fetch`, without the limit.
        stmt = self._bounded(select(func.count()).select_from(self.model), seek)
        return int((await self._session.execute(stmt)).scalar_one())

    async def fetch(self, seek: PageSeekOptions) -> list[ModelT]:
        stmt = self._bounded(select(self.model), seek)
        if seek.direction is SeekDirection.before:
            # Nearest records below the cursor, returned in ascending id order.
            stmt = stmt.order_by(self.model.id.desc()).limit(seek.limit)
            rows = list((await self._session.execute(stmt)).scalars().all())
            rows.reverse()
            return rows
        stmt = stmt.order_by(self.model.id).limit(seek.limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, obj_id: int, *, for_update: bool = False) -> ModelT | None:
        return await self._session.get(self.model, obj_id, with_for_update=for_update)

    async def require(self, obj_id: int, *, for_update: bool = False) -> ModelT:
        obj = await self.get(obj_id, for_update=for_update)
        if obj is None:
            raise NotFoundError(self.not_found_msg)
        return obj

    async def exists(self, obj_id: int) -> bool:
        stmt = select(func.count()).select_from(self.model).where(self.model.id == obj_id)
        return int((await self._session.execute(stmt)).scalar_one()) > 0

    async def create(self, obj: ModelT) -> ModelT:
        self._session.add(obj)
        await self._session.flush()
        return obj

    async def update(
        self,
        obj_id: int,
        values: Mapping[str, Any],
        fields: Sequence[str] | None = None,
    ) -> ModelT:
        """
        Apply `values` to the stored record. With `fields`, only those attributes are
        written (partial update); without, every key of `values` is (full update).
        """

        obj = await self.require(obj_id, for_update=True)
        attrs = fields if fields else list(values)
        for attr in attrs:
            setattr(obj, attr, values[attr])
        await self._session.flush()
        return obj

    async def delete(self, obj_id: int) -> bool:
        # Session delete so ORM cascades (order items) run on every backend.
        obj = await self.get(obj_id)
        if obj is None:
            return False
        await self._session.delete(obj)
        await self._session.flush()
        return True


# --- Module Notes -----------------------------------------------------------
# Deletes are hard deletes; soft-delete columns are not modelled.
