from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select

from fruitbar.db.models import Product
from fruitbar.db.repositories.base import SeekableRepo


class ProductRepo(SeekableRepo[Product]):
    model = Product
    not_found_msg = "The specified product could not be found."

    async def prices_for(self, ids: Iterable[int]) -> dict[int, float]:
        # One round trip for every product referenced by an order.
        wanted = set(ids)
        if not wanted:
            return {}
        stmt = select(Product.id, Product.price).where(Product.id.in_(wanted))
        return {pid: price for pid, price in (await self._session.execute(stmt)).all()}
