"""
fruitbar.db.repositories.orders

Repositories for `Order` entities and their `Item` lines.

Responsibilities:
- Seekable order listing/counting (items are eager-loaded with each order).
- Replace or merge the item lines of an order.
"""

from __future__ import annotations

from collections.abc import Iterable

from fruitbar.db.models import Item, Order
from fruitbar.db.repositories.base import SeekableRepo


class OrderRepo(SeekableRepo[Order]):
    model = Order
    not_found_msg = "The specified order could not be found."


class ItemRepo(SeekableRepo[Item]):
    model = Item
    not_found_msg = "The specified item could not be found."

    async def replace_for_order(self, order: Order, lines: Iterable[tuple[int, int]]) -> None:
        """Full update: drop every existing line, then insert `(product_id, quantity)` lines."""

        order.items.clear()
        await self._session.flush()
        order.items.extend(Item(product_id=pid, quantity=qty) for pid, qty in lines)
        await self._session.flush()

    async def merge_for_order(self, order: Order, lines: Iterable[tuple[int, int]]) -> None:
        """
        Partial update: lines whose product already has an item update its quantity;
        the rest are inserted. Existing lines not mentioned are kept.
        """

        by_product = {item.product_id: item for item in order.items}
        for pid, qty in lines:
            existing = by_product.get(pid)
            if existing is not None:
                existing.quantity = qty
            else:
                order.items.append(Item(product_id=pid, quantity=qty))
        await self._session.flush()
