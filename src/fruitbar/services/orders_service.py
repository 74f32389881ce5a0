"""
fruitbar.services.orders_service

Order lifecycle service (transaction owner).

Responsibilities:
- Authorize every order operation through `fruitbar.policy.orders`.
- Validate bodies (full or `fields=` partial) through `ORDER_FIELDS`.
- Compute subtotal/tax/total from item quantities and current product prices.
- Persist orders and their item lines, and log each mutation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fruitbar.auth.models import Principal
from fruitbar.db.models import Item, Order
from fruitbar.db.repositories.orders import ItemRepo, OrderRepo
from fruitbar.db.repositories.products import ProductRepo
from fruitbar.errors import ValidationError
from fruitbar.observability.logging import get_logger
from fruitbar.policy.orders import (
    can_create_order,
    can_delete_order,
    can_read_order,
    can_update_order,
    filter_readable_orders,
)
from fruitbar.schemas import ItemIn, OrderIn, PaymentInfoIn
from fruitbar.services.common import Page, read_page, validating
from fruitbar.settings import Settings
from fruitbar.validation.rules import ORDER_FIELDS, check_new_order_totals

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Totals:
    subtotal: float
    tax: float
    total: float


def compute_totals(
    lines: Iterable[tuple[int, int]], prices: Mapping[int, float], tax_rate: float
) -> Totals:
    subtotal = sum(qty * prices[pid] for pid, qty in lines)
    tax = subtotal * tax_rate
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def _payment_columns(info: PaymentInfoIn) -> dict[str, Any]:
    card = info.card_info
    if info.cash:
        # Cash orders keep no card details.
        return {
            "cash": True,
            "card_number": "",
            "cardholder_name": "",
            "expiration_date": "",
            "zipcode": "",
            "cvv": "",
        }
    return {
        "cash": False,
        "card_number": "".join(card.number.split()),
        "cardholder_name": card.cardholder_name,
        "expiration_date": card.expiration_date,
        "zipcode": card.zipcode,
        "cvv": card.cvv.replace(" ", ""),
    }


def _lines(items: Iterable[ItemIn]) -> list[tuple[int, int]]:
    return [(int(i.product_id), int(i.quantity)) for i in items]  # type: ignore[arg-type]


class OrderService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._orders = OrderRepo(session)
        self._items = ItemRepo(session)
        self._products = ProductRepo(session)

    async def _prices(self, product_ids: Iterable[int]) -> dict[int, float]:
        wanted = list(dict.fromkeys(product_ids))
        prices = await self._products.prices_for(wanted)
        for pid in wanted:
            if pid not in prices:
                raise ValidationError(
                    f"Order validation failed: product ID {pid} does not exist in the repo",
                    field="items",
                )
        return prices

    async def _apply_totals(self, order: Order) -> None:
        lines = [(i.product_id, i.quantity) for i in order.items]
        totals = compute_totals(lines, await self._prices(pid for pid, _ in lines), order.tax_rate)
        order.subtotal, order.tax, order.total = totals.subtotal, totals.tax, totals.total

    async def create(self, *, principal: Principal, body: OrderIn) -> Order:
        if body.owner_id is None:
            body = body.model_copy(update={"owner_id": principal.user_id})
        if body.tax_rate is None:
            body = body.model_copy(update={"tax_rate": self._settings.default_tax_rate})

        can_create_order(principal, body).raise_if_denied()
        with validating("Order"):
            check_new_order_totals(body)
            ORDER_FIELDS.validate(body)

        lines = _lines(body.items or [])
        prices = await self._prices(pid for pid, _ in lines)
        totals = compute_totals(lines, prices, body.tax_rate or 0.0)

        order = Order(
            owner_id=body.owner_id,
            tax_rate=body.tax_rate,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            items=[Item(product_id=pid, quantity=qty) for pid, qty in lines],
            **_payment_columns(body.payment_info),  # type: ignore[arg-type]
        )
        await self._orders.create(order)
        await self._session.commit()
        log.info("order.created", order_id=order.id, owner_id=order.owner_id, total=order.total)
        return order

    async def get(self, *, principal: Principal, order_id: int) -> Order:
        order = await self._orders.require(order_id)
        can_read_order(principal, order).raise_if_denied()
        return order

    async def list_page(self, *, principal: Principal, params: Mapping[str, Any]) -> Page[Order]:
        page = await read_page(
            self._orders,
            principal,
            params,
            resource_name="orders",
            max_limit=self._settings.orders_page_max,
            readable=filter_readable_orders,
        )
        log.info("order.page_read", count=len(page.records), limit=page.seek.limit)
        return page

    async def update(
        self,
        *,
        principal: Principal,
        order_id: int,
        body: OrderIn,
        fields: list[str] | None = None,
    ) -> Order:
        """
        With `fields`, only the selected fields are validated and written (items are
        merged by product id). Without, the body replaces the order and its items.
        """

        order = await self._orders.require(order_id, for_update=True)
        can_update_order(principal, order).raise_if_denied()

        if not fields:
            body = body.model_copy(
                update={
                    "owner_id": order.owner_id if body.owner_id is None else body.owner_id,
                    "tax_rate": order.tax_rate if body.tax_rate is None else body.tax_rate,
                }
            )
        selected = fields or list(ORDER_FIELDS.field_names)

        with validating("Order"):
            ORDER_FIELDS.validate_partial(body, selected)

        # Handing an order to another owner is an update of that owner's order too.
        if "ownerid" in selected and body.owner_id != order.owner_id:
            can_update_order(principal, body).raise_if_denied()

        values: dict[str, Any] = {}
        if "ownerid" in selected:
            values["owner_id"] = body.owner_id
        if "taxrate" in selected:
            values["tax_rate"] = body.tax_rate
        if "paymentinfo" in selected:
            values.update(_payment_columns(body.payment_info))  # type: ignore[arg-type]
        if values:
            order = await self._orders.update(order_id, values)

        if "items" in selected:
            lines = _lines(body.items or [])
            await self._prices(pid for pid, _ in lines)
            if fields:
                await self._items.merge_for_order(order, lines)
            else:
                await self._items.replace_for_order(order, lines)

        await self._apply_totals(order)
        await self._session.commit()
        log.info(
            "order.updated",
            order_id=order.id,
            fields=",".join(selected),
            partial=bool(fields),
            total=order.total,
        )
        return order

    async def delete(self, *, principal: Principal, order_id: int) -> None:
        order = await self._orders.require(order_id)
        can_delete_order(principal, order).raise_if_denied()
        await self._orders.delete(order_id)
        await self._session.commit()
        log.info("order.deleted", order_id=order_id)
