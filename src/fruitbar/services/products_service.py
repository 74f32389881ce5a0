from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fruitbar.auth.models import Principal
from fruitbar.db.models import Product
from fruitbar.db.repositories.products import ProductRepo
from fruitbar.observability.logging import get_logger
from fruitbar.policy.products import (
    can_create_product,
    can_delete_product,
    can_read_product,
    can_update_product,
    filter_readable_products,
)
from fruitbar.schemas import ProductIn
from fruitbar.services.common import Page, read_page, validating
from fruitbar.settings import Settings
from fruitbar.validation.rules import PRODUCT_FIELDS

log = get_logger(__name__)


class ProductService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._products = ProductRepo(session)

    async def create(self, *, principal: Principal, body: ProductIn) -> Product:
        can_create_product(principal, body).raise_if_denied()
        with validating("Product"):
            PRODUCT_FIELDS.validate(body)

        product = await self._products.create(
            Product(
                name=body.name,
                symbol=body.symbol,
                price=body.price,
                num_in_stock=body.num_in_stock,
            )
        )
        await self._session.commit()
        log.info("product.created", product_id=product.id, name=product.name)
        return product

    async def get(self, *, principal: Principal, product_id: int) -> Product:
        product = await self._products.require(product_id)
        can_read_product(principal, product).raise_if_denied()
        return product

    async def list_page(self, *, principal: Principal, params: Mapping[str, Any]) -> Page[Product]:
        page = await read_page(
            self._products,
            principal,
            params,
            resource_name="products",
            max_limit=self._settings.products_page_max,
            readable=filter_readable_products,
        )
        log.info("product.page_read", count=len(page.records), limit=page.seek.limit)
        return page

    async def update(
        self,
        *,
        principal: Principal,
        product_id: int,
        body: ProductIn,
        fields: list[str] | None = None,
    ) -> Product:
        product = await self._products.require(product_id, for_update=True)
        can_update_product(principal, product).raise_if_denied()

        with validating("Product"):
            if fields:
                PRODUCT_FIELDS.validate_partial(body, fields)
            else:
                PRODUCT_FIELDS.validate(body)

        attrs = PRODUCT_FIELDS.attrs(fields or PRODUCT_FIELDS.field_names)
        product = await self._products.update(
            product_id, {attr: getattr(body, attr) for attr in attrs}
        )
        await self._session.commit()
        log.info("product.updated", product_id=product_id, fields=",".join(attrs))
        return product

    async def delete(self, *, principal: Principal, product_id: int) -> None:
        product = await self._products.require(product_id)
        can_delete_product(principal, product).raise_if_denied()
        await self._products.delete(product_id)
        await self._session.commit()
        log.info("product.deleted", product_id=product_id)
