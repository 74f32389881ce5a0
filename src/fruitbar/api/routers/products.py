"""
fruitbar.api.routers.products

Product catalogue endpoints.

Responsibilities:
- Reads for any authenticated principal.
- Mutations gated to admins at the route, then decided again by the product policy.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED

from fruitbar.api.deps import RecordId, product_service, selected_fields, settings_dep
from fruitbar.auth.deps import get_principal, require_role
from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role
from fruitbar.schemas import DataResponse, ProductIn, ProductOut
from fruitbar.services.products_service import ProductService
from fruitbar.settings import Settings

router = APIRouter(prefix="/v1/products", tags=["products"])

_admin = require_role(Role.admin)


@router.post("", status_code=HTTP_201_CREATED, response_model=DataResponse[ProductOut])
async def create_product(
    body: ProductIn,
    principal: Principal = Depends(_admin),
    svc: ProductService = Depends(product_service),
) -> DataResponse[ProductOut]:
    product = await svc.create(principal=principal, body=body)
    return DataResponse(data=ProductOut.from_model(product))


@router.get("", response_model=DataResponse[list[ProductOut]])
async def list_products(
    request: Request,
    response: Response,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> DataResponse[list[ProductOut]]:
    page = await svc.list_page(principal=principal, params=request.query_params)
    response.headers["Content-Range"] = page.content_range
    return DataResponse(data=[ProductOut.from_model(p) for p in page.records])


@router.get("/limit", response_model=DataResponse[int])
async def product_page_limit(
    _: Principal = Depends(get_principal),
    settings: Settings = Depends(settings_dep),
) -> DataResponse[int]:
    return DataResponse(data=settings.products_page_max)


@router.get("/{product_id}", response_model=DataResponse[ProductOut])
async def get_product(
    product_id: RecordId,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> DataResponse[ProductOut]:
    product = await svc.get(principal=principal, product_id=product_id)
    return DataResponse(data=ProductOut.from_model(product))


@router.put("/{product_id}", response_model=DataResponse[ProductOut])
async def update_product(
    product_id: RecordId,
    body: ProductIn,
    fields: list[str] = Depends(selected_fields),
    principal: Principal = Depends(_admin),
    svc: ProductService = Depends(product_service),
) -> DataResponse[ProductOut]:
    product = await svc.update(
        principal=principal, product_id=product_id, body=body, fields=fields
    )
    return DataResponse(data=ProductOut.from_model(product))


@router.delete("/{product_id}", response_model=DataResponse[None])
async def delete_product(
    product_id: RecordId,
    principal: Principal = Depends(_admin),
    svc: ProductService = Depends(product_service),
) -> DataResponse[None]:
    await svc.delete(principal=principal, product_id=product_id)
    return DataResponse(data=None)
