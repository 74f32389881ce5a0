"""
fruitbar.api.routers.orders

Order endpoints.

Responsibilities:
- CRUD over `/v1/orders` for any authenticated principal; ownership is decided in the service.
- Seek-paginated listing with a `Content-Range` header.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED

from fruitbar.api.deps import RecordId, order_service, selected_fields, settings_dep
from fruitbar.auth.deps import get_principal
from fruitbar.auth.models import Principal
from fruitbar.schemas import DataResponse, OrderIn, OrderOut
from fruitbar.services.orders_service import OrderService
from fruitbar.settings import Settings

router = APIRouter(prefix="/v1/orders", tags=["orders"])


@router.post("", status_code=HTTP_201_CREATED, response_model=DataResponse[OrderOut])
async def create_order(
    body: OrderIn,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(order_service),
) -> DataResponse[OrderOut]:
    order = await svc.create(principal=principal, body=body)
    return DataResponse(data=OrderOut.from_model(order))


@router.get("", response_model=DataResponse[list[OrderOut]])
async def list_orders(
    request: Request,
    response: Response,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(order_service),
) -> DataResponse[list[OrderOut]]:
    # before_id / after_id / limit are read raw so the pager owns their error messages.
    page = await svc.list_page(principal=principal, params=request.query_params)
    response.headers["Content-Range"] = page.content_range
    return DataResponse(data=[OrderOut.from_model(o) for o in page.records])


@router.get("/limit", response_model=DataResponse[int])
async def order_page_limit(
    _: Principal = Depends(get_principal),
    settings: Settings = Depends(settings_dep),
) -> DataResponse[int]:
    return DataResponse(data=settings.orders_page_max)


@router.get("/{order_id}", response_model=DataResponse[OrderOut])
async def get_order(
    order_id: RecordId,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(order_service),
) -> DataResponse[OrderOut]:
    order = await svc.get(principal=principal, order_id=order_id)
    return DataResponse(data=OrderOut.from_model(order))


@router.put("/{order_id}", response_model=DataResponse[OrderOut])
async def update_order(
    order_id: RecordId,
    body: OrderIn,
    fields: list[str] = Depends(selected_fields),
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(order_service),
) -> DataResponse[OrderOut]:
    order = await svc.update(principal=principal, order_id=order_id, body=body, fields=fields)
    return DataResponse(data=OrderOut.from_model(order))


@router.delete("/{order_id}", response_model=DataResponse[None])
async def delete_order(
    order_id: RecordId,
    principal: Principal = Depends(get_principal),
    svc: OrderService = Depends(order_service),
) -> DataResponse[None]:
    await svc.delete(principal=principal, order_id=order_id)
    return DataResponse(data=None)
