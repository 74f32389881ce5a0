"""
fruitbar.api.routers.users

User account endpoints.

Responsibilities:
- Anonymous self-registration (`POST /v1/users/register`, customer role only).
- Authenticated account CRUD, decided by the user policy in the service.
- Publish the password policy text for clients.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED

from fruitbar.api.deps import RecordId, selected_fields, settings_dep, user_service
from fruitbar.auth.deps import get_principal
from fruitbar.auth.models import Principal
from fruitbar.schemas import DataResponse, UserIn, UserOut
from fruitbar.services.users_service import UserService
from fruitbar.settings import Settings
from fruitbar.validation.rules import password_format_message

router = APIRouter(prefix="/v1/users", tags=["users"])


@router.post("", status_code=HTTP_201_CREATED, response_model=DataResponse[UserOut])
async def create_user(
    body: UserIn,
    principal: Principal = Depends(get_principal),
    svc: UserService = Depends(user_service),
) -> DataResponse[UserOut]:
    user = await svc.create(principal=principal, body=body)
    return DataResponse(data=UserOut.from_model(user))


@router.post("/register", status_code=HTTP_201_CREATED, response_model=DataResponse[UserOut])
async def register_user(
    body: UserIn,
    svc: UserService = Depends(user_service),
) -> DataResponse[UserOut]:
    user = await svc.create(principal=None, body=body)
    return DataResponse(data=UserOut.from_model(user))


@router.get("/password-format", response_model=DataResponse[str])
async def password_format() -> DataResponse[str]:
    return DataResponse(data=password_format_message())


@router.get("", response_model=DataResponse[list[UserOut]])
async def list_users(
    request: Request,
    response: Response,
    principal: Principal = Depends(get_principal),
    svc: UserService = Depends(user_service),
) -> DataResponse[list[UserOut]]:
    page = await svc.list_page(principal=principal, params=request.query_params)
    response.headers["Content-Range"] = page.content_range
    return DataResponse(data=[UserOut.from_model(u) for u in page.records])


@router.get("/limit", response_model=DataResponse[int])
async def user_page_limit(
    _: Principal = Depends(get_principal),
    settings: Settings = Depends(settings_dep),
) -> DataResponse[int]:
    return DataResponse(data=settings.users_page_max)


@router.get("/{user_id}", response_model=DataResponse[UserOut])
async def get_user(
    user_id: RecordId,
    principal: Principal = Depends(get_principal),
    svc: UserService = Depends(user_service),
) -> DataResponse[UserOut]:
    user = await svc.get(principal=principal, user_id=user_id)
    return DataResponse(data=UserOut.from_model(user))


@router.put("/{user_id}", response_model=DataResponse[UserOut])
async def update_user(
    user_id: RecordId,
    body: UserIn,
    fields: list[str] = Depends(selected_fields),
    principal: Principal = Depends(get_principal),
    svc: UserService = Depends(user_service),
) -> DataResponse[UserOut]:
    user = await svc.update(principal=principal, user_id=user_id, body=body, fields=fields)
    return DataResponse(data=UserOut.from_model(user))


@router.delete("/{user_id}", response_model=DataResponse[None])
async def delete_user(
    user_id: RecordId,
    principal: Principal = Depends(get_principal),
    svc: UserService = Depends(user_service),
) -> DataResponse[None]:
    await svc.delete(principal=principal, user_id=user_id)
    return DataResponse(data=None)
