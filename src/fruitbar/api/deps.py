"""
fruitbar.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and services.
- Parse the `fields=` partial-update selector.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fruitbar.pagination import MAX_RECORD_ID
from fruitbar.services.orders_service import OrderService
from fruitbar.services.products_service import ProductService
from fruitbar.services.users_service import UserService
from fruitbar.settings import Settings, get_settings
from fruitbar.validation.registry import parse_fields_param


# Path ids beyond what storage can hold are rejected as bad requests.
RecordId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]


def settings_dep(settings: Settings = Depends(get_settings)) -> Settings:
    return settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `fruitbar.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Services commit explicitly; anything uncommitted rolls back.
    async with session_factory() as session:
        yield session


def selected_fields(
    fields: str | None = Query(
        default=None, description="Comma-separated field names; selects a partial update."
    ),
) -> list[str]:
    return parse_fields_param(fields)


def order_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> OrderService:
    return OrderService(session=session, settings=settings)


def product_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> ProductService:
    return ProductService(session=session, settings=settings)


def user_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> UserService:
    return UserService(session=session, settings=settings)
