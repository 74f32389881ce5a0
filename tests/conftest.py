"""
tests.conftest

Shared fixtures: an in-memory app, an ASGI client and bearer-token helpers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio

from fruitbar.api.app import create_app
from fruitbar.auth.deps import jwt_config
from fruitbar.auth.jwt import issue_token
from fruitbar.auth.roles import Role
from fruitbar.settings import Settings

AuthHeaders = Callable[[int, Role | str], dict[str, str]]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-secret-0123456789-abcdefghijklmnop",
        bcrypt_rounds=4,
        orders_page_max=50,
        products_page_max=50,
        users_page_max=50,
    )


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)
    # ASGITransport does not run lifespan events; drive them here.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
def auth(settings: Settings) -> AuthHeaders:
    def _headers(user_id: int, role: Role | str) -> dict[str, str]:
        token = issue_token(cfg=jwt_config(settings), user_id=user_id, role=role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
