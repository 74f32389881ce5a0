"""
fruitbar.api.app

FastAPI app factory for the fruitbar ordering service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose the DB engine/session factory.
- Pin the app's `Settings` so every dependency sees the same configuration.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fruitbar import __version__
from fruitbar.api.errors import install_exception_handlers
from fruitbar.api.routers.health import router as health_router
from fruitbar.api.routers.orders import router as orders_router
from fruitbar.api.routers.products import router as products_router
from fruitbar.api.routers.users import router as users_router
from fruitbar.db.init_db import init_db
from fruitbar.db.session import create_engine, create_sessionmaker
from fruitbar.observability.logging import configure_logging, get_logger
from fruitbar.observability.middleware import RequestContextMiddleware
from fruitbar.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas come from Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Fruitbar Ordering Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=_lifespan,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(orders_router)
    app.include_router(products_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# `settings_dep` (fruitbar.api.deps) and `get_principal` (fruitbar.auth.deps) both resolve
# through `get_settings`, so the override above reaches routers and auth alike.
