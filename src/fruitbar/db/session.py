"""
fruitbar.db.session

Async SQLAlchemy engine + session factory helpers.

Responsibilities:
- Create the async engine from settings (in-memory SQLite shares one connection).
- Create the async sessionmaker with safe defaults.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from fruitbar.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if settings.database_url.startswith("sqlite") and ":memory:" in settings.database_url:
        # Each new connection to ":memory:" is a fresh database; pin a single one.
        kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return create_async_engine(settings.database_url, **kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False avoids surprising lazy loads after commits.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


# --- Module Notes -----------------------------------------------------------
# The API layer scopes sessions per request via `api.deps.db_session`.
