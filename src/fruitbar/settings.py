"""
fruitbar.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, persistence and policy layers.
- Hide secrets from repr/logging (JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FRUITBAR_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "fruitbar"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "fruitbar"
    jwt_audience: str = "fruitbar-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./fruitbar.db"

    # Listing windows: the largest page a caller may request per resource.
    orders_page_max: int = Field(default=1000, ge=1)
    products_page_max: int = Field(default=1000, ge=1)
    users_page_max: int = Field(default=1000, ge=1)

    # Orders
    default_tax_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    # Users
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(env="test", ...)` directly and pass it to `create_app`.
