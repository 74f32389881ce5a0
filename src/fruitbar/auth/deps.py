"""
fruitbar.auth.deps

FastAPI dependency functions for authentication and route-level role gates.

Responsibilities:
- Convert a bearer token into a typed `Principal` (claims provider).
- Reject malformed role/subject claims before any policy decision is made.
- Enforce a minimum role via a reusable dependency factory.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fruitbar.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from fruitbar.auth.models import Principal
from fruitbar.auth.roles import Role, is_valid_role, valid_roles_msg
from fruitbar.errors import BadRequestError, ForbiddenError, UnauthorizedError
from fruitbar.observability.logging import bind_principal, get_logger
from fruitbar.pagination import MAX_RECORD_ID
from fruitbar.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    subject = str(payload.get("sub", ""))
    if (
        not (subject.isascii() and subject.isdigit())
        or len(subject) > len(str(MAX_RECORD_ID))
        or not 0 < int(subject) <= MAX_RECORD_ID
    ):
        raise UnauthorizedError("Invalid token subject")

    role = payload.get("role")
    if not is_valid_role(role):
        # Unknown roles never reach the policy tables.
        log.info(
            "auth.invalid_role",
            role=role,
            expected=valid_roles_msg(),
        )
        raise BadRequestError(
            f"role is invalid, expected one of: {valid_roles_msg()} got {role}"
        )

    principal = Principal(user_id=int(subject), role=Role(role))
    bind_principal(user_id=principal.user_id, role=principal.role.value)
    return principal


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Principal:
    if creds is None or not creds.credentials:
        raise UnauthorizedError("Missing bearer token")

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise UnauthorizedError(f"Invalid token: {e}") from e

    return principal_from_claims(payload)


def require_role(required: Role):
    async def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.has_role(required):
            raise ForbiddenError(f"Forbidden: requires the '{required}' role or higher.")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# `get_settings` is overridden in `api.app.create_app` so the app's own Settings
# instance is used for token validation.
