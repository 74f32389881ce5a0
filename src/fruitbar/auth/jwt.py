"""
fruitbar.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Decode and validate bearer tokens with strict claim requirements (iss/aud/exp/iat/sub).
- Issue short-lived tokens for tests and local tooling (login is served elsewhere).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from fruitbar.auth.roles import Role


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    user_id: int,
    role: Role | str,
    name: str | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": str(user_id),
        "role": str(role),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    if name is not None:
        payload["name"] = name
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # jwt.decode enforces signature + registered claims (issuer/audience/exp, etc.).
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# The `role` claim is a plain string on the wire; `auth.deps` turns it into a `Role`.
