"""
fruitbar.errors

Error taxonomy shared by the policy core, services and API layer.

Responsibilities:
- Name each failure category once (bad request, unauthorized, forbidden, not found,
  internal) together with the HTTP status the API renders it with.
- Keep the core free of FastAPI imports; the API maps these to responses.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

INTERNAL_SERVER_ERROR_MSG = "Internal server error. Please contact your system administrator."


class FruitbarError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(FruitbarError):
    status_code = HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    """
    A candidate record failed a field rule.

    `field` names the rule that failed so callers can prefix or group messages.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnauthorizedError(FruitbarError):
    status_code = HTTP_401_UNAUTHORIZED


class ForbiddenError(FruitbarError):
    status_code = HTTP_403_FORBIDDEN


class NotFoundError(FruitbarError):
    status_code = HTTP_404_NOT_FOUND


class InternalError(FruitbarError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_SERVER_ERROR_MSG) -> None:
        super().__init__(message)


# --- Module Notes -----------------------------------------------------------
# `fruitbar.api.errors` installs the single exception handler that renders these.
