"""
fruitbar.api.errors

Exception handlers for the API layer.

Responsibilities:
- Render `FruitbarError` subclasses as `{"error": {"code", "message"}}` with their status.
- Map malformed bodies to 400 and storage failures to a generic 500.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.status import HTTP_400_BAD_REQUEST

from fruitbar.errors import FruitbarError, InternalError
from fruitbar.observability.logging import get_logger

log = get_logger(__name__)


def error_body(code: int, message: str) -> dict[str, Any]:
    return {"error": {"code": code, "message": message}}


async def _fruitbar_error(_: Request, exc: FruitbarError) -> JSONResponse:
    log.info("request.rejected", status_code=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))


async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"invalid request: {where}: {first.get('msg', 'malformed value')}"
    else:
        message = "invalid request"
    log.info("request.malformed", error=message)
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST, content=error_body(HTTP_400_BAD_REQUEST, message)
    )


async def _storage_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Details go to the log only; clients get the generic message.
    log.error("storage.error", error=str(exc), exc_info=exc)
    internal = InternalError()
    return JSONResponse(
        status_code=internal.status_code,
        content=error_body(internal.status_code, internal.message),
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FruitbarError, _fruitbar_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _storage_error)  # type: ignore[arg-type]
