"""
fruitbar.observability.logging

Structured logging for the service (structlog over stdlib logging).

Responsibilities:
- Configure `structlog`: JSON lines in test/prod, console rendering in dev.
- Stamp every event with the service name and, once authenticated, the caller identity.
- Keep passwords and card secrets out of log output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import Any

import structlog

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"password", "password_hash", "card_number", "cvv", "token"})


def redact_sensitive(keys: Iterable[str] = SENSITIVE_KEYS):
    banned = frozenset(keys)

    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key in banned.intersection(event_dict):
            event_dict[key] = REDACTED
        return event_dict

    return processor


def _stamp_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def configure_logging(*, service_name: str, level: str, json_logs: bool = True) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _stamp_service(service_name),
            redact_sensitive(),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_principal(*, user_id: int, role: str) -> None:
    structlog.contextvars.bind_contextvars(user_id=user_id, role=role)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
