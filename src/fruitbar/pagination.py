"""
fruitbar.pagination

Seek-based pagination.

Responsibilities:
- Turn `before_id` / `after_id` / `limit` query parameters into a `PageSeekOptions`
  window, rejecting contradictory or out-of-range input.
- Describe a fetched page as `"<resource>=<firstID>-<lastID>/<total>"` for the
  `Content-Range` header.

Note:
- The total comes from a separate `count(seek)` call under the same window. Writes that
  land between the count and the fetch make the total stale; the cursors, not the total,
  drive iteration, so the header is informational only.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fruitbar.errors import BadRequestError

BEFORE_ID_PARAM = "before_id"
AFTER_ID_PARAM = "after_id"
LIMIT_PARAM = "limit"

# Largest id storage can hold (signed 64-bit INTEGER).
MAX_RECORD_ID = 2**63 - 1


class SeekDirection(enum.StrEnum):
    before = "before"
    after = "after"
    none = "none"


@dataclass(frozen=True, slots=True)
class PageSeekOptions:
    limit: int
    start_id: int = 0
    direction: SeekDirection = SeekDirection.none


def _parse_int(params: Mapping[str, Any], name: str) -> int:
    raw = str(params[name]).strip()
    digits = raw[1:] if raw.startswith("-") else raw
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise BadRequestError(f"query parameter '{name}' could not be converted to an integer: {raw}")
    try:
        return int(raw)
    except ValueError:
        # past the interpreter's int-conversion digit limit
        raise BadRequestError(
            f"query parameter '{name}' could not be converted to an integer: {raw[:32]}..."
        ) from None


def _parse_cursor(params: Mapping[str, Any], name: str) -> int:
    value = _parse_int(params, name)
    if value < 0:
        raise BadRequestError(f"query parameter '{name}' must be a non-negative integer: {value}")
    if value > MAX_RECORD_ID:
        raise BadRequestError(
            f"query parameter '{name}' must be less than or equal to {MAX_RECORD_ID}: {value}"
        )
    return value


def compute_window(
    params: Mapping[str, Any],
    *,
    max_limit: int,
    before_param: str = BEFORE_ID_PARAM,
    after_param: str = AFTER_ID_PARAM,
    limit_param: str = LIMIT_PARAM,
) -> PageSeekOptions:
    after_is_set = after_param in params
    before_is_set = before_param in params

    if after_is_set and before_is_set:
        raise BadRequestError(
            f"Only one of {after_param} and {before_param} query parameters can be set."
        )

    if after_is_set:
        start_id, direction = _parse_cursor(params, after_param), SeekDirection.after
    elif before_is_set:
        start_id, direction = _parse_cursor(params, before_param), SeekDirection.before
    else:
        start_id, direction = 0, SeekDirection.none

    limit = max_limit
    if limit_param in params:
        limit = _parse_int(params, limit_param)
        if limit > max_limit:
            raise BadRequestError(f"{limit_param} must be less than or equal to {max_limit}")
        if limit < 1:
            raise BadRequestError(f"{limit_param} must be greater than 0")

    return PageSeekOptions(limit=limit, start_id=start_id, direction=direction)


def render_range(resource_name: str, total_count: int, window: Sequence[Any]) -> str:
    first_id, last_id = 0, 0
    if window:
        first_id, last_id = window[0].id, window[-1].id
    return f"{resource_name}={first_id}-{last_id}/{total_count}"


# --- Module Notes -----------------------------------------------------------
# Repositories translate `PageSeekOptions` into `id > start` / `id < start` bounds
# (see `db.repositories.base`).
