"""
fruitbar.services.common

Helpers shared by the resource services.

Responsibilities:
- Prefix field-rule failures with the resource name ("Order validation failed: ...").
- Run the listing flow: seek window -> fetch -> read filter -> count -> range string.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fruitbar.auth.models import Principal
from fruitbar.db.repositories.base import SeekableRepo
from fruitbar.errors import ValidationError
from fruitbar.pagination import PageSeekOptions, compute_window, render_range

T = TypeVar("T")

VALIDATION_FAILED_SUFFIX = " validation failed: "


@contextmanager
def validating(resource: str) -> Iterator[None]:
    try:
        yield
    except ValidationError as e:
        raise ValidationError(f"{resource}{VALIDATION_FAILED_SUFFIX}{e.message}", field=e.field) from e


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    records: list[T]
    seek: PageSeekOptions
    total: int
    content_range: str


async def read_page(
    repo: SeekableRepo[Any],
    principal: Principal,
    params: Mapping[str, Any],
    *,
    resource_name: str,
    max_limit: int,
    readable: Callable[[Principal, Sequence[T]], list[T]],
) -> Page[T]:
    seek = compute_window(params, max_limit=max_limit)
    fetched = await repo.fetch(seek)
    records = readable(principal, fetched)
    # Counted separately from the fetch; see `fruitbar.pagination` on staleness.
    total = await repo.count(seek)
    return Page(
        records=records,
        seek=seek,
        total=total,
        content_range=render_range(resource_name, total, records),
    )
