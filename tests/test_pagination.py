from __future__ import annotations

from dataclasses import dataclass

import pytest

from fruitbar.errors import BadRequestError
from fruitbar.pagination import PageSeekOptions, SeekDirection, compute_window, render_range


@dataclass
class Row:
    id: int


def test_no_params_uses_max_limit_and_no_cursor() -> None:
    assert compute_window({}, max_limit=100) == PageSeekOptions(
        limit=100, start_id=0, direction=SeekDirection.none
    )


def test_after_and_before_cursors() -> None:
    after = compute_window({"after_id": "10", "limit": "5"}, max_limit=100)
    assert after == PageSeekOptions(limit=5, start_id=10, direction=SeekDirection.after)

    before = compute_window({"before_id": "7"}, max_limit=100)
    assert before == PageSeekOptions(limit=100, start_id=7, direction=SeekDirection.before)


def test_both_cursors_is_bad_request() -> None:
    with pytest.raises(BadRequestError) as exc:
        compute_window({"after_id": "1", "before_id": "9"}, max_limit=100)
    assert exc.value.message == "Only one of after_id and before_id query parameters can be set."


@pytest.mark.parametrize(
    ("params", "message"),
    [
        ({"limit": "0"}, "limit must be greater than 0"),
        ({"limit": "-3"}, "limit must be greater than 0"),
        ({"limit": "101"}, "limit must be less than or equal to 100"),
        ({"limit": "ten"}, "could not be converted to an integer"),
        ({"after_id": "-1"}, "must be a non-negative integer"),
        ({"before_id": "1.5"}, "could not be converted to an integer"),
        ({"after_id": "99999999999999999999"}, "must be less than or equal to 9223372036854775807"),
        ({"before_id": "9223372036854775808"}, "must be less than or equal to 9223372036854775807"),
        ({"after_id": "1" * 5000}, "could not be converted to an integer"),
    ],
)
def test_out_of_range_params(params: dict, message: str) -> None:
    with pytest.raises(BadRequestError, match=message):
        compute_window(params, max_limit=100)


def test_limit_bounds_are_inclusive() -> None:
    assert compute_window({"limit": "1"}, max_limit=100).limit == 1
    assert compute_window({"limit": "100"}, max_limit=100).limit == 100


def test_custom_parameter_names() -> None:
    seek = compute_window({"since": "4"}, max_limit=10, after_param="since")
    assert seek.direction is SeekDirection.after
    assert seek.start_id == 4


def test_render_range() -> None:
    assert render_range("orders", 0, []) == "orders=0-0/0"
    assert render_range("products", 42, [Row(3), Row(4), Row(9)]) == "products=3-9/42"
    assert render_range("users", 1, [Row(7)]) == "users=7-7/1"
