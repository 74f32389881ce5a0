from __future__ import annotations

import pytest

from fruitbar.auth.roles import Role, is_valid_role, satisfies, valid_roles_msg


@pytest.mark.parametrize(
    ("have", "need", "expected"),
    [
        (Role.admin, Role.admin, True),
        (Role.admin, Role.employee, True),
        (Role.admin, Role.customer, True),
        (Role.employee, Role.admin, False),
        (Role.employee, Role.employee, True),
        (Role.employee, Role.customer, True),
        (Role.customer, Role.admin, False),
        (Role.customer, Role.employee, False),
        (Role.customer, Role.customer, True),
    ],
)
def test_satisfies_follows_privilege_order(have: Role, need: Role, expected: bool) -> None:
    assert satisfies(have, need) is expected


def test_is_valid_role() -> None:
    assert is_valid_role("customer")
    assert is_valid_role(Role.admin)
    assert not is_valid_role("superuser")
    assert not is_valid_role("Admin")
    assert not is_valid_role("")
    assert not is_valid_role(None)


def test_valid_roles_msg_lists_roles_in_order() -> None:
    assert valid_roles_msg() == "customer, employee, admin"
