"""
tests.test_validation

Field rules and the full/partial validation registry.
"""

from __future__ import annotations

import pytest

from fruitbar.errors import ValidationError
from fruitbar.schemas import CardInfoIn, ItemIn, OrderIn, PaymentInfoIn, ProductIn, UserIn
from fruitbar.validation import parse_fields_param
from fruitbar.validation.rules import (
    ORDER_FIELDS,
    PRODUCT_FIELDS,
    USER_FIELDS,
    check_new_order_totals,
    password_format_message,
)


def _product(**overrides) -> ProductIn:
    base = {"name": "Apple", "symbol": "A", "price": 1.25, "num_in_stock": 10}
    base.update(overrides)
    return ProductIn(**base)


def _card(**overrides) -> CardInfoIn:
    base = {
        "number": "4111 1111 1111 1111",
        "cardholder_name": "Pat Doe",
        "expiration_date": "12/29",
        "zipcode": "12345",
        "cvv": "123",
    }
    base.update(overrides)
    return CardInfoIn(**base)


def _order(**overrides) -> OrderIn:
    base = {
        "owner_id": 5,
        "payment_info": PaymentInfoIn(cash=True),
        "tax_rate": 0.1,
        "items": [ItemIn(product_id=1, quantity=2)],
    }
    base.update(overrides)
    return OrderIn(**base)


def test_partial_checks_only_selected_fields() -> None:
    bad_price = _product(price=-1)
    with pytest.raises(ValidationError) as exc:
        PRODUCT_FIELDS.validate_partial(bad_price, ["price"])
    assert exc.value.message == "price must be greater than zero, got -1.00"
    PRODUCT_FIELDS.validate_partial(bad_price, ["name"])


def test_partial_and_full_agree_on_a_valid_record() -> None:
    product = _product()
    PRODUCT_FIELDS.validate(product)
    PRODUCT_FIELDS.validate_partial(product, PRODUCT_FIELDS.field_names)


def test_empty_selection_succeeds() -> None:
    PRODUCT_FIELDS.validate_partial(_product(price=-1, name=""), [])


def test_unknown_field_name_fails() -> None:
    with pytest.raises(ValidationError, match="field name is invalid: colour"):
        PRODUCT_FIELDS.validate_partial(_product(), ["name", "colour"])


def test_full_validation_reports_first_failing_field() -> None:
    with pytest.raises(ValidationError) as exc:
        PRODUCT_FIELDS.validate(_product(name="", price=-1))
    assert exc.value.field == "name"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"symbol": "AB"}, "symbol"),
        ({"symbol": ""}, "symbol"),
        ({"price": 0}, "price"),
        ({"price": None}, "price"),
        ({"num_in_stock": -1}, "numInStock"),
    ],
)
def test_product_rules(overrides: dict, field: str) -> None:
    with pytest.raises(ValidationError) as exc:
        PRODUCT_FIELDS.validate(_product(**overrides))
    assert exc.value.field == field


def test_cash_order_skips_card_checks() -> None:
    ORDER_FIELDS.validate(_order(payment_info=PaymentInfoIn(cash=True, card_info=CardInfoIn())))


def test_card_order_collects_every_card_error() -> None:
    bad = PaymentInfoIn(cash=False, card_info=_card(number="1234", zipcode="1234", cvv="12"))
    with pytest.raises(ValidationError) as exc:
        ORDER_FIELDS.validate_partial(_order(payment_info=bad), ["paymentinfo"])
    message = exc.value.message
    assert "card number is invalid" in message
    assert "zipcode is invalid" in message
    assert "the CVV is invalid" in message
    assert "expiration date" not in message


def test_card_order_accepts_spaced_number_and_zip_plus_four() -> None:
    good = PaymentInfoIn(cash=False, card_info=_card(zipcode="12345-6789"))
    ORDER_FIELDS.validate(_order(payment_info=good))


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"owner_id": 0}, "ownerid"),
        ({"tax_rate": 1.5}, "taxrate"),
        ({"tax_rate": -0.1}, "taxrate"),
        ({"payment_info": None}, "paymentinfo"),
        ({"items": [ItemIn(product_id=1, quantity=0)]}, "quantity"),
        ({"items": [ItemIn(product_id=0, quantity=1)]}, "productid"),
        (
            {"items": [ItemIn(product_id=1, quantity=1), ItemIn(product_id=1, quantity=3)]},
            "items",
        ),
    ],
)
def test_order_rules(overrides: dict, field: str) -> None:
    with pytest.raises(ValidationError) as exc:
        ORDER_FIELDS.validate(_order(**overrides))
    assert exc.value.field == field


def test_new_order_must_not_carry_totals() -> None:
    check_new_order_totals(_order())
    with pytest.raises(ValidationError, match="subtotal must be empty, total must be empty"):
        check_new_order_totals(_order(subtotal=3.0, total=3.3))


def test_user_rules() -> None:
    USER_FIELDS.validate(UserIn(name="pat", password="fruit1234", role="customer"))
    with pytest.raises(ValidationError) as exc:
        USER_FIELDS.validate_partial(UserIn(password="short1"), ["password"])
    assert exc.value.message == password_format_message()
    with pytest.raises(ValidationError, match="role is invalid"):
        USER_FIELDS.validate_partial(UserIn(role="owner"), ["role"])
    with pytest.raises(ValidationError):
        USER_FIELDS.validate_partial(UserIn(password="onlyletters"), ["password"])
    with pytest.raises(ValidationError):
        USER_FIELDS.validate_partial(UserIn(name="x" * 65), ["name"])


def test_parse_fields_param() -> None:
    assert parse_fields_param(None) == []
    assert parse_fields_param("") == []
    assert parse_fields_param("price, name,,price") == ["price", "name"]


@pytest.mark.parametrize(
    ("registry", "record", "field"),
    [
        (PRODUCT_FIELDS, _product(price=-1), "price"),
        (PRODUCT_FIELDS, _product(name=""), "name"),
        (ORDER_FIELDS, _order(tax_rate=2.0), "taxrate"),
        (ORDER_FIELDS, _order(owner_id=2**63), "ownerid"),
        (ORDER_FIELDS, _order(items=[ItemIn(product_id=2**63, quantity=1)]), "productid"),
        (USER_FIELDS, UserIn(name="pat", password="short1", role="customer"), "password"),
        (USER_FIELDS, UserIn(name="pat", password="fruit1234", role="owner"), "role"),
    ],
)
def test_partial_and_full_agree_on_an_invalid_record(registry, record, field: str) -> None:
    with pytest.raises(ValidationError) as full:
        registry.validate(record)
    with pytest.raises(ValidationError) as partial:
        registry.validate_partial(record, registry.field_names)
    assert full.value.field == partial.value.field == field
    assert full.value.message == partial.value.message
