"""
fruitbar.schemas

Request/response models (Pydantic).

Responsibilities:
- Accept resource bodies using the public JSON field names (`ownerid`, `numInStock`, ...)
  while exposing snake_case attributes to services and validators.
- Render ORM rows into response models; password hashes and card secrets never leave.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from fruitbar.db.models import Item, Order, Product, User

T = TypeVar("T")


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DataResponse(BaseModel, Generic[T]):
    data: T


# --- Requests ----------------------------------------------------------------


class CardInfoIn(_Wire):
    number: str = ""
    cardholder_name: str = Field(default="", alias="cardholdername")
    expiration_date: str = Field(default="", alias="expirationdate")
    zipcode: str = ""
    cvv: str = ""


class PaymentInfoIn(_Wire):
    cash: bool = False
    card_info: CardInfoIn = Field(default_factory=CardInfoIn, alias="cardinfo")


class ItemIn(_Wire):
    product_id: int | None = Field(default=None, alias="productid")
    quantity: int | None = None


class OrderIn(_Wire):
    owner_id: int | None = Field(default=None, alias="ownerid")
    payment_info: PaymentInfoIn | None = Field(default=None, alias="paymentinfo")
    tax_rate: float | None = Field(default=None, alias="taxrate")
    items: list[ItemIn] | None = None
    # Accepted only so that a client-supplied total can be rejected on create.
    subtotal: float | None = None
    tax: float | None = None
    total: float | None = None


class ProductIn(_Wire):
    name: str | None = None
    symbol: str | None = None
    price: float | None = None
    num_in_stock: int | None = Field(default=None, alias="numInStock")


class UserIn(_Wire):
    name: str | None = None
    password: str | None = None
    role: str | None = None


# --- Responses ---------------------------------------------------------------


class ItemOut(_Wire):
    id: int
    order_id: int = Field(alias="orderid")
    product_id: int = Field(alias="productid")
    quantity: int

    @classmethod
    def from_model(cls, item: Item) -> ItemOut:
        return cls(id=item.id, order_id=item.order_id, product_id=item.product_id, quantity=item.quantity)


class CardInfoOut(_Wire):
    number: str = ""
    cardholder_name: str = Field(default="", alias="cardholdername")
    expiration_date: str = Field(default="", alias="expirationdate")
    zipcode: str = ""


class PaymentInfoOut(_Wire):
    cash: bool
    card_info: CardInfoOut = Field(alias="cardinfo")


def mask_card_number(number: str) -> str:
    digits = "".join(c for c in number if c.isdigit())
    if not digits:
        return ""
    return "*" * (len(digits) - 4) + digits[-4:]


class OrderOut(_Wire):
    id: int
    owner_id: int = Field(alias="ownerid")
    items: list[ItemOut]
    payment_info: PaymentInfoOut = Field(alias="paymentinfo")
    tax_rate: float = Field(alias="taxrate")
    subtotal: float
    tax: float
    total: float

    @classmethod
    def from_model(cls, order: Order) -> OrderOut:
        return cls(
            id=order.id,
            owner_id=order.owner_id,
            items=[ItemOut.from_model(i) for i in order.items],
            payment_info=PaymentInfoOut(
                cash=order.cash,
                card_info=CardInfoOut(
                    number=mask_card_number(order.card_number),
                    cardholder_name=order.cardholder_name,
                    expiration_date=order.expiration_date,
                    zipcode=order.zipcode,
                ),
            ),
            tax_rate=order.tax_rate,
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
        )


class ProductOut(_Wire):
    id: int
    name: str
    symbol: str
    price: float
    num_in_stock: int = Field(alias="numInStock")

    @classmethod
    def from_model(cls, product: Product) -> ProductOut:
        return cls(
            id=product.id,
            name=product.name,
            symbol=product.symbol,
            price=product.price,
            num_in_stock=product.num_in_stock,
        )


class UserOut(_Wire):
    id: int
    name: str
    role: str

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(id=user.id, name=user.name, role=str(user.role))


# --- Module Notes -----------------------------------------------------------
# Routers return `DataResponse[...]` with `response_model_by_alias=True` (FastAPI default),
# so field aliases define the public JSON names on the way in and out.
