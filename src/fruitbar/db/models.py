"""
fruitbar.db.models

Persistence schema.

Responsibilities:
- Define ORM models for the handled resources:
  - User: account with a bcrypt password hash and a role
  - Product: purchasable unit with price and stock
  - Order: owner, payment info and engine-computed totals
  - Item: one product line of an order (at most one per product)
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Boolean, Enum, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fruitbar.auth.roles import Role
from fruitbar.db.base import Base


def _utcnow() -> datetime:
    # Stored naive, always UTC.
    return datetime.now(UTC).replace(tzinfo=None)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.customer)


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    symbol: Mapped[str] = mapped_column(String(8), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    num_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Order(TimestampMixin, Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Users may live in another service's database, so this is not a foreign key.
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Payment info (embedded).
    cash: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    card_number: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    cardholder_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    expiration_date: Mapped[str] = mapped_column(String(5), nullable=False, default="")
    zipcode: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    cvv: Mapped[str] = mapped_column(String(4), nullable=False, default="")

    tax_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    tax: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    items: Mapped[list[Item]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Item.id",
        lazy="selectin",
    )


class Item(TimestampMixin, Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship(back_populates="items")

    __table_args__ = (UniqueConstraint("order_id", "product_id", name="uq_items_order_product"),)


# --- Module Notes -----------------------------------------------------------
# Order totals are always written by the order service; clients never supply them.
