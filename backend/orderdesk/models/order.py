"""Order aggregate: an area's order and its line items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product, UnitMeasurement
    from .company import Area
    from .user import User

ORDER_STATUSES = ("created", "process", "delivered")
OrderStatus = Enum(*ORDER_STATUSES, name="order_status")


class Order(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Order placed by a user for an area.

    ``created_at`` is the instant that decides which business day the order
    belongs to; day filters and the same-day edit window are derived from it.
    """

    __tablename__ = "orders"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    area_id: Mapped[int] = mapped_column(ForeignKey("areas.id", ondelete="CASCADE"), nullable=False)
    total_amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(OrderStatus, nullable=False, server_default="created")
    observation: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        Index("ix_orders_area_created", "area_id", "created_at"),
        Index("ix_orders_user", "user_id"),
    )

    user: Mapped[User] = relationship("User", lazy="joined")
    area: Mapped[Area] = relationship("Area", back_populates="orders", lazy="joined")
    items: Mapped[list[OrderItem]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="OrderItem.id",
    )


class OrderItem(PKMixin, ReprMixin, db.Model):
    """Order line: a quantity of a product in a given unit at a given price."""

    __tablename__ = "order_items"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False)
    unit_measurement_id: Mapped[int] = mapped_column(
        ForeignKey("unit_measurements.id"), nullable=False
    )
    quantity: Mapped[float] = mapped_column(Numeric(12, 3, asdecimal=False), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)

    order: Mapped[Order] = relationship("Order", back_populates="items")
    product: Mapped[Product] = relationship("Product", lazy="joined")
    unit_measurement: Mapped[UnitMeasurement] = relationship("UnitMeasurement", lazy="joined")


__all__ = ["ORDER_STATUSES", "Order", "OrderItem"]
