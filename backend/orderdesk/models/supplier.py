"""Supplier aggregate: suppliers, their purchases and purchase lines."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product, UnitMeasurement


class Supplier(PKMixin, TimestampMixin, ReprMixin, db.Model):
    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(150))
    contact_name: Mapped[str | None] = mapped_column(String(150))
    phone: Mapped[str | None] = mapped_column(String(30))
    email: Mapped[str | None] = mapped_column(String(254))
    address: Mapped[str | None] = mapped_column(String(255))

    purchases: Mapped[list[Purchase]] = relationship(
        "Purchase",
        back_populates="supplier",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Purchase.created_at.desc()",
    )


class Purchase(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Goods bought from a supplier.

    ``purchase_date`` is a business-calendar date (no time component), as
    entered by the buyer; it is not derived from ``created_at``.
    """

    __tablename__ = "purchases"

    supplier_id: Mapped[int] = mapped_column(
        ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False
    )
    area_id: Mapped[int | None] = mapped_column(ForeignKey("areas.id", ondelete="SET NULL"))
    total_amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (Index("ix_purchases_supplier_date", "supplier_id", "purchase_date"),)

    supplier: Mapped[Supplier] = relationship("Supplier", back_populates="purchases")
    items: Mapped[list[PurchaseItem]] = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="PurchaseItem.id",
    )


class PurchaseItem(PKMixin, ReprMixin, db.Model):
    """Purchase line. Either references a catalogue product or a free description."""

    __tablename__ = "purchase_items"

    purchase_id: Mapped[int] = mapped_column(
        ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int | None] = mapped_column(ForeignKey("products.id", ondelete="SET NULL"))
    description: Mapped[str | None] = mapped_column(String(255))
    unit_measurement_id: Mapped[int | None] = mapped_column(
        ForeignKey("unit_measurements.id", ondelete="SET NULL")
    )
    quantity: Mapped[float] = mapped_column(Numeric(12, 3, asdecimal=False), nullable=False)
    unit_cost: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    total_cost: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)

    purchase: Mapped[Purchase] = relationship("Purchase", back_populates="items")
    product: Mapped[Product | None] = relationship("Product", lazy="joined")
    unit_measurement: Mapped[UnitMeasurement | None] = relationship(
        "UnitMeasurement", lazy="joined"
    )


__all__ = ["Purchase", "PurchaseItem", "Supplier"]
