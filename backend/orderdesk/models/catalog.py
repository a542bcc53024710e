"""Product catalogue: categories, unit measurements and products."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

product_unit_measurements = Table(
    "product_unit_measurements",
    db.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "unit_measurement_id",
        ForeignKey("unit_measurements.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Category(PKMixin, TimestampMixin, ReprMixin, db.Model):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)


class UnitMeasurement(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Sale/purchase unit such as ``kg``, ``box`` or ``unit``."""

    __tablename__ = "unit_measurements"

    name: Mapped[str] = mapped_column(String(60), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(255))


class Product(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Sellable product offered in one or more unit measurements."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(String(500))
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL")
    )

    category: Mapped[Category | None] = relationship("Category", lazy="joined")
    unit_measurements: Mapped[list[UnitMeasurement]] = relationship(
        "UnitMeasurement", secondary=product_unit_measurements, lazy="selectin"
    )
