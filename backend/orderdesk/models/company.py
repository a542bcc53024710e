"""Tenant models: companies and the areas that place orders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .order import Order


class Company(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Tenant root. Every area belongs to exactly one company."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)

    areas: Mapped[list[Area]] = relationship(
        "Area", back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )


class Area(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Ordering unit inside a company (kitchen, branch, warehouse...)."""

    __tablename__ = "areas"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("company_id", "name", name="uq_areas_company_name"),)

    company: Mapped[Company] = relationship("Company", back_populates="areas", lazy="joined")
    orders: Mapped[list[Order]] = relationship("Order", back_populates="area")
