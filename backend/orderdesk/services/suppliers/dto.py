"""
DTOs for SupplierService.

Covers the supplier directory and the purchases recorded against each
supplier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from orderdesk.services._shared.pagination import PageRequest

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SupplierListIn:
    page: PageRequest = field(default_factory=PageRequest)


@dataclass(frozen=True, slots=True)
class SupplierCreateIn:
    name: str
    company_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class SupplierUpdateIn:
    """Input DTO for modifying a supplier. ``None`` leaves a field unchanged."""

    supplier_id: int
    name: str | None = None
    company_name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class PurchaseListIn:
    """
    Input DTO for listing a supplier's purchases.

    Date parameters select business days on ``purchase_date``.

    :param supplier_id: Supplier whose purchases are listed.
    :type supplier_id: int
    :param page: Validated paging and sorting parameters.
    :type page: PageRequest
    """

    supplier_id: int
    page: PageRequest = field(default_factory=PageRequest)
    date: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    area_id: int | None = None


@dataclass(frozen=True, slots=True)
class PurchaseItemIn:
    """
    One purchase line.

    :param quantity: Purchased amount (> 0).
    :type quantity: float
    :param unit_cost: Cost per unit.
    :type unit_cost: float
    :param product_id: Catalogue product, when the line maps to one.
    :type product_id: int | None
    :param description: Free text for lines without a product.
    :type description: str | None
    """

    quantity: float
    unit_cost: float
    product_id: int | None = None
    description: str | None = None
    unit_measurement_id: int | None = None


@dataclass(frozen=True, slots=True)
class PurchaseCreateIn:
    """
    Input DTO for recording a purchase.

    :param supplier_id: Supplier the goods were bought from.
    :type supplier_id: int
    :param items: Purchase lines (at least one).
    :type items: list[PurchaseItemIn]
    :param purchase_date: ``YYYY-MM-DD`` or ISO timestamp; business today when ``None``.
    :type purchase_date: str | None
    :param total_amount: Declared total; computed from the lines when ``None``.
    :type total_amount: float | None
    """

    supplier_id: int
    items: list[PurchaseItemIn]
    purchase_date: str | None = None
    area_id: int | None = None
    total_amount: float | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SupplierOut:
    id: int
    name: str
    company_name: str | None
    contact_name: str | None
    phone: str | None
    email: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class PurchaseItemOut:
    id: int
    product_id: int | None
    description: str | None
    unit_measurement_id: int | None
    quantity: float
    unit_cost: float
    total_cost: float


@dataclass(frozen=True, slots=True)
class PurchaseOut:
    """Public projection of a purchase with its lines."""

    id: int
    supplier_id: int
    area_id: int | None
    total_amount: float
    purchase_date: date
    created_at: datetime
    updated_at: datetime | None
    items: list[PurchaseItemOut]
