"""Supplier and purchase repositories."""

from __future__ import annotations

from datetime import date

from sqlalchemy import and_

from orderdesk.models.supplier import Purchase, Supplier
from orderdesk.repositories.base import BaseRepository


class SupplierRepository(BaseRepository[Supplier]):
    """Persistence-only repository for :class:`Supplier`."""

    model = Supplier

    def _sortable_fields(self):
        return {
            "id": Supplier.id,
            "createdAt": Supplier.created_at,
            "updatedAt": Supplier.updated_at,
            "name": Supplier.name,
            "companyName": Supplier.company_name,
        }

    def _searchable_fields(self):
        return [
            Supplier.name,
            Supplier.company_name,
            Supplier.contact_name,
            Supplier.email,
            Supplier.phone,
        ]

    def _updatable_fields(self):
        return {"name", "company_name", "contact_name", "phone", "email", "address"}


class PurchaseRepository(BaseRepository[Purchase]):
    """Persistence-only repository for :class:`Purchase` and its items.

    ``purchase_date`` is a calendar date, so business-day filters on it are
    expressed as a half-open span of dates instead of UTC instants.
    """

    model = Purchase

    def _sortable_fields(self):
        return {
            "id": Purchase.id,
            "createdAt": Purchase.created_at,
            "purchaseDate": Purchase.purchase_date,
            "totalAmount": Purchase.total_amount,
        }

    def _filterable_fields(self):
        return {"supplierId": Purchase.supplier_id, "areaId": Purchase.area_id}

    @staticmethod
    def purchase_date_span(first: date, stop: date):
        """Clause ``first <= purchase_date < stop``."""
        return and_(Purchase.purchase_date >= first, Purchase.purchase_date < stop)
