from __future__ import annotations

import logging
from typing import Any

from orderdesk.models.supplier import Purchase, PurchaseItem, Supplier
from orderdesk.repositories.supplier import PurchaseRepository
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import NotFoundError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.suppliers.dto import (
    PurchaseCreateIn,
    PurchaseItemIn,
    PurchaseItemOut,
    PurchaseListIn,
    PurchaseOut,
    SupplierCreateIn,
    SupplierListIn,
    SupplierOut,
    SupplierUpdateIn,
)
from orderdesk.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class SupplierService(BaseService):
    """
    Application service for suppliers and their purchases.

    Notes
    -----
    - ``purchase_date`` is a business calendar date. Inputs given as ISO
      timestamps are reduced to the business date they fall on, so a purchase
      entered at ``2024-03-16T02:00:00Z`` is dated ``2024-03-15`` in Lima.
    """

    # ------------------------------------------------------------------ #
    # Suppliers
    # ------------------------------------------------------------------ #

    def list(self, dto: SupplierListIn) -> PageResult[SupplierOut]:
        """
        Paginate suppliers; search covers name, company, contact, email and phone.

        :rtype: PageResult[SupplierOut]
        """
        with self.ro_uow() as uow:
            repo = uow.suppliers
            spec = repo.query_spec(dto.page)
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(
                self._to_supplier_out
            )

    def get(self, supplier_id: int) -> SupplierOut:
        """
        Retrieve one supplier.

        :raises NotFoundError: When the supplier does not exist.
        """
        with self.ro_uow() as uow:
            supplier = uow.suppliers.get(supplier_id)
            if supplier is None:
                raise NotFoundError("Supplier", supplier_id)
            return self._to_supplier_out(supplier)

    def create(self, dto: SupplierCreateIn) -> SupplierOut:
        """
        Add a supplier to the directory.

        :param dto: Creation DTO.
        :type dto: :class:`SupplierCreateIn`
        :rtype: :class:`SupplierOut`
        """
        now = as_utc(self.clock.now())
        with self.rw_uow() as uow:
            supplier = Supplier(
                name=dto.name.strip(),
                company_name=dto.company_name,
                contact_name=dto.contact_name,
                phone=dto.phone,
                email=dto.email,
                address=dto.address,
                created_at=now,
                updated_at=now,
            )
            uow.suppliers.add(supplier)
            out = self._to_supplier_out(supplier)

        logger.info("supplier.created", extra={"entity": "Supplier", "actor": self.ctx.actor_id})
        return out

    def update(self, dto: SupplierUpdateIn) -> SupplierOut:
        """
        Modify a supplier. Fields left as ``None`` are not touched.

        :raises NotFoundError: When the supplier does not exist.
        """
        with self.rw_uow() as uow:
            repo = uow.suppliers
            supplier = repo.get_for_update(dto.supplier_id)
            if supplier is None:
                raise NotFoundError("Supplier", dto.supplier_id)

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "name": dto.name.strip() if dto.name is not None else None,
                    "company_name": dto.company_name,
                    "contact_name": dto.contact_name,
                    "phone": dto.phone,
                    "email": dto.email,
                    "address": dto.address,
                }.items()
                if v is not None
            }
            supplier.updated_at = as_utc(self.clock.now())
            repo.assign_updates(supplier, updates)
            out = self._to_supplier_out(supplier)

        logger.info("supplier.updated", extra={"entity": "Supplier", "actor": self.ctx.actor_id})
        return out

    def delete(self, supplier_id: int) -> None:
        """
        Remove a supplier together with its purchases.

        :raises NotFoundError: When the supplier does not exist.
        """
        with self.rw_uow() as uow:
            supplier = uow.suppliers.get(supplier_id)
            if supplier is None:
                raise NotFoundError("Supplier", supplier_id)
            uow.suppliers.delete(supplier)
        logger.info("supplier.deleted", extra={"entity": "Supplier", "actor": self.ctx.actor_id})

    # ------------------------------------------------------------------ #
    # Purchases
    # ------------------------------------------------------------------ #

    def list_purchases(self, dto: PurchaseListIn) -> PageResult[PurchaseOut]:
        """
        Paginate a supplier's purchases, optionally restricted to business days.

        :param dto: Listing DTO.
        :type dto: :class:`PurchaseListIn`
        :rtype: PageResult[PurchaseOut]
        :raises NotFoundError: When the supplier does not exist.
        :raises InvalidRangeError: On inverted or incomplete ranges.
        """
        boundary = self.dates.resolve_filter(dto.date, dto.start_date, dto.end_date)
        extra = []
        if boundary is not None:
            first, stop = self.dates.calendar_span(boundary)
            extra.append(PurchaseRepository.purchase_date_span(first, stop))

        with self.ro_uow() as uow:
            if uow.suppliers.get(dto.supplier_id) is None:
                raise NotFoundError("Supplier", dto.supplier_id)
            repo = uow.purchases
            spec = repo.query_spec(
                dto.page,
                filters={"supplierId": dto.supplier_id, "areaId": dto.area_id},
                extra=extra,
            )
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(
                self._to_purchase_out
            )

    def create_purchase(self, dto: PurchaseCreateIn) -> PurchaseOut:
        """
        Record a purchase from a supplier.

        :param dto: Creation DTO.
        :type dto: :class:`PurchaseCreateIn`
        :returns: Persisted purchase projection.
        :rtype: :class:`PurchaseOut`
        :raises NotFoundError: When the supplier, area, a product or a unit does not exist.
        :raises InvalidDateFormatError: When ``purchase_date`` is unparseable.
        """
        if dto.purchase_date is not None:
            purchase_day = self.dates.parse_business_date(dto.purchase_date)
        else:
            purchase_day = self.dates.parse_business_date(self.dates.business_today())
        now = as_utc(self.clock.now())

        with self.rw_uow() as uow:
            if uow.suppliers.get(dto.supplier_id) is None:
                raise NotFoundError("Supplier", dto.supplier_id)
            if dto.area_id is not None and uow.areas.get(dto.area_id) is None:
                raise NotFoundError("Area", dto.area_id)
            self._ensure_references(uow, dto.items)

            items = [self._to_item(i) for i in dto.items]
            purchase = Purchase(
                supplier_id=dto.supplier_id,
                area_id=dto.area_id,
                purchase_date=purchase_day,
                total_amount=(
                    dto.total_amount
                    if dto.total_amount is not None
                    else round(sum(i.total_cost for i in items), 2)
                ),
                created_at=now,
                updated_at=now,
                items=items,
            )
            uow.purchases.add(purchase)
            out = self._to_purchase_out(purchase)

        logger.info("purchase.created", extra={"purchase_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _ensure_references(uow: UnitOfWork, items: list[PurchaseItemIn]) -> None:
        wanted_products = {i.product_id for i in items if i.product_id is not None}
        missing = sorted(wanted_products - uow.products.existing_ids(wanted_products))
        if missing:
            raise NotFoundError("Product", missing[0])
        wanted_units = {i.unit_measurement_id for i in items if i.unit_measurement_id is not None}
        missing = sorted(wanted_units - uow.unit_measurements.existing_ids(wanted_units))
        if missing:
            raise NotFoundError("UnitMeasurement", missing[0])

    @staticmethod
    def _to_item(item: PurchaseItemIn) -> PurchaseItem:
        return PurchaseItem(
            product_id=item.product_id,
            description=item.description.strip() if item.description else None,
            unit_measurement_id=item.unit_measurement_id,
            quantity=item.quantity,
            unit_cost=item.unit_cost,
            total_cost=round(item.quantity * item.unit_cost, 2),
        )

    @staticmethod
    def _to_supplier_out(supplier: Supplier) -> SupplierOut:
        return SupplierOut(
            id=supplier.id,
            name=supplier.name,
            company_name=supplier.company_name,
            contact_name=supplier.contact_name,
            phone=supplier.phone,
            email=supplier.email,
            address=supplier.address,
            created_at=as_utc(supplier.created_at),
            updated_at=as_utc(supplier.updated_at) if supplier.updated_at else None,
        )

    @staticmethod
    def _to_purchase_out(purchase: Purchase) -> PurchaseOut:
        return PurchaseOut(
            id=purchase.id,
            supplier_id=purchase.supplier_id,
            area_id=purchase.area_id,
            total_amount=purchase.total_amount,
            purchase_date=purchase.purchase_date,
            created_at=as_utc(purchase.created_at),
            updated_at=as_utc(purchase.updated_at) if purchase.updated_at else None,
            items=[
                PurchaseItemOut(
                    id=i.id,
                    product_id=i.product_id,
                    description=i.description,
                    unit_measurement_id=i.unit_measurement_id,
                    quantity=i.quantity,
                    unit_cost=i.unit_cost,
                    total_cost=i.total_cost,
                )
                for i in purchase.items
            ],
        )
