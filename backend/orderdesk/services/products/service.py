from __future__ import annotations

import logging
from typing import Any

from orderdesk.models.catalog import Product, UnitMeasurement
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import NotFoundError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.products.dto import (
    ProductCreateIn,
    ProductListIn,
    ProductOut,
    ProductUnitOut,
    ProductUpdateIn,
)
from orderdesk.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class ProductService(BaseService):
    """
    Application service for the product catalogue.

    Search matches ``name`` and ``description``; sorting is restricted to the
    repository whitelist. Every product is sold in at least one unit
    measurement.
    """

    def list(self, dto: ProductListIn) -> PageResult[ProductOut]:
        """
        Paginate products.

        :param dto: Listing DTO.
        :type dto: :class:`ProductListIn`
        :rtype: PageResult[ProductOut]
        """
        with self.ro_uow() as uow:
            repo = uow.products
            spec = repo.query_spec(dto.page, filters={"categoryId": dto.category_id})
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(self._to_out)

    def get(self, product_id: int) -> ProductOut:
        """
        Retrieve one product.

        :raises NotFoundError: When the product does not exist.
        """
        with self.ro_uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            return self._to_out(product)

    def create(self, dto: ProductCreateIn) -> ProductOut:
        """
        Add a product to the catalogue.

        :param dto: Creation DTO.
        :type dto: :class:`ProductCreateIn`
        :rtype: :class:`ProductOut`
        :raises NotFoundError: When the category or a unit measurement does not exist.
        """
        now = as_utc(self.clock.now())
        with self.rw_uow() as uow:
            self._ensure_category(uow, dto.category_id)
            product = Product(
                name=dto.name.strip(),
                description=dto.description,
                price=dto.price,
                stock=dto.stock,
                image_url=dto.image_url,
                category_id=dto.category_id,
                unit_measurements=self._load_units(uow, dto.unit_measurement_ids),
                created_at=now,
                updated_at=now,
            )
            uow.products.add(product)
            out = self._to_out(product)

        logger.info("product.created", extra={"entity": "Product", "actor": self.ctx.actor_id})
        return out

    def update(self, dto: ProductUpdateIn) -> ProductOut:
        """
        Modify a product. Fields left as ``None`` are not touched.

        :raises NotFoundError: When the product, category or a unit does not exist.
        """
        with self.rw_uow() as uow:
            repo = uow.products
            product = repo.get_for_update(dto.product_id)
            if product is None:
                raise NotFoundError("Product", dto.product_id)

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "name": dto.name.strip() if dto.name is not None else None,
                    "description": dto.description,
                    "price": dto.price,
                    "stock": dto.stock,
                    "image_url": dto.image_url,
                    "category_id": dto.category_id,
                }.items()
                if v is not None
            }
            if dto.category_id is not None:
                self._ensure_category(uow, dto.category_id)
            if dto.unit_measurement_ids is not None:
                updates["unit_measurements"] = self._load_units(uow, dto.unit_measurement_ids)

            product.updated_at = as_utc(self.clock.now())
            repo.assign_updates(product, updates)
            out = self._to_out(product)

        logger.info("product.updated", extra={"entity": "Product", "actor": self.ctx.actor_id})
        return out

    def delete(self, product_id: int) -> None:
        """
        Remove a product and its unit links.

        :raises NotFoundError: When the product does not exist.
        """
        with self.rw_uow() as uow:
            product = uow.products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            uow.products.delete(product)
        logger.info("product.deleted", extra={"entity": "Product", "actor": self.ctx.actor_id})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _ensure_category(uow: UnitOfWork, category_id: int | None) -> None:
        if category_id is not None and uow.categories.get(category_id) is None:
            raise NotFoundError("Category", category_id)

    @staticmethod
    def _load_units(uow: UnitOfWork, ids: list[int]) -> list[UnitMeasurement]:
        units = uow.unit_measurements.get_many(ids)
        missing = sorted(set(ids) - {u.id for u in units})
        if missing:
            raise NotFoundError("UnitMeasurement", missing[0])
        return units

    @staticmethod
    def _to_out(product: Product) -> ProductOut:
        return ProductOut(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            image_url=product.image_url,
            category_id=product.category_id,
            category_name=product.category.name if product.category is not None else None,
            unit_measurements=[
                ProductUnitOut(id=u.id, name=u.name)
                for u in sorted(product.unit_measurements, key=lambda u: u.id)
            ],
            created_at=as_utc(product.created_at),
            updated_at=as_utc(product.updated_at) if product.updated_at else None,
        )
