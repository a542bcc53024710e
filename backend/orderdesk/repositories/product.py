"""Product repository."""

from __future__ import annotations

from orderdesk.models.catalog import Product
from orderdesk.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Persistence-only repository for :class:`Product`."""

    model = Product

    def _sortable_fields(self):
        return {
            "id": Product.id,
            "createdAt": Product.created_at,
            "updatedAt": Product.updated_at,
            "name": Product.name,
            "price": Product.price,
            "stock": Product.stock,
        }

    def _searchable_fields(self):
        return [Product.name, Product.description]

    def _filterable_fields(self):
        return {"categoryId": Product.category_id}

    def _updatable_fields(self):
        return {
            "name",
            "description",
            "price",
            "stock",
            "image_url",
            "category_id",
            "unit_measurements",
        }
