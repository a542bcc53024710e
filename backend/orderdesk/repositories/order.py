"""Order repository: listing, business-day lookups and line-item persistence."""

from __future__ import annotations

from sqlalchemy import String, cast

from orderdesk.models.order import Order, OrderItem
from orderdesk.repositories.base import BaseRepository
from orderdesk.services._shared.dates import DateBoundary


class OrderRepository(BaseRepository[Order]):
    """Persistence-only repository for :class:`Order` and its items."""

    model = Order

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": Order.id,
            "createdAt": Order.created_at,
            "updatedAt": Order.updated_at,
            "totalAmount": Order.total_amount,
            "status": Order.status,
            "userId": Order.user_id,
            "areaId": Order.area_id,
        }

    def _searchable_fields(self):
        return [cast(Order.status, String), Order.observation]

    def _numeric_id_field(self):
        return Order.id

    def _filterable_fields(self):
        return {
            "userId": Order.user_id,
            "areaId": Order.area_id,
            "status": Order.status,
        }

    def _updatable_fields(self):
        return {"status", "observation", "total_amount", "area_id"}

    # ---------------------------- Business-day lookups ----------------------------

    def exists_in_range(self, area_id: int, date_range: DateBoundary) -> bool:
        """Return ``True`` when ``area_id`` has an order created within ``date_range``.

        :param area_id: Ordering area.
        :type area_id: int
        :param date_range: Half-open UTC range of one or more business days.
        :type date_range: DateBoundary
        :rtype: bool
        """
        builder = self.filter_builder()
        predicate = builder.build(date_range=date_range, filters={"areaId": area_id})
        return self.exists(predicate)

    def list_in_range(self, date_range: DateBoundary) -> list[Order]:
        """Return every order created within ``date_range``, newest first."""
        return self.list(self.filter_builder().build(date_range=date_range))

    def list_by_user(self, user_id: int) -> list[Order]:
        """Return every order placed by ``user_id``, newest first."""
        return self.list(Order.user_id == user_id)

    # ---------------------------- Items ----------------------------

    def replace_items(self, order: Order, items: list[OrderItem]) -> Order:
        """Swap the order's line items for ``items`` and flush."""
        order.items.clear()
        self.flush()
        order.items.extend(items)
        self.flush()
        return order

