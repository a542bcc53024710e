from __future__ import annotations

import logging

from orderdesk.models.order import Order, OrderItem
from orderdesk.repositories.order import OrderRepository
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import NotFoundError, OrderEditWindowClosedError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.orders.dto import (
    OrderCreateIn,
    OrderItemIn,
    OrderItemOut,
    OrderListIn,
    OrderOut,
    OrderUpdateIn,
)
from orderdesk.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """
    Application service for the **order** aggregate.

    Responsibilities
    ----------------
    - Paginated, searchable order listings with business-day filters.
    - Place, modify and delete orders with their lines.
    - Enforce the same-day edit window: an order may only be modified on the
      business day it was created.

    Notes
    -----
    - Creation and modification timestamps come from the injected clock.
    - Date parameters are validated before any storage call.
    """

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def list(self, dto: OrderListIn) -> PageResult[OrderOut]:
        """
        Paginate orders with optional search, sort, date and equality filters.

        :param dto: Listing DTO.
        :type dto: :class:`OrderListIn`
        :returns: Page of order projections.
        :rtype: PageResult[OrderOut]
        :raises InvalidDateFormatError: On unparseable date parameters.
        :raises InvalidRangeError: On inverted or incomplete ranges.
        """
        date_range = self.dates.resolve_filter(dto.date, dto.start_date, dto.end_date)
        with self.ro_uow() as uow:
            repo: OrderRepository = uow.orders
            spec = repo.query_spec(
                dto.page,
                date_range=date_range,
                filters={"userId": dto.user_id, "areaId": dto.area_id, "status": dto.status},
            )
            page = self.pagination.paginate(spec, repo.fetch_spec, repo.count)
            return page.map(self._to_out)

    def get(self, order_id: int) -> OrderOut:
        """
        Retrieve one order.

        :raises NotFoundError: When the order does not exist.
        """
        with self.ro_uow() as uow:
            order = uow.orders.get(order_id)
            if order is None:
                raise NotFoundError("Order", order_id)
            return self._to_out(order)

    def check_existing(self, area_id: int, date: str) -> bool:
        """
        Return whether ``area_id`` already placed an order on the business day of ``date``.

        :param area_id: Ordering area.
        :type area_id: int
        :param date: ``YYYY-MM-DD`` or an ISO timestamp (reduced to its business date).
        :type date: str
        :rtype: bool
        """
        day = self.dates.day_range_utc(date)
        with self.ro_uow() as uow:
            return uow.orders.exists_in_range(area_id, day)

    def filter_by_date(self, start_date: str, end_date: str) -> list[OrderOut]:
        """
        Every order created between two business days (both inclusive), newest first.

        :raises InvalidRangeError: When ``start_date`` is after ``end_date``.
        """
        boundary = self.dates.range_across_dates(start_date, end_date)
        with self.ro_uow() as uow:
            return [self._to_out(o) for o in uow.orders.list_in_range(boundary)]

    def list_by_user(self, user_id: int) -> list[OrderOut]:
        """
        Every order placed by ``user_id``, newest first.

        :raises NotFoundError: When the user does not exist.
        """
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            return [self._to_out(o) for o in uow.orders.list_by_user(user_id)]

    # ------------------------------------------------------------------ #
    # Write
    # ------------------------------------------------------------------ #

    def create(self, dto: OrderCreateIn) -> OrderOut:
        """
        Place an order with its lines.

        :param dto: Creation DTO.
        :type dto: :class:`OrderCreateIn`
        :returns: Persisted order projection.
        :rtype: :class:`OrderOut`
        :raises NotFoundError: When the user, area, a product or a unit does not exist.
        """
        now = as_utc(self.clock.now())
        with self.rw_uow() as uow:
            if uow.users.get(dto.user_id) is None:
                raise NotFoundError("User", dto.user_id)
            if uow.areas.get(dto.area_id) is None:
                raise NotFoundError("Area", dto.area_id)
            self._ensure_references(uow, dto.items)

            order = Order(
                user_id=dto.user_id,
                area_id=dto.area_id,
                status=dto.status,
                observation=dto.observation.strip() if dto.observation else None,
                total_amount=self._total(dto.total_amount, dto.items),
                created_at=now,
                updated_at=now,
                items=[self._to_item(i) for i in dto.items],
            )
            uow.orders.add(order)
            out = self._to_out(order)

        logger.info("order.created", extra={"order_id": out.id, "area_id": out.area_id})
        return out

    def update(self, dto: OrderUpdateIn) -> OrderOut:
        """
        Modify an order created on the current business day.

        The row is locked and the clock is read inside the write transaction,
        so an order created just before midnight cannot be changed after it.

        :raises NotFoundError: When the order or a referenced entity does not exist.
        :raises OrderEditWindowClosedError: When today is not the order's creation day.
        """
        with self.rw_uow() as uow:
            repo: OrderRepository = uow.orders
            order = repo.get_for_update(dto.order_id)
            if order is None:
                raise NotFoundError("Order", dto.order_id)

            now = as_utc(self.clock.now())
            if not self.dates.same_business_day(order.created_at, now):
                raise OrderEditWindowClosedError(
                    order.id, self.dates.to_business_date(order.created_at)
                )

            fields: dict[str, object] = {}
            if dto.status is not None:
                fields["status"] = dto.status
            if dto.observation is not None:
                fields["observation"] = dto.observation.strip() or None
            if dto.area_id is not None and dto.area_id != order.area_id:
                if uow.areas.get(dto.area_id) is None:
                    raise NotFoundError("Area", dto.area_id)
                fields["area_id"] = dto.area_id

            if dto.items is not None:
                self._ensure_references(uow, dto.items)
                repo.replace_items(order, [self._to_item(i) for i in dto.items])
                fields["total_amount"] = self._total(dto.total_amount, dto.items)
            elif dto.total_amount is not None:
                fields["total_amount"] = dto.total_amount

            order.updated_at = now
            repo.assign_updates(order, fields)
            out = self._to_out(order)

        logger.info("order.updated", extra={"order_id": out.id})
        return out

    def delete(self, order_id: int) -> None:
        """
        Delete an order and its lines.

        :raises NotFoundError: When the order does not exist.
        """
        with self.rw_uow() as uow:
            order = uow.orders.get(order_id)
            if order is None:
                raise NotFoundError("Order", order_id)
            uow.orders.delete(order)
        logger.info("order.deleted", extra={"order_id": order_id})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _ensure_references(uow: UnitOfWork, items: list[OrderItemIn]) -> None:
        wanted_products = {i.product_id for i in items}
        missing = sorted(wanted_products - uow.products.existing_ids(wanted_products))
        if missing:
            raise NotFoundError("Product", missing[0])
        wanted_units = {i.unit_measurement_id for i in items}
        missing = sorted(wanted_units - uow.unit_measurements.existing_ids(wanted_units))
        if missing:
            raise NotFoundError("UnitMeasurement", missing[0])

    @staticmethod
    def _total(declared: float | None, items: list[OrderItemIn]) -> float:
        if declared is not None:
            return declared
        return round(sum(i.quantity * i.price for i in items), 2)

    @staticmethod
    def _to_item(item: OrderItemIn) -> OrderItem:
        return OrderItem(
            product_id=item.product_id,
            unit_measurement_id=item.unit_measurement_id,
            quantity=item.quantity,
            price=item.price,
        )

    def _to_out(self, order: Order) -> OrderOut:
        """
        Map ORM Order to :class:`OrderOut`.

        :param order: ORM instance.
        :type order: :class:`orderdesk.models.order.Order`
        :rtype: :class:`OrderOut`
        """
        return OrderOut(
            id=order.id,
            user_id=order.user_id,
            area_id=order.area_id,
            area_name=order.area.name if order.area is not None else None,
            total_amount=order.total_amount,
            status=order.status,
            observation=order.observation,
            created_at=as_utc(order.created_at),
            updated_at=as_utc(order.updated_at) if order.updated_at else None,
            items=[
                OrderItemOut(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product.name if item.product is not None else None,
                    unit_measurement_id=item.unit_measurement_id,
                    unit_measurement_name=(
                        item.unit_measurement.name if item.unit_measurement is not None else None
                    ),
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
        )
