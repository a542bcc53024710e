"""Tests for :class:`OrderService` business-day rules and writes."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from orderdesk.core.clock import FrozenClock
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.errors import (
    InvalidDateFormatError,
    InvalidRangeError,
    NotFoundError,
    OrderEditWindowClosedError,
)
from orderdesk.services._shared.pagination import PageRequest
from orderdesk.services.orders.dto import (
    OrderCreateIn,
    OrderItemIn,
    OrderListIn,
    OrderUpdateIn,
)
from orderdesk.services.orders.service import OrderService

from tests.factories.catalog import ProductFactory, UnitMeasurementFactory
from tests.factories.company import AreaFactory
from tests.factories.order import OrderFactory
from tests.factories.user import UserFactory


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


def service_at(instant: datetime) -> OrderService:
    return OrderService(clock=FrozenClock(instant))


@pytest.fixture()
def svc(clock) -> OrderService:
    return OrderService(clock=clock)


@pytest.fixture()
def line():
    product = ProductFactory(price=4.5)
    unit = UnitMeasurementFactory()
    return OrderItemIn(product_id=product.id, unit_measurement_id=unit.id, quantity=2, price=4.5)


class TestCreate:
    def test_uses_clock_and_computes_total(self, svc, clock, line) -> None:
        user, area = UserFactory(), AreaFactory()

        out = svc.create(
            OrderCreateIn(user_id=user.id, area_id=area.id, items=[line, line], observation=" hi ")
        )

        assert out.created_at == clock.now()
        assert out.updated_at == clock.now()
        assert out.total_amount == 18.0
        assert out.observation == "hi"
        assert out.area_name == area.name
        assert len(out.items) == 2

    def test_declared_total_wins(self, svc, line) -> None:
        user, area = UserFactory(), AreaFactory()
        out = svc.create(
            OrderCreateIn(user_id=user.id, area_id=area.id, items=[line], total_amount=7.0)
        )
        assert out.total_amount == 7.0

    def test_unknown_product(self, svc) -> None:
        user, area, unit = UserFactory(), AreaFactory(), UnitMeasurementFactory()
        item = OrderItemIn(product_id=999_999, unit_measurement_id=unit.id, quantity=1, price=1)
        with pytest.raises(NotFoundError, match="Product"):
            svc.create(OrderCreateIn(user_id=user.id, area_id=area.id, items=[item]))

    def test_unknown_area(self, svc, line) -> None:
        user = UserFactory()
        with pytest.raises(NotFoundError, match="Area"):
            svc.create(OrderCreateIn(user_id=user.id, area_id=999_999, items=[line]))


class TestEditWindow:
    def test_same_business_day_across_utc_midnight(self) -> None:
        # Created 01:00 Lima, edited 23:59 Lima on the same day (next UTC date)
        order = OrderFactory(created_at=utc(2024, 3, 15, 6, 0))
        now = utc(2024, 3, 16, 4, 59)

        out = service_at(now).update(OrderUpdateIn(order_id=order.id, status="process"))

        assert out.status == "process"
        assert out.updated_at == now

    def test_next_business_day_is_rejected(self) -> None:
        order = OrderFactory(created_at=utc(2024, 3, 15, 6, 0))

        with pytest.raises(OrderEditWindowClosedError) as exc_info:
            service_at(utc(2024, 3, 16, 5, 0)).update(
                OrderUpdateIn(order_id=order.id, status="process")
            )

        assert exc_info.value.code == "edit_window_closed"
        assert exc_info.value.details["created_date"] == "2024-03-15"

    def test_same_utc_date_but_different_business_day(self) -> None:
        # 22:00 Lima on the 15th vs 01:00 Lima on the 16th, both 2024-03-16 in UTC
        order = OrderFactory(created_at=utc(2024, 3, 16, 3, 0))
        with pytest.raises(OrderEditWindowClosedError):
            service_at(utc(2024, 3, 16, 6, 0)).update(
                OrderUpdateIn(order_id=order.id, observation="late")
            )

    def test_replacing_items_recomputes_total(self, svc, clock, line) -> None:
        order = OrderFactory(created_at=clock.now(), total_amount=100)

        out = svc.update(OrderUpdateIn(order_id=order.id, items=[line]))

        assert out.total_amount == 9.0
        assert [(i.product_id, i.quantity) for i in out.items] == [(line.product_id, 2)]

    def test_moving_area_reports_new_area_name(self, svc, clock) -> None:
        order = OrderFactory(created_at=clock.now())
        target = AreaFactory()

        out = svc.update(OrderUpdateIn(order_id=order.id, area_id=target.id))

        assert out.area_id == target.id
        assert out.area_name == target.name
        assert out.updated_at == clock.now()

    def test_unknown_order(self, svc) -> None:
        with pytest.raises(NotFoundError):
            svc.update(OrderUpdateIn(order_id=999_999, status="process"))


class TestBusinessDayQueries:
    def test_check_existing(self, svc) -> None:
        area = AreaFactory()
        OrderFactory(area=area, created_at=utc(2024, 3, 16, 4, 30))  # 23:30 Lima on the 15th

        assert svc.check_existing(area.id, "2024-03-15") is True
        assert svc.check_existing(area.id, "2024-03-16") is False
        assert svc.check_existing(area.id, "2024-03-16T02:00:00Z") is True

    def test_check_existing_invalid_date(self, svc) -> None:
        with pytest.raises(InvalidDateFormatError):
            svc.check_existing(1, "15-03-2024")

    def test_filter_by_date_includes_whole_end_day(self, svc) -> None:
        first = OrderFactory(created_at=utc(2024, 3, 15, 5, 0))
        last = OrderFactory(created_at=utc(2024, 3, 16, 4, 59, 59))
        OrderFactory(created_at=utc(2024, 3, 16, 5, 0))

        found = svc.filter_by_date("2024-03-15", "2024-03-15")

        assert [o.id for o in found] == [last.id, first.id]

    def test_filter_by_date_inverted(self, svc) -> None:
        with pytest.raises(InvalidRangeError):
            svc.filter_by_date("2024-03-16", "2024-03-15")

    def test_list_with_day_filter_and_paging(self, svc) -> None:
        for hour in range(6, 18):
            OrderFactory(created_at=utc(2024, 3, 15, hour, 0))
        OrderFactory(created_at=utc(2024, 3, 17, 12, 0))

        page = svc.list(
            OrderListIn(page=PageRequest.from_params(page=2, limit=5), date="2024-03-15")
        )

        assert page.meta.total == 12
        assert page.meta.total_pages == 3
        assert [o.created_at.hour for o in page.data] == [12, 11, 10, 9, 8]

    def test_list_rejects_bad_date_before_querying(self, svc) -> None:
        with pytest.raises(InvalidDateFormatError):
            svc.list(OrderListIn(date="not-a-date"))

    def test_list_by_user(self, svc) -> None:
        order = OrderFactory()
        assert [o.id for o in svc.list_by_user(order.user_id)] == [order.id]
        with pytest.raises(NotFoundError):
            svc.list_by_user(999_999)


def test_delete(svc) -> None:
    order = OrderFactory()
    order_id = order.id
    svc.delete(order_id)
    with pytest.raises(NotFoundError):
        svc.get(order_id)


def test_service_errors_translate_to_api_errors() -> None:
    translated = BaseService.translate_exceptions(OrderEditWindowClosedError(3, "2024-03-15"))
    assert translated.status_code == 400
    assert translated.code == "edit_window_closed"
    assert translated.details["order_id"] == 3

    assert BaseService.translate_exceptions(NotFoundError("Order", 3)).status_code == 404
