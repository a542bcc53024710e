"""Integration tests for the order endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from tests.factories.catalog import ProductFactory, UnitMeasurementFactory
from tests.factories.company import AreaFactory
from tests.factories.order import OrderFactory
from tests.helpers.assertions import (
    ORDER_DISPLAY_KEYS,
    assert_json_keys,
    assert_page_envelope,
    assert_problem,
)
from tests.helpers.http import build_url

BASE = "/api/v1/orders"


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


@pytest.fixture()
def day_orders():
    """Orders around the 2024-03-15 Lima day boundaries."""
    area = AreaFactory()
    return {
        "area": area,
        "start": OrderFactory(area=area, created_at=utc(2024, 3, 15, 5, 0)),
        "late": OrderFactory(area=area, created_at=utc(2024, 3, 16, 4, 59, 59)),
        "next": OrderFactory(area=area, created_at=utc(2024, 3, 16, 5, 0)),
        "before": OrderFactory(area=area, created_at=utc(2024, 3, 15, 4, 59, 59)),
    }


class TestListOrders:
    def test_envelope_and_display_fields(self, client, auth_header, day_orders) -> None:
        resp = client.get(BASE, headers=auth_header)

        assert resp.status_code == 200
        body = resp.get_json()
        assert_page_envelope(body)
        assert body["meta"]["total"] == 4
        first = body["data"][0]
        assert_json_keys(first, {"id", "userId", "areaId", "totalAmount", "items"})
        assert_json_keys(first, ORDER_DISPLAY_KEYS)

    def test_business_day_filter(self, client, auth_header, day_orders) -> None:
        resp = client.get(build_url(BASE, date="2024-03-15"), headers=auth_header)

        body = resp.get_json()
        ids = [o["id"] for o in body["data"]]
        assert ids == [day_orders["late"].id, day_orders["start"].id]
        late = body["data"][0]
        assert late["createdDate"] == "2024-03-15"
        assert late["createdTime"] == "23:59:59"
        assert late["createdAtLocal"] == "2024-03-15T23:59:59-05:00"

    def test_iso_timestamp_filter_uses_business_day(self, client, auth_header, day_orders):
        resp = client.get(build_url(BASE, date="2024-03-16T02:00:00Z"), headers=auth_header)
        assert resp.get_json()["meta"]["total"] == 2

    def test_range_filter_includes_end_day(self, client, auth_header, day_orders) -> None:
        url = build_url(BASE, startDate="2024-03-14", endDate="2024-03-15")
        assert client.get(url, headers=auth_header).get_json()["meta"]["total"] == 3

    def test_unknown_sort_field_falls_back(self, client, auth_header, day_orders) -> None:
        resp = client.get(build_url(BASE, sortBy="password"), headers=auth_header)
        assert resp.status_code == 200
        assert resp.get_json()["data"][0]["id"] == day_orders["next"].id

    def test_sort_ascending(self, client, auth_header, day_orders) -> None:
        resp = client.get(build_url(BASE, sortBy="createdAt", order="asc"), headers=auth_header)
        assert resp.get_json()["data"][0]["id"] == day_orders["before"].id

    def test_paging(self, client, auth_header, day_orders) -> None:
        resp = client.get(build_url(BASE, page=2, limit=3), headers=auth_header)
        body = resp.get_json()
        assert len(body["data"]) == 1
        assert body["meta"] == {
            "page": 2,
            "limit": 3,
            "total": 4,
            "totalPages": 2,
            "hasNextPage": False,
            "hasPrevPage": True,
        }

    def test_search_by_numeric_id(self, client, auth_header, day_orders) -> None:
        wanted = day_orders["start"].id
        resp = client.get(build_url(BASE, q=str(wanted)), headers=auth_header)
        assert wanted in [o["id"] for o in resp.get_json()["data"]]

    def test_area_filter(self, client, auth_header, day_orders) -> None:
        OrderFactory()
        url = build_url(BASE, areaId=day_orders["area"].id)
        assert client.get(url, headers=auth_header).get_json()["meta"]["total"] == 4


class TestListOrderErrors:
    @pytest.mark.parametrize(
        "query",
        [{"limit": 150}, {"limit": 0}, {"page": 0}, {"page": "abc"}, {"limit": "1e3"}],
    )
    def test_invalid_page_parameters(self, client, auth_header, query) -> None:
        resp = client.get(build_url(BASE, **query), headers=auth_header)
        assert_problem(resp, 400, "invalid_page_parameter")

    def test_invalid_date(self, client, auth_header) -> None:
        resp = client.get(build_url(BASE, date="2024-02-30"), headers=auth_header)
        body = assert_problem(resp, 400, "invalid_date_format")
        assert body["details"]["value"] == "2024-02-30"

    def test_date_and_range_together(self, client, auth_header) -> None:
        url = build_url(BASE, date="2024-03-15", startDate="2024-03-01", endDate="2024-03-15")
        assert_problem(client.get(url, headers=auth_header), 400, "invalid_range")

    def test_inverted_range(self, client, auth_header) -> None:
        url = build_url(BASE, startDate="2024-03-16", endDate="2024-03-15")
        assert_problem(client.get(url, headers=auth_header), 400, "invalid_range")

    def test_invalid_direction(self, client, auth_header) -> None:
        resp = client.get(build_url(BASE, order="sideways"), headers=auth_header)
        assert_problem(resp, 422, "validation_error")


class TestBusinessDayEndpoints:
    def test_check(self, client, auth_header, day_orders) -> None:
        area_id = day_orders["area"].id
        check = f"{BASE}/check"
        hit = client.get(build_url(check, areaId=area_id, date="2024-03-15"), headers=auth_header)
        miss = client.get(build_url(check, areaId=area_id, date="2024-03-18"), headers=auth_header)
        assert hit.get_json() == {"exists": True}
        assert miss.get_json() == {"exists": False}

    def test_check_requires_date(self, client, auth_header) -> None:
        resp = client.get(build_url(f"{BASE}/check", areaId=1), headers=auth_header)
        assert_problem(resp, 422, "validation_error")

    def test_filter(self, client, auth_header, day_orders) -> None:
        url = build_url(f"{BASE}/filter", startDate="2024-03-15", endDate="2024-03-15")
        data = client.get(url, headers=auth_header).get_json()["data"]
        assert [o["id"] for o in data] == [day_orders["late"].id, day_orders["start"].id]

    def test_by_customer(self, client, auth_header, user) -> None:
        mine = OrderFactory(user=user)
        OrderFactory()
        data = client.get(f"{BASE}/customer/{user.id}", headers=auth_header).get_json()["data"]
        assert [o["id"] for o in data] == [mine.id]
        assert_json_keys(data[0], ORDER_DISPLAY_KEYS)

    def test_by_unknown_customer(self, client, auth_header) -> None:
        assert_problem(client.get(f"{BASE}/customer/999999", headers=auth_header), 404, "not_found")


class TestOrderLifecycle:
    def _payload(self, user_id: int, area_id: int) -> dict:
        product = ProductFactory()
        unit = UnitMeasurementFactory()
        return {
            "userId": user_id,
            "areaId": area_id,
            "observation": "deliver before noon",
            "items": [
                {"productId": product.id, "unitMeasurementId": unit.id, "quantity": 2, "price": 3.5}
            ],
        }

    def test_create_uses_business_time(self, client, auth_header, user) -> None:
        area = AreaFactory()

        resp = client.post(BASE, json=self._payload(user.id, area.id), headers=auth_header)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["totalAmount"] == 7.0
        assert data["createdDate"] == "2024-03-15"
        assert data["createdTime"] == "12:00:00"
        assert data["createdAtLocal"] == "2024-03-15T12:00:00-05:00"
        assert len(data["items"]) == 1

    def test_create_validation(self, client, auth_header, user) -> None:
        resp = client.post(BASE, json={"userId": user.id, "items": []}, headers=auth_header)
        body = assert_problem(resp, 422, "validation_error")
        assert_json_keys(body["details"]["errors"], {"areaId", "items"})

    def test_get_update_delete(self, client, auth_header, clock) -> None:
        order = OrderFactory(created_at=clock.now())
        url = f"{BASE}/{order.id}"

        assert client.get(url, headers=auth_header).get_json()["data"]["id"] == order.id

        clock.advance(hours=6)  # 18:00 Lima, same day
        resp = client.patch(url, json={"status": "process"}, headers=auth_header)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["status"] == "process"
        assert data["updatedTime"] == "18:00:00"

        assert client.delete(url, headers=auth_header).status_code == 204
        assert_problem(client.get(url, headers=auth_header), 404, "not_found")

    def test_update_after_business_day_is_rejected(self, client, auth_header, clock) -> None:
        order = OrderFactory(created_at=clock.now())
        clock.advance(hours=12)  # 00:00 Lima on the next day

        resp = client.patch(f"{BASE}/{order.id}", json={"status": "process"}, headers=auth_header)

        body = assert_problem(resp, 400, "edit_window_closed")
        assert body["details"]["created_date"] == "2024-03-15"

    def test_unknown_order(self, client, auth_header) -> None:
        assert_problem(client.get(f"{BASE}/999999", headers=auth_header), 404, "not_found")
