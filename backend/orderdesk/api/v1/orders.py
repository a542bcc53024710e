"""Order endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from orderdesk.api.deps import (
    get_order_projector,
    json_response,
    parse_page_request,
    require_auth,
    service_kwargs,
    timing,
)
from orderdesk.schemas import (
    OrderCheckQuerySchema,
    OrderCreateSchema,
    OrderQuerySchema,
    OrderRangeQuerySchema,
    OrderSchema,
    OrderUpdateSchema,
)
from orderdesk.services.orders.dto import OrderCreateIn, OrderListIn, OrderOut, OrderUpdateIn
from orderdesk.services.orders.service import OrderService

bp = Blueprint("orders", __name__)

order_schema = OrderSchema()
order_query_schema = OrderQuerySchema()
order_check_schema = OrderCheckQuerySchema()
order_range_schema = OrderRangeQuerySchema()
order_create_schema = OrderCreateSchema()
order_update_schema = OrderUpdateSchema()


def _render(order: OrderOut) -> dict:
    return get_order_projector().project(order, order_schema.dump(order))


def _render_many(orders: list[OrderOut]) -> list[dict]:
    return get_order_projector().project_many(orders, order_schema.dump(orders, many=True))


@bp.get("")
@require_auth
@timing
def list_orders():
    """Return paginated orders."""

    params = order_query_schema.load(request.args)
    dto = OrderListIn(
        page=parse_page_request(params),
        date=params["date"],
        start_date=params["start_date"],
        end_date=params["end_date"],
        user_id=params["user_id"],
        area_id=params["area_id"],
        status=params["status"],
    )
    page = OrderService(**service_kwargs()).list(dto)
    return json_response(page.map(_render).to_dict())


@bp.get("/filter")
@require_auth
@timing
def filter_orders_by_date():
    """Return every order created between ``startDate`` and ``endDate`` (business days)."""

    params = order_range_schema.load(request.args)
    orders = OrderService(**service_kwargs()).filter_by_date(
        params["start_date"], params["end_date"]
    )
    return json_response({"data": _render_many(orders)})


@bp.get("/check")
@require_auth
@timing
def check_existing_order():
    """Tell whether ``areaId`` already has an order on the business day of ``date``."""

    params = order_check_schema.load(request.args)
    exists = OrderService(**service_kwargs()).check_existing(params["area_id"], params["date"])
    return json_response({"exists": exists})


@bp.get("/customer/<int:user_id>")
@require_auth
@timing
def list_orders_by_user(user_id: int):
    orders = OrderService(**service_kwargs()).list_by_user(user_id)
    return json_response({"data": _render_many(orders)})


@bp.get("/<int:order_id>")
@require_auth
@timing
def get_order(order_id: int):
    order = OrderService(**service_kwargs()).get(order_id)
    return json_response({"data": _render(order)})


@bp.post("")
@require_auth
@timing
def create_order():
    """Place a new order."""

    payload = order_create_schema.load(request.get_json(silent=True) or {})
    order = OrderService(**service_kwargs()).create(OrderCreateIn(**payload))
    return json_response({"data": _render(order)}, status=201)


@bp.patch("/<int:order_id>")
@require_auth
@timing
def update_order(order_id: int):
    """Modify an order; only allowed on the business day it was created."""

    payload = order_update_schema.load(request.get_json(silent=True) or {})
    order = OrderService(**service_kwargs()).update(OrderUpdateIn(order_id=order_id, **payload))
    return json_response({"data": _render(order)})


@bp.delete("/<int:order_id>")
@require_auth
@timing
def delete_order(order_id: int):
    OrderService(**service_kwargs()).delete(order_id)
    return "", 204
