"""Supplier and purchase endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from orderdesk.api.deps import (
    json_response,
    parse_page_request,
    require_auth,
    service_kwargs,
    timing,
)
from orderdesk.schemas import (
    PurchaseCreateSchema,
    PurchaseQuerySchema,
    PurchaseSchema,
    SupplierCreateSchema,
    SupplierQuerySchema,
    SupplierSchema,
    SupplierUpdateSchema,
)
from orderdesk.services.suppliers.dto import (
    PurchaseCreateIn,
    PurchaseListIn,
    SupplierCreateIn,
    SupplierListIn,
    SupplierUpdateIn,
)
from orderdesk.services.suppliers.service import SupplierService

bp = Blueprint("suppliers", __name__)

supplier_schema = SupplierSchema()
supplier_query_schema = SupplierQuerySchema()
supplier_create_schema = SupplierCreateSchema()
supplier_update_schema = SupplierUpdateSchema()
purchase_schema = PurchaseSchema()
purchase_query_schema = PurchaseQuerySchema()
purchase_create_schema = PurchaseCreateSchema()


@bp.get("")
@require_auth
@timing
def list_suppliers():
    """Return paginated suppliers."""

    params = supplier_query_schema.load(request.args)
    dto = SupplierListIn(page=parse_page_request(params))
    page = SupplierService(**service_kwargs()).list(dto)
    return json_response(page.map(supplier_schema.dump).to_dict())


@bp.get("/<int:supplier_id>")
@require_auth
@timing
def get_supplier(supplier_id: int):
    supplier = SupplierService(**service_kwargs()).get(supplier_id)
    return json_response({"data": supplier_schema.dump(supplier)})


@bp.post("")
@require_auth
@timing
def create_supplier():
    payload = supplier_create_schema.load(request.get_json(silent=True) or {})
    supplier = SupplierService(**service_kwargs()).create(SupplierCreateIn(**payload))
    return json_response({"data": supplier_schema.dump(supplier)}, status=201)


@bp.patch("/<int:supplier_id>")
@require_auth
@timing
def update_supplier(supplier_id: int):
    payload = supplier_update_schema.load(request.get_json(silent=True) or {})
    supplier = SupplierService(**service_kwargs()).update(
        SupplierUpdateIn(supplier_id=supplier_id, **payload)
    )
    return json_response({"data": supplier_schema.dump(supplier)})


@bp.delete("/<int:supplier_id>")
@require_auth
@timing
def delete_supplier(supplier_id: int):
    """Remove a supplier together with its purchases."""

    SupplierService(**service_kwargs()).delete(supplier_id)
    return "", 204


@bp.get("/<int:supplier_id>/purchases")
@require_auth
@timing
def list_purchases(supplier_id: int):
    """Return a supplier's purchases, optionally limited to business days."""

    params = purchase_query_schema.load(request.args)
    dto = PurchaseListIn(
        supplier_id=supplier_id,
        page=parse_page_request(params),
        date=params["date"],
        start_date=params["start_date"],
        end_date=params["end_date"],
        area_id=params["area_id"],
    )
    page = SupplierService(**service_kwargs()).list_purchases(dto)
    return json_response(page.map(purchase_schema.dump).to_dict())


@bp.post("/<int:supplier_id>/purchases")
@require_auth
@timing
def create_purchase(supplier_id: int):
    """Record a purchase; ``purchaseDate`` defaults to the current business day."""

    payload = purchase_create_schema.load(request.get_json(silent=True) or {})
    purchase = SupplierService(**service_kwargs()).create_purchase(
        PurchaseCreateIn(supplier_id=supplier_id, **payload)
    )
    return json_response({"data": purchase_schema.dump(purchase)}, status=201)
