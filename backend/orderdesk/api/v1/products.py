"""Product endpoints."""

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
    ProductCreateSchema,
    ProductQuerySchema,
    ProductSchema,
    ProductUpdateSchema,
)
from orderdesk.services.products.dto import ProductCreateIn, ProductListIn, ProductUpdateIn
from orderdesk.services.products.service import ProductService

bp = Blueprint("products", __name__)

product_schema = ProductSchema()
product_query_schema = ProductQuerySchema()
product_create_schema = ProductCreateSchema()
product_update_schema = ProductUpdateSchema()


@bp.get("")
@require_auth
@timing
def list_products():
    """Return paginated products."""

    params = product_query_schema.load(request.args)
    dto = ProductListIn(page=parse_page_request(params), category_id=params["category_id"])
    page = ProductService(**service_kwargs()).list(dto)
    return json_response(page.map(product_schema.dump).to_dict())


@bp.get("/<int:product_id>")
@require_auth
@timing
def get_product(product_id: int):
    product = ProductService(**service_kwargs()).get(product_id)
    return json_response({"data": product_schema.dump(product)})


@bp.post("")
@require_auth
@timing
def create_product():
    payload = product_create_schema.load(request.get_json(silent=True) or {})
    product = ProductService(**service_kwargs()).create(ProductCreateIn(**payload))
    return json_response({"data": product_schema.dump(product)}, status=201)


@bp.patch("/<int:product_id>")
@require_auth
@timing
def update_product(product_id: int):
    """Modify a product; ``unitMeasurementIds`` replaces the unit set."""

    payload = product_update_schema.load(request.get_json(silent=True) or {})
    product = ProductService(**service_kwargs()).update(
        ProductUpdateIn(product_id=product_id, **payload)
    )
    return json_response({"data": product_schema.dump(product)})


@bp.delete("/<int:product_id>")
@require_auth
@timing
def delete_product(product_id: int):
    ProductService(**service_kwargs()).delete(product_id)
    return "", 204
