"""Area endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from orderdesk.api.deps import (
    json_response,
    parse_page_request,
    require_auth,
    service_kwargs,
    timing,
)
from orderdesk.schemas import AreaCreateSchema, AreaQuerySchema, AreaSchema
from orderdesk.services.areas.dto import AreaCreateIn, AreaListIn
from orderdesk.services.areas.service import AreaService

bp = Blueprint("areas", __name__)

area_schema = AreaSchema()
area_query_schema = AreaQuerySchema()
area_create_schema = AreaCreateSchema()


@bp.get("")
@require_auth
@timing
def list_areas():
    """Return paginated areas, optionally for one company."""

    params = area_query_schema.load(request.args)
    dto = AreaListIn(page=parse_page_request(params), company_id=params["company_id"])
    page = AreaService(**service_kwargs()).list(dto)
    return json_response(page.map(area_schema.dump).to_dict())


@bp.get("/<int:area_id>")
@require_auth
@timing
def get_area(area_id: int):
    area = AreaService(**service_kwargs()).get(area_id)
    return json_response({"data": area_schema.dump(area)})


@bp.post("")
@require_auth
@timing
def create_area():
    payload = area_create_schema.load(request.get_json(silent=True) or {})
    area = AreaService(**service_kwargs()).create(AreaCreateIn(**payload))
    return json_response({"data": area_schema.dump(area)}, status=201)
