"""Unit measurement endpoints."""

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
    UnitMeasurementCreateSchema,
    UnitMeasurementQuerySchema,
    UnitMeasurementSchema,
)
from orderdesk.services.unit_measurements.dto import UnitMeasurementCreateIn, UnitMeasurementListIn
from orderdesk.services.unit_measurements.service import UnitMeasurementService

bp = Blueprint("unit_measurements", __name__)

unit_schema = UnitMeasurementSchema()
unit_query_schema = UnitMeasurementQuerySchema()
unit_create_schema = UnitMeasurementCreateSchema()


@bp.get("")
@require_auth
@timing
def list_unit_measurements():
    params = unit_query_schema.load(request.args)
    dto = UnitMeasurementListIn(page=parse_page_request(params))
    page = UnitMeasurementService(**service_kwargs()).list(dto)
    return json_response(page.map(unit_schema.dump).to_dict())


@bp.get("/<int:unit_id>")
@require_auth
@timing
def get_unit_measurement(unit_id: int):
    unit = UnitMeasurementService(**service_kwargs()).get(unit_id)
    return json_response({"data": unit_schema.dump(unit)})


@bp.post("")
@require_auth
@timing
def create_unit_measurement():
    payload = unit_create_schema.load(request.get_json(silent=True) or {})
    unit = UnitMeasurementService(**service_kwargs()).create(UnitMeasurementCreateIn(**payload))
    return json_response({"data": unit_schema.dump(unit)}, status=201)
