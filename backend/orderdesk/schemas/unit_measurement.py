"""Unit measurement resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, fields, validate

from orderdesk.schemas.common import CamelCaseSchema, PageQuerySchema, TimestampedSchema


class UnitMeasurementSchema(TimestampedSchema):
    """Public representation of a unit measurement."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String(allow_none=True)


class UnitMeasurementQuerySchema(PageQuerySchema):
    class Meta:
        unknown = EXCLUDE


class UnitMeasurementCreateSchema(CamelCaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=60))
    description = fields.String(load_default=None, validate=validate.Length(max=255))
