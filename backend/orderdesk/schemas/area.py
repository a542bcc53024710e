"""Area resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, fields, validate

from orderdesk.schemas.common import CamelCaseSchema, PageQuerySchema, TimestampedSchema


class AreaSchema(TimestampedSchema):
    """Public representation of an ordering area."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    company_id = fields.Integer(required=True)
    company_name = fields.String(allow_none=True)


class AreaQuerySchema(PageQuerySchema):
    class Meta:
        unknown = EXCLUDE

    company_id = fields.Integer(load_default=None)


class AreaCreateSchema(CamelCaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    company_id = fields.Integer(required=True, strict=True)
