"""Product resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, fields, validate

from orderdesk.schemas.common import CamelCaseSchema, PageQuerySchema, TimestampedSchema


class ProductUnitSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class ProductSchema(TimestampedSchema):
    """Public representation of a product."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String(allow_none=True)
    price = fields.Float(required=True)
    stock = fields.Integer(required=True)
    image_url = fields.String(allow_none=True)
    category_id = fields.Integer(allow_none=True)
    category_name = fields.String(allow_none=True)
    unit_measurements = fields.List(fields.Nested(ProductUnitSchema))


class ProductQuerySchema(PageQuerySchema):
    class Meta:
        unknown = EXCLUDE

    category_id = fields.Integer(load_default=None)


class ProductCreateSchema(CamelCaseSchema):
    """Payload for adding a product; ``unitMeasurementIds`` needs at least one id."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    description = fields.String(load_default=None)
    price = fields.Float(required=True, validate=validate.Range(min=0))
    stock = fields.Integer(load_default=0, strict=True, validate=validate.Range(min=0))
    image_url = fields.Url(load_default=None, validate=validate.Length(max=500))
    category_id = fields.Integer(load_default=None, strict=True)
    unit_measurement_ids = fields.List(
        fields.Integer(strict=True), required=True, validate=validate.Length(min=1)
    )


class ProductUpdateSchema(CamelCaseSchema):
    """Payload for modifying a product; every field is optional."""

    name = fields.String(validate=validate.Length(min=1, max=150))
    description = fields.String()
    price = fields.Float(validate=validate.Range(min=0))
    stock = fields.Integer(strict=True, validate=validate.Range(min=0))
    image_url = fields.Url(validate=validate.Length(max=500))
    category_id = fields.Integer(strict=True)
    unit_measurement_ids = fields.List(fields.Integer(strict=True), validate=validate.Length(min=1))
