"""Supplier and purchase resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, ValidationError, fields, post_load, validate, validates_schema

from orderdesk.schemas.common import (
    CamelCaseSchema,
    DateFilterQuerySchema,
    PageQuerySchema,
    TimestampedSchema,
)
from orderdesk.services.suppliers.dto import PurchaseItemIn


class SupplierSchema(TimestampedSchema):
    """Public representation of a supplier."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    company_name = fields.String(allow_none=True)
    contact_name = fields.String(allow_none=True)
    phone = fields.String(allow_none=True)
    email = fields.String(allow_none=True)
    address = fields.String(allow_none=True)


class PurchaseItemSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    product_id = fields.Integer(allow_none=True)
    description = fields.String(allow_none=True)
    unit_measurement_id = fields.Integer(allow_none=True)
    quantity = fields.Float(required=True)
    unit_cost = fields.Float(required=True)
    total_cost = fields.Float(required=True)


class PurchaseSchema(TimestampedSchema):
    """Public representation of a purchase; ``purchaseDate`` is a business date."""

    id = fields.Integer(required=True)
    supplier_id = fields.Integer(required=True)
    area_id = fields.Integer(allow_none=True)
    total_amount = fields.Float(required=True)
    purchase_date = fields.Date(required=True)
    items = fields.List(fields.Nested(PurchaseItemSchema))


class SupplierQuerySchema(PageQuerySchema):
    class Meta:
        unknown = EXCLUDE


class PurchaseQuerySchema(PageQuerySchema, DateFilterQuerySchema):
    class Meta:
        unknown = EXCLUDE

    area_id = fields.Integer(load_default=None)


class PurchaseItemInSchema(CamelCaseSchema):
    """One purchase line: a catalogue product or a free-text description."""

    product_id = fields.Integer(load_default=None, strict=True)
    description = fields.String(load_default=None, validate=validate.Length(max=255))
    unit_measurement_id = fields.Integer(load_default=None, strict=True)
    quantity = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    unit_cost = fields.Float(required=True, validate=validate.Range(min=0))

    @validates_schema
    def require_product_or_description(self, data: dict[str, Any], **_: Any) -> None:
        if data.get("product_id") is None and not (data.get("description") or "").strip():
            raise ValidationError("Either productId or description is required.")

    @post_load
    def make_item(self, data: dict[str, Any], **_: Any) -> PurchaseItemIn:
        return PurchaseItemIn(**data)


class PurchaseCreateSchema(CamelCaseSchema):
    """Payload for recording a purchase."""

    purchase_date = fields.String(load_default=None)
    area_id = fields.Integer(load_default=None, strict=True)
    total_amount = fields.Float(load_default=None, validate=validate.Range(min=0))
    items = fields.List(
        fields.Nested(PurchaseItemInSchema), required=True, validate=validate.Length(min=1)
    )


class SupplierCreateSchema(CamelCaseSchema):
    """Payload for adding a supplier."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    company_name = fields.String(load_default=None, validate=validate.Length(max=150))
    contact_name = fields.String(load_default=None, validate=validate.Length(max=150))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))
    email = fields.Email(load_default=None)
    address = fields.String(load_default=None, validate=validate.Length(max=255))


class SupplierUpdateSchema(CamelCaseSchema):
    """Payload for modifying a supplier; every field is optional."""

    name = fields.String(validate=validate.Length(min=1, max=150))
    company_name = fields.String(validate=validate.Length(max=150))
    contact_name = fields.String(validate=validate.Length(max=150))
    phone = fields.String(validate=validate.Length(max=30))
    email = fields.Email()
    address = fields.String(validate=validate.Length(max=255))
