"""Order resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, fields, post_load, validate

from orderdesk.models.order import ORDER_STATUSES
from orderdesk.schemas.common import (
    CamelCaseSchema,
    DateFilterQuerySchema,
    PageQuerySchema,
    TimestampedSchema,
)
from orderdesk.services.orders.dto import OrderItemIn


class OrderItemSchema(CamelCaseSchema):
    id = fields.Integer(required=True)
    product_id = fields.Integer(required=True)
    product_name = fields.String(allow_none=True)
    unit_measurement_id = fields.Integer(required=True)
    unit_measurement_name = fields.String(allow_none=True)
    quantity = fields.Float(required=True)
    price = fields.Float(required=True)


class OrderSchema(TimestampedSchema):
    """Public representation of an order (business-time fields are added afterwards)."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    area_id = fields.Integer(required=True)
    area_name = fields.String(allow_none=True)
    total_amount = fields.Float(required=True)
    status = fields.String(required=True)
    observation = fields.String(allow_none=True)
    items = fields.List(fields.Nested(OrderItemSchema))


class OrderQuerySchema(PageQuerySchema, DateFilterQuerySchema):
    """Supported query parameters for listing orders."""

    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(load_default=None)
    area_id = fields.Integer(load_default=None)
    status = fields.String(load_default=None, validate=validate.OneOf(ORDER_STATUSES))


class OrderCheckQuerySchema(CamelCaseSchema):
    """``areaId`` and ``date`` for the "already ordered today" check."""

    class Meta:
        unknown = EXCLUDE

    area_id = fields.Integer(required=True)
    date = fields.String(required=True, validate=validate.Length(min=1))


class OrderRangeQuerySchema(CamelCaseSchema):
    class Meta:
        unknown = EXCLUDE

    start_date = fields.String(required=True, validate=validate.Length(min=1))
    end_date = fields.String(required=True, validate=validate.Length(min=1))


class OrderItemInSchema(CamelCaseSchema):
    """One order line in a create/update payload."""

    product_id = fields.Integer(required=True, strict=True)
    unit_measurement_id = fields.Integer(required=True, strict=True)
    quantity = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    price = fields.Float(required=True, validate=validate.Range(min=0))

    @post_load
    def make_item(self, data: dict[str, Any], **_: Any) -> OrderItemIn:
        return OrderItemIn(**data)


class OrderCreateSchema(CamelCaseSchema):
    """Payload for placing an order."""

    user_id = fields.Integer(required=True, strict=True)
    area_id = fields.Integer(required=True, strict=True)
    total_amount = fields.Float(load_default=None, validate=validate.Range(min=0))
    observation = fields.String(load_default=None, validate=validate.Length(max=2000))
    status = fields.String(load_default="created", validate=validate.OneOf(ORDER_STATUSES))
    items = fields.List(
        fields.Nested(OrderItemInSchema), required=True, validate=validate.Length(min=1)
    )


class OrderUpdateSchema(CamelCaseSchema):
    """Payload for modifying an order; every field is optional."""

    area_id = fields.Integer(strict=True)
    total_amount = fields.Float(validate=validate.Range(min=0))
    observation = fields.String(validate=validate.Length(max=2000))
    status = fields.String(validate=validate.OneOf(ORDER_STATUSES))
    items = fields.List(fields.Nested(OrderItemInSchema), validate=validate.Length(min=1))
