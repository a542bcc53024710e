"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, fields, validate

from orderdesk.models.user import USER_ROLES
from orderdesk.schemas.common import CamelCaseSchema, PageQuerySchema, TimestampedSchema


class UserSchema(TimestampedSchema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    first_name = fields.String(required=True)
    last_name = fields.String(required=True)
    email = fields.Email(required=True)
    phone = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    role = fields.String(required=True)
    area_ids = fields.List(fields.Integer())


class UserQuerySchema(PageQuerySchema):
    """Supported query parameters for listing users."""

    class Meta:
        unknown = EXCLUDE

    role = fields.String(load_default=None)


class UserCreateSchema(CamelCaseSchema):
    """Payload for registering a user. The password is never echoed back."""

    first_name = fields.String(required=True, validate=validate.Length(min=1, max=80))
    last_name = fields.String(required=True, validate=validate.Length(min=1, max=80))
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=8))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))
    address = fields.String(load_default=None, validate=validate.Length(max=255))
    role = fields.String(load_default="customer", validate=validate.OneOf(USER_ROLES))
    area_ids = fields.List(
        fields.Integer(strict=True), required=True, validate=validate.Length(min=1)
    )


class UserUpdateSchema(CamelCaseSchema):
    """Payload for modifying a user; every field is optional."""

    first_name = fields.String(validate=validate.Length(min=1, max=80))
    last_name = fields.String(validate=validate.Length(min=1, max=80))
    email = fields.Email()
    password = fields.String(load_only=True, validate=validate.Length(min=8))
    phone = fields.String(validate=validate.Length(max=30))
    address = fields.String(validate=validate.Length(max=255))
    role = fields.String(validate=validate.OneOf(USER_ROLES))
    area_ids = fields.List(fields.Integer(strict=True), validate=validate.Length(min=1))
