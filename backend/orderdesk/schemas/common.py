"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


def camelcase(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class CamelCaseSchema(Schema):
    """Schema exposing every field under its camelCase name."""

    def on_bind_field(self, field_name: str, field_obj: fields.Field) -> None:
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class PageQuerySchema(CamelCaseSchema):
    """
    Listing query parameters: ``page``, ``limit``, ``sortBy``, ``order``, ``q``.

    ``page`` and ``limit`` are kept raw; range checks happen in
    :meth:`PageRequest.from_params` so they surface as
    ``invalid_page_parameter`` rather than a generic validation error.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.String(load_default=None)
    limit = fields.String(load_default=None)
    sort_by = fields.String(load_default=None)
    order = fields.String(load_default="desc", validate=validate.OneOf(["asc", "desc"]))
    q = fields.String(load_default=None)


class DateFilterQuerySchema(CamelCaseSchema):
    """Business-day filters: a single ``date`` or a ``startDate``/``endDate`` range."""

    class Meta:
        unknown = EXCLUDE

    date = fields.String(load_default=None)
    start_date = fields.String(load_default=None)
    end_date = fields.String(load_default=None)


class TimestampedSchema(CamelCaseSchema):
    """UTC audit timestamps shared by every entity representation."""

    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(allow_none=True)
