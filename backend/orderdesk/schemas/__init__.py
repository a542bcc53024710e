"""Marshmallow schemas for request parsing and response serialization."""

from orderdesk.schemas.area import AreaCreateSchema, AreaQuerySchema, AreaSchema
from orderdesk.schemas.common import (
    CamelCaseSchema,
    DateFilterQuerySchema,
    PageQuerySchema,
    camelcase,
)
from orderdesk.schemas.order import (
    OrderCheckQuerySchema,
    OrderCreateSchema,
    OrderQuerySchema,
    OrderRangeQuerySchema,
    OrderSchema,
    OrderUpdateSchema,
)
from orderdesk.schemas.product import (
    ProductCreateSchema,
    ProductQuerySchema,
    ProductSchema,
    ProductUpdateSchema,
)
from orderdesk.schemas.supplier import (
    PurchaseCreateSchema,
    PurchaseQuerySchema,
    PurchaseSchema,
    SupplierCreateSchema,
    SupplierQuerySchema,
    SupplierSchema,
    SupplierUpdateSchema,
)
from orderdesk.schemas.unit_measurement import (
    UnitMeasurementCreateSchema,
    UnitMeasurementQuerySchema,
    UnitMeasurementSchema,
)
from orderdesk.schemas.user import (
    UserCreateSchema,
    UserQuerySchema,
    UserSchema,
    UserUpdateSchema,
)

__all__ = [
    "AreaCreateSchema",
    "AreaQuerySchema",
    "AreaSchema",
    "CamelCaseSchema",
    "DateFilterQuerySchema",
    "OrderCheckQuerySchema",
    "OrderCreateSchema",
    "OrderQuerySchema",
    "OrderRangeQuerySchema",
    "OrderSchema",
    "OrderUpdateSchema",
    "PageQuerySchema",
    "ProductCreateSchema",
    "ProductQuerySchema",
    "ProductSchema",
    "ProductUpdateSchema",
    "PurchaseCreateSchema",
    "PurchaseQuerySchema",
    "PurchaseSchema",
    "SupplierCreateSchema",
    "SupplierQuerySchema",
    "SupplierSchema",
    "SupplierUpdateSchema",
    "UnitMeasurementCreateSchema",
    "UnitMeasurementQuerySchema",
    "UnitMeasurementSchema",
    "UserCreateSchema",
    "UserQuerySchema",
    "UserSchema",
    "UserUpdateSchema",
    "camelcase",
]
