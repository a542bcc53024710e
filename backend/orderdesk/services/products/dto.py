"""DTOs for ProductService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from orderdesk.services._shared.pagination import PageRequest


@dataclass(frozen=True, slots=True)
class ProductListIn:
    """
    Input DTO for listing products.

    :param page: Validated paging, sorting and search parameters.
    :type page: PageRequest
    :param category_id: Optional category equality filter.
    :type category_id: int | None
    """

    page: PageRequest = field(default_factory=PageRequest)
    category_id: int | None = None


@dataclass(frozen=True, slots=True)
class ProductUnitOut:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class ProductOut:
    """Public projection of a product."""

    id: int
    name: str
    description: str | None
    price: float
    stock: int
    image_url: str | None
    category_id: int | None
    category_name: str | None
    unit_measurements: list[ProductUnitOut]
    created_at: datetime
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class ProductCreateIn:
    """
    Input DTO for adding a product to the catalogue.

    :param unit_measurement_ids: Units the product is sold in (at least one).
    :type unit_measurement_ids: list[int]
    :param category_id: Optional category; must exist when given.
    :type category_id: int | None
    """

    name: str
    price: float
    unit_measurement_ids: list[int]
    stock: int = 0
    description: str | None = None
    image_url: str | None = None
    category_id: int | None = None


@dataclass(frozen=True, slots=True)
class ProductUpdateIn:
    """
    Input DTO for modifying a product. ``None`` leaves a field unchanged.

    ``unit_measurement_ids`` replaces the whole unit set when given.
    """

    product_id: int
    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    image_url: str | None = None
    category_id: int | None = None
    unit_measurement_ids: list[int] | None = None
