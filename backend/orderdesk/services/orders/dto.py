"""
DTOs for OrderService.

These DTOs define framework-agnostic contracts between the API layer and the
application service managing the ``Order`` aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from orderdesk.services._shared.pagination import PageRequest

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class OrderItemIn:
    """
    One order line.

    :param product_id: Ordered product.
    :type product_id: int
    :param unit_measurement_id: Unit the quantity is expressed in.
    :type unit_measurement_id: int
    :param quantity: Ordered amount (> 0).
    :type quantity: float
    :param price: Unit price applied to this line.
    :type price: float
    """

    product_id: int
    unit_measurement_id: int
    quantity: float
    price: float


@dataclass(frozen=True, slots=True)
class OrderCreateIn:
    """
    Input DTO for placing an order.

    :param user_id: User placing the order.
    :type user_id: int
    :param area_id: Area the order is placed for.
    :type area_id: int
    :param items: Order lines (at least one).
    :type items: list[OrderItemIn]
    :param total_amount: Declared total; computed from the lines when ``None``.
    :type total_amount: float | None
    :param observation: Free-text note.
    :type observation: str | None
    """

    user_id: int
    area_id: int
    items: list[OrderItemIn]
    total_amount: float | None = None
    observation: str | None = None
    status: str = "created"


@dataclass(frozen=True, slots=True)
class OrderUpdateIn:
    """
    Input DTO for modifying an order. ``None`` leaves a field untouched.

    :param order_id: Order to modify.
    :type order_id: int
    :param items: Replacement lines; ``None`` keeps the current ones.
    :type items: list[OrderItemIn] | None
    """

    order_id: int
    status: str | None = None
    observation: str | None = None
    area_id: int | None = None
    total_amount: float | None = None
    items: list[OrderItemIn] | None = None


@dataclass(frozen=True, slots=True)
class OrderListIn:
    """
    Input DTO for listing orders.

    :param page: Validated paging, sorting and search parameters.
    :type page: PageRequest
    :param date: Single business day (``YYYY-MM-DD`` or ISO timestamp).
    :type date: str | None
    :param start_date: First business day of a range.
    :type start_date: str | None
    :param end_date: Last business day of a range (inclusive).
    :type end_date: str | None
    """

    page: PageRequest = field(default_factory=PageRequest)
    date: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    user_id: int | None = None
    area_id: int | None = None
    status: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class OrderItemOut:
    id: int
    product_id: int
    product_name: str | None
    unit_measurement_id: int
    unit_measurement_name: str | None
    quantity: float
    price: float


@dataclass(frozen=True, slots=True)
class OrderOut:
    """
    Public projection of an order with its lines.

    ``created_at`` / ``updated_at`` are UTC instants; business-time display
    fields are added by the API layer.
    """

    id: int
    user_id: int
    area_id: int
    area_name: str | None
    total_amount: float
    status: str
    observation: str | None
    created_at: datetime
    updated_at: datetime | None
    items: list[OrderItemOut]
