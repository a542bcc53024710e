"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, the
query helpers (pagination, dates) and application services.

The translation to HTTP responses (RFC 7807) is handled by
``orderdesk/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from typing import Any

# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``code`` is the stable machine-readable identifier exposed to clients.
    - ``details`` carries safe structured context for the problem payload.
    """

    code: str = "bad_request"

    def __init__(self, message: str = "", **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Lookup / persistence errors
# --------------------------------------------------------------------------- #


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Order").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    code = "not_found"

    def __init__(self, entity: str, key: str | int) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Area").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    code = "conflict"

    def __init__(self, entity: str, detail: str) -> None:
        super().__init__(f"Conflict on {entity}: {detail}")
        self.entity = entity
        self.detail = detail


# --------------------------------------------------------------------------- #
# Query parameter errors
# --------------------------------------------------------------------------- #


class InvalidDateFormatError(ServiceError):
    """Raised when a date input is neither ``YYYY-MM-DD`` nor an ISO 8601 timestamp."""

    code = "invalid_date_format"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid date format: {value!r}", value=str(value))
        self.value = value


class InvalidRangeError(ServiceError):
    """Raised when a date range is inverted or incompletely specified."""

    code = "invalid_range"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidPageParameterError(ServiceError):
    """
    Raised when ``page`` or ``limit`` is not a positive integer within bounds.

    :param parameter: Offending parameter name (``"page"`` or ``"limit"``).
    :type parameter: str
    :param value: Raw value received.
    :type value: Any
    :param reason: Optional explanation appended to the message.
    :type reason: str | None
    """

    code = "invalid_page_parameter"

    def __init__(self, parameter: str, value: Any, reason: str | None = None) -> None:
        message = f"Invalid value for '{parameter}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, parameter=parameter, value=str(value))
        self.parameter = parameter
        self.value = value


# --------------------------------------------------------------------------- #
# Business rule errors
# --------------------------------------------------------------------------- #


class OrderEditWindowClosedError(ServiceError):
    """Raised when an order is modified on a business day other than its creation day."""

    code = "edit_window_closed"

    def __init__(self, order_id: int, created_date: str | None = None) -> None:
        super().__init__(
            "Orders can only be modified on the day they were created",
            order_id=order_id,
            created_date=created_date,
        )
        self.order_id = order_id


__all__ = [
    "ConflictError",
    "InvalidDateFormatError",
    "InvalidPageParameterError",
    "InvalidRangeError",
    "NotFoundError",
    "OrderEditWindowClosedError",
    "ServiceError",
]
