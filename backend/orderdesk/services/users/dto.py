"""DTOs for UserService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from orderdesk.services._shared.pagination import PageRequest


@dataclass(frozen=True, slots=True)
class UserListIn:
    """
    Input DTO for listing users.

    :param page: Validated paging, sorting and search parameters.
    :type page: PageRequest
    :param role: Optional role equality filter.
    :type role: str | None
    """

    page: PageRequest = field(default_factory=PageRequest)
    role: str | None = None


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public projection of a user. Never carries credentials."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    address: str | None
    role: str
    area_ids: list[int]
    created_at: datetime
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for registering an ordering user.

    :param password: Raw password; only its hash is stored.
    :type password: str
    :param area_ids: Areas the user orders for (at least one).
    :type area_ids: list[int]
    """

    first_name: str
    last_name: str
    email: str
    password: str
    area_ids: list[int]
    role: str = "customer"
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for modifying a user. ``None`` leaves a field unchanged.

    ``area_ids`` replaces the whole area set when given; ``password`` is
    re-hashed.
    """

    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    role: str | None = None
    password: str | None = None
    area_ids: list[int] | None = None
