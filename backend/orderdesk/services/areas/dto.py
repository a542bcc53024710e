"""DTOs for AreaService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from orderdesk.services._shared.pagination import PageRequest


@dataclass(frozen=True, slots=True)
class AreaListIn:
    page: PageRequest = field(default_factory=PageRequest)
    company_id: int | None = None


@dataclass(frozen=True, slots=True)
class AreaCreateIn:
    """
    Input DTO for opening an ordering area inside a company.

    :param name: Area name, unique (case-insensitive) within the company.
    :type name: str
    :param company_id: Owning company.
    :type company_id: int
    """

    name: str
    company_id: int


@dataclass(frozen=True, slots=True)
class AreaOut:
    id: int
    name: str
    company_id: int
    company_name: str | None
    created_at: datetime
    updated_at: datetime | None
