"""DTOs for UnitMeasurementService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from orderdesk.services._shared.pagination import PageRequest


@dataclass(frozen=True, slots=True)
class UnitMeasurementListIn:
    page: PageRequest = field(default_factory=PageRequest)


@dataclass(frozen=True, slots=True)
class UnitMeasurementCreateIn:
    name: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class UnitMeasurementOut:
    id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime | None
