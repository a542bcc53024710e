"""Reference data referenced by orders and purchases: tenants, areas, categories, units."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from orderdesk.models.catalog import Category, UnitMeasurement
from orderdesk.models.company import Area, Company
from orderdesk.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    model = Company


class CategoryRepository(BaseRepository[Category]):
    model = Category


class AreaRepository(BaseRepository[Area]):
    """Areas are unique by name inside their company."""

    model = Area

    def _sortable_fields(self):
        return {
            "id": Area.id,
            "createdAt": Area.created_at,
            "name": Area.name,
        }

    def _searchable_fields(self):
        return [Area.name]

    def _numeric_id_field(self):
        return Area.id

    def _filterable_fields(self):
        return {"companyId": Area.company_id}

    def get_by_name(self, company_id: int, name: str) -> Area | None:
        """Case-insensitive lookup of ``name`` inside ``company_id``."""
        stmt = select(Area).where(
            Area.company_id == company_id,
            func.lower(Area.name) == name.strip().lower(),
        )
        return cast(Area | None, self.session.execute(stmt).scalars().first())


class UnitMeasurementRepository(BaseRepository[UnitMeasurement]):
    model = UnitMeasurement

    def _sortable_fields(self):
        return {
            "id": UnitMeasurement.id,
            "createdAt": UnitMeasurement.created_at,
            "name": UnitMeasurement.name,
        }

    def _searchable_fields(self):
        return [UnitMeasurement.name, UnitMeasurement.description]

    def get_by_name(self, name: str) -> UnitMeasurement | None:
        stmt = select(UnitMeasurement).where(
            func.lower(UnitMeasurement.name) == name.strip().lower()
        )
        return cast(UnitMeasurement | None, self.session.execute(stmt).scalars().first())
