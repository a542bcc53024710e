"""Tests for the area and unit measurement services."""

from __future__ import annotations

import pytest
from orderdesk.services._shared.errors import ConflictError, NotFoundError
from orderdesk.services._shared.pagination import PageRequest
from orderdesk.services.areas.dto import AreaCreateIn, AreaListIn
from orderdesk.services.areas.service import AreaService
from orderdesk.services.unit_measurements.dto import (
    UnitMeasurementCreateIn,
    UnitMeasurementListIn,
)
from orderdesk.services.unit_measurements.service import UnitMeasurementService

from tests.factories.catalog import UnitMeasurementFactory
from tests.factories.company import AreaFactory, CompanyFactory


@pytest.fixture()
def areas(clock) -> AreaService:
    return AreaService(clock=clock)


@pytest.fixture()
def units(clock) -> UnitMeasurementService:
    return UnitMeasurementService(clock=clock)


class TestAreaService:
    def test_list_filters_by_company(self, areas) -> None:
        company = CompanyFactory()
        kitchen = AreaFactory(company=company, name="Kitchen")
        AreaFactory(name="Kitchen")

        page = areas.list(
            AreaListIn(page=PageRequest.from_params(query="kitchen"), company_id=company.id)
        )

        assert [a.id for a in page.data] == [kitchen.id]
        assert page.data[0].company_name == company.name

    def test_get(self, areas) -> None:
        area = AreaFactory()
        assert areas.get(area.id).name == area.name
        with pytest.raises(NotFoundError):
            areas.get(999_999)

    def test_create(self, areas, clock) -> None:
        company = CompanyFactory()

        out = areas.create(AreaCreateIn(name=" Bar ", company_id=company.id))

        assert out.name == "Bar"
        assert out.company_id == company.id
        assert out.created_at == clock.now()

    def test_same_name_in_another_company_is_allowed(self, areas) -> None:
        AreaFactory(name="Bar")
        company = CompanyFactory()

        assert areas.create(AreaCreateIn(name="Bar", company_id=company.id)).name == "Bar"

    def test_duplicate_name_in_company(self, areas) -> None:
        area = AreaFactory(name="Bar")
        with pytest.raises(ConflictError):
            areas.create(AreaCreateIn(name="bar", company_id=area.company_id))

    def test_unknown_company(self, areas) -> None:
        with pytest.raises(NotFoundError, match="Company"):
            areas.create(AreaCreateIn(name="Bar", company_id=999_999))


class TestUnitMeasurementService:
    def test_list_sorted_by_name(self, units) -> None:
        kg = UnitMeasurementFactory(name="kg")
        box = UnitMeasurementFactory(name="box")

        page = units.list(
            UnitMeasurementListIn(page=PageRequest.from_params(sort_by="name", order="asc"))
        )

        assert [u.id for u in page.data] == [box.id, kg.id]

    def test_get(self, units) -> None:
        unit = UnitMeasurementFactory(description="kilogram")
        assert units.get(unit.id).description == "kilogram"
        with pytest.raises(NotFoundError):
            units.get(999_999)

    def test_create(self, units, clock) -> None:
        out = units.create(UnitMeasurementCreateIn(name=" sack ", description="50 kg sack"))

        assert out.name == "sack"
        assert out.updated_at == clock.now()

    def test_duplicate_name(self, units) -> None:
        UnitMeasurementFactory(name="sack")
        with pytest.raises(ConflictError):
            units.create(UnitMeasurementCreateIn(name="SACK"))
