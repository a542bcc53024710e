from __future__ import annotations

import logging

from orderdesk.models.catalog import UnitMeasurement
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import ConflictError, NotFoundError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.unit_measurements.dto import (
    UnitMeasurementCreateIn,
    UnitMeasurementListIn,
    UnitMeasurementOut,
)

logger = logging.getLogger(__name__)


class UnitMeasurementService(BaseService):
    """Units products are sold and bought in (``kg``, ``box``...). Names are unique."""

    def list(self, dto: UnitMeasurementListIn) -> PageResult[UnitMeasurementOut]:
        with self.ro_uow() as uow:
            repo = uow.unit_measurements
            spec = repo.query_spec(dto.page)
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(self._to_out)

    def get(self, unit_id: int) -> UnitMeasurementOut:
        with self.ro_uow() as uow:
            unit = uow.unit_measurements.get(unit_id)
            if unit is None:
                raise NotFoundError("UnitMeasurement", unit_id)
            return self._to_out(unit)

    def create(self, dto: UnitMeasurementCreateIn) -> UnitMeasurementOut:
        """
        Register a unit measurement.

        :raises ConflictError: When a unit with the same name exists.
        """
        now = as_utc(self.clock.now())
        name = dto.name.strip()
        with self.rw_uow() as uow:
            if uow.unit_measurements.get_by_name(name) is not None:
                raise ConflictError("UnitMeasurement", "name already exists")
            unit = UnitMeasurement(
                name=name, description=dto.description, created_at=now, updated_at=now
            )
            uow.unit_measurements.add(unit)
            out = self._to_out(unit)

        logger.info(
            "unit_measurement.created",
            extra={"entity": "UnitMeasurement", "actor": self.ctx.actor_id},
        )
        return out

    @staticmethod
    def _to_out(unit: UnitMeasurement) -> UnitMeasurementOut:
        return UnitMeasurementOut(
            id=unit.id,
            name=unit.name,
            description=unit.description,
            created_at=as_utc(unit.created_at),
            updated_at=as_utc(unit.updated_at) if unit.updated_at else None,
        )
