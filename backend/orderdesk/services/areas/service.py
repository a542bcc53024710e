from __future__ import annotations

import logging

from orderdesk.models.company import Area
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import ConflictError, NotFoundError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.areas.dto import AreaCreateIn, AreaListIn, AreaOut

logger = logging.getLogger(__name__)


class AreaService(BaseService):
    """
    Application service for ordering areas.

    An area belongs to one company and its name is unique inside that
    company, ignoring case.
    """

    def list(self, dto: AreaListIn) -> PageResult[AreaOut]:
        with self.ro_uow() as uow:
            repo = uow.areas
            spec = repo.query_spec(dto.page, filters={"companyId": dto.company_id})
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(self._to_out)

    def get(self, area_id: int) -> AreaOut:
        """
        Retrieve one area.

        :raises NotFoundError: When the area does not exist.
        """
        with self.ro_uow() as uow:
            area = uow.areas.get(area_id)
            if area is None:
                raise NotFoundError("Area", area_id)
            return self._to_out(area)

    def create(self, dto: AreaCreateIn) -> AreaOut:
        """
        Open an area inside a company.

        :raises NotFoundError: When the company does not exist.
        :raises ConflictError: When the company already has an area with that name.
        """
        now = as_utc(self.clock.now())
        name = dto.name.strip()
        with self.rw_uow() as uow:
            if uow.companies.get(dto.company_id) is None:
                raise NotFoundError("Company", dto.company_id)
            if uow.areas.get_by_name(dto.company_id, name) is not None:
                raise ConflictError("Area", "name already exists in the company")
            area = Area(name=name, company_id=dto.company_id, created_at=now, updated_at=now)
            uow.areas.add(area)
            out = self._to_out(area)

        logger.info("area.created", extra={"entity": "Area", "actor": self.ctx.actor_id})
        return out

    @staticmethod
    def _to_out(area: Area) -> AreaOut:
        return AreaOut(
            id=area.id,
            name=area.name,
            company_id=area.company_id,
            company_name=area.company.name if area.company is not None else None,
            created_at=as_utc(area.created_at),
            updated_at=as_utc(area.updated_at) if area.updated_at else None,
        )
