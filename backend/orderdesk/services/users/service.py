from __future__ import annotations

import logging
from typing import Any

from orderdesk.models.company import Area
from orderdesk.models.user import User
from orderdesk.services._shared.base import BaseService
from orderdesk.services._shared.dates import as_utc
from orderdesk.services._shared.errors import ConflictError, NotFoundError
from orderdesk.services._shared.pagination import PageResult
from orderdesk.services.users.dto import UserCreateIn, UserListIn, UserOut, UserUpdateIn
from orderdesk.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """
    Application service for ordering users.

    Search covers names, email and phone. Emails are unique
    (case-insensitive) and passwords are only ever stored hashed.
    """

    def list(self, dto: UserListIn) -> PageResult[UserOut]:
        with self.ro_uow() as uow:
            repo = uow.users
            spec = repo.query_spec(dto.page, filters={"role": dto.role})
            return self.pagination.paginate(spec, repo.fetch_spec, repo.count).map(self._to_out)

    def get(self, user_id: int) -> UserOut:
        """
        Retrieve one user.

        :raises NotFoundError: When the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_out(user)

    def create(self, dto: UserCreateIn) -> UserOut:
        """
        Register a user.

        :param dto: Creation DTO.
        :type dto: :class:`UserCreateIn`
        :rtype: :class:`UserOut`
        :raises ConflictError: When the email is already in use.
        :raises NotFoundError: When an area does not exist.
        """
        now = as_utc(self.clock.now())
        with self.rw_uow() as uow:
            if uow.users.get_by_email(dto.email) is not None:
                raise ConflictError("User", "email already in use")
            user = User(
                first_name=dto.first_name.strip(),
                last_name=dto.last_name.strip(),
                email=dto.email,
                phone=dto.phone,
                address=dto.address,
                role=dto.role,
                areas=self._load_areas(uow, dto.area_ids),
                created_at=now,
                updated_at=now,
            )
            user.password = dto.password
            uow.users.add(user)
            out = self._to_out(user)

        logger.info("user.created", extra={"entity": "User", "actor": self.ctx.actor_id})
        return out

    def update(self, dto: UserUpdateIn) -> UserOut:
        """
        Modify a user. Fields left as ``None`` are not touched.

        :raises NotFoundError: When the user or an area does not exist.
        :raises ConflictError: When the new email belongs to another user.
        """
        with self.rw_uow() as uow:
            repo = uow.users
            user = repo.get_for_update(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)

            if dto.email is not None:
                owner = repo.get_by_email(dto.email)
                if owner is not None and owner.id != user.id:
                    raise ConflictError("User", "email already in use")

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "first_name": dto.first_name.strip() if dto.first_name else None,
                    "last_name": dto.last_name.strip() if dto.last_name else None,
                    "email": dto.email,
                    "phone": dto.phone,
                    "address": dto.address,
                    "role": dto.role,
                    "password": dto.password,
                }.items()
                if v is not None
            }
            if dto.area_ids is not None:
                updates["areas"] = self._load_areas(uow, dto.area_ids)

            user.updated_at = as_utc(self.clock.now())
            repo.assign_updates(user, updates)
            out = self._to_out(user)

        logger.info("user.updated", extra={"entity": "User", "actor": self.ctx.actor_id})
        return out

    def delete(self, user_id: int) -> None:
        """
        Remove a user.

        :raises NotFoundError: When the user does not exist.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.delete(user)
        logger.info("user.deleted", extra={"entity": "User", "actor": self.ctx.actor_id})

    @staticmethod
    def _load_areas(uow: UnitOfWork, ids: list[int]) -> list[Area]:
        areas = uow.areas.get_many(ids)
        missing = sorted(set(ids) - {a.id for a in areas})
        if missing:
            raise NotFoundError("Area", missing[0])
        return areas

    @staticmethod
    def _to_out(user: User) -> UserOut:
        return UserOut(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            address=user.address,
            role=user.role,
            area_ids=sorted(a.id for a in user.areas),
            created_at=as_utc(user.created_at),
            updated_at=as_utc(user.updated_at) if user.updated_at else None,
        )
