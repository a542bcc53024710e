"""User repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from orderdesk.models.user import User
from orderdesk.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Credential checks stay on the model; this class only looks rows up.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "createdAt": User.created_at,
            "email": User.email,
            "firstName": User.first_name,
            "lastName": User.last_name,
            "role": User.role,
        }

    def _searchable_fields(self):
        return [User.first_name, User.last_name, User.email, User.phone]

    def _filterable_fields(self):
        return {"role": User.role}

    def _updatable_fields(self):
        return {
            "first_name",
            "last_name",
            "email",
            "phone",
            "address",
            "role",
            "password",
            "areas",
        }

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)
