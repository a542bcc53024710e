"""User model: people who place orders on behalf of one or more areas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from orderdesk.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .company import Area

USER_ROLES = ("admin", "customer")

user_areas = Table(
    "user_areas",
    db.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("area_id", ForeignKey("areas.id", ondelete="CASCADE"), primary_key=True),
)


class User(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Ordering user.

    Fields
    ------
    email : str
        Login email, stored lowercase and trimmed.
    role : str
        ``"admin"`` or ``"customer"``.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(30))
    address: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), nullable=False, server_default="customer")
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False, default="")

    areas: Mapped[list[Area]] = relationship("Area", secondary=user_areas, lazy="selectin")

    @property
    def password(self) -> Any:
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches the stored hash."""
        return check_password_hash(self.password_hash, raw)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return value.strip().lower()
