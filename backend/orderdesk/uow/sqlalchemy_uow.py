"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from orderdesk.core.extensions import db
from orderdesk.repositories import (
    AreaRepository,
    CategoryRepository,
    CompanyRepository,
    OrderRepository,
    ProductRepository,
    PurchaseRepository,
    SupplierRepository,
    UnitMeasurementRepository,
    UserRepository,
)
from orderdesk.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.orders = OrderRepository(session=self.session)
        self.products = ProductRepository(session=self.session)
        self.suppliers = SupplierRepository(session=self.session)
        self.purchases = PurchaseRepository(session=self.session)
        self.users = UserRepository(session=self.session)
        self.areas = AreaRepository(session=self.session)
        self.unit_measurements = UnitMeasurementRepository(session=self.session)
        self.companies = CompanyRepository(session=self.session)
        self.categories = CategoryRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Leaving the block normally commits; an exception rolls back
    and propagates unchanged.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Installs a ``before_flush`` guard so pending ORM changes can never be
      written from a read path.
    - Leaves the transaction open on exit so entities returned to the caller
      stay loaded; the request teardown closes the session.
    - Disallows ``commit()``.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._install_guard()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._remove_guard()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guard ---------------------------------------

    @staticmethod
    def _before_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _guard_target(self) -> Session:
        # Listen on the concrete session so other threads are unaffected
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_guard(self) -> None:
        if self._guard_installed:
            return
        event.listen(self._guard_target(), "before_flush", self._before_flush)
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        with suppress(Exception):
            event.remove(self._guard_target(), "before_flush", self._before_flush)
        self._guard_installed = False
