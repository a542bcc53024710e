"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Safe sorting with a whitelist mapping (prevents SQL injection).
- Listing predicates assembled by :class:`QueryFilterBuilder`.
- The ``count`` / ``fetch_page`` pair consumed by the pagination engine.
- Eager-loading hooks to prevent N+1 issues.
- Safe update helpers with per-repository updatable-field whitelists.
- No business logic and no commit/rollback; services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; Services define the Unit of Work.
* Sorting is opt-in per aggregate via ``_sortable_fields`` mapping, keyed by
  the public camelCase name clients send as ``sortBy``.
* Ordering uses the requested field only. A repository that needs stable
  paging across ties returns a column from ``_tiebreaker_field``.
* Updates MUST NOT allow mass-assignment: each repo exposes an explicit
  ``_updatable_fields`` whitelist.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.sql.elements import ColumnElement

from orderdesk.core.extensions import db
from orderdesk.repositories.filters import QueryFilterBuilder
from orderdesk.services._shared.dates import DateBoundary
from orderdesk.services._shared.pagination import EntityQuerySpec, PageRequest
from orderdesk.services._shared.sorting import SortSpec, resolve_sort

E = TypeVar("E")  # SQLAlchemy mapped entity type


# ----------------------------- Sorting utilities -----------------------------


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, Any],
    sort: SortSpec | None,
    *,
    default_field: str | None = None,
    tiebreaker: Any | None = None,
) -> Select[Any]:
    """Apply a safe ``ORDER BY`` clause based on a whitelist mapping.

    An unknown ``sort.field`` falls back to ``default_field``; when neither is
    in the mapping the statement is left unordered.

    :param stmt: Base selectable.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param sortable_fields: Public field → SQLAlchemy column mapping.
    :type sortable_fields: Mapping[str, Any]
    :param sort: Resolved sort specification.
    :type sort: SortSpec | None
    :param default_field: Public key used when ``sort`` is absent or unknown.
    :type default_field: str | None
    :param tiebreaker: Optional column appended in the same direction.
    :returns: Modified select with ``ORDER BY`` clauses.
    :rtype: :class:`sqlalchemy.sql.Select`
    """
    descending = sort.descending if sort is not None else True
    col = sortable_fields.get(sort.field) if sort is not None else None
    if col is None and default_field is not None:
        col = sortable_fields.get(default_field)
    if col is None:
        return stmt

    orders = [col.desc() if descending else col.asc()]
    if tiebreaker is not None and tiebreaker is not col:
        orders.append(tiebreaker.desc() if descending else tiebreaker.asc())
    return stmt.order_by(*orders)


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``_sortable_fields`` to expose safe sort keys.
    * ``_searchable_fields`` / ``_numeric_id_field`` for free-text search.
    * ``_timestamp_field`` to enable business-day filters.
    * ``_filterable_fields`` to enable equality filters.
    * ``_updatable_fields`` to whitelist keys allowed for updates.
    * ``_default_eagerload`` to attach eager-loading options.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.

    Services orchestrate use cases and own transaction boundaries.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``orderdesk.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    # ------------------------------ Session access ---------------------------

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic get/list operations."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        """Return the model's primary-key attribute (``model.id``) if available."""
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, Any]:
        """Whitelist mapping of public sort keys to model columns.

        :returns: Public key → column mapping.
        :rtype: Mapping[str, Any]
        """
        return {}

    def _default_sort_field(self) -> str:
        """Public sort key used when the client does not choose one."""
        return "createdAt"

    def _tiebreaker_field(self) -> Any | None:
        """Secondary ordering column; ``None`` keeps ordering on the sort field only."""
        return None

    def _searchable_fields(self) -> list[ColumnElement[Any]]:
        """Text columns matched by free-text search."""
        return []

    def _numeric_id_field(self) -> ColumnElement[Any] | None:
        """Column matched when the search text is an integer."""
        return None

    def _timestamp_field(self) -> ColumnElement[Any] | None:
        """UTC timestamp column constrained by business-day filters."""
        return getattr(self.model, "created_at", None)

    def _filterable_fields(self) -> Mapping[str, ColumnElement[Any]]:
        """Whitelist of public keys usable as equality filters.

        Unknown keys are silently ignored.
        """
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of attribute names that can be assigned on update."""
        return set()

    # ------------------------------ Query building ---------------------------

    def filter_builder(self) -> QueryFilterBuilder:
        """Return a :class:`QueryFilterBuilder` configured for this entity."""
        return QueryFilterBuilder(
            text_fields=self._searchable_fields(),
            numeric_id_field=self._numeric_id_field(),
            timestamp_field=self._timestamp_field(),
            filterable_fields=self._filterable_fields(),
        )

    def query_spec(
        self,
        page_request: PageRequest,
        *,
        date_range: DateBoundary | None = None,
        filters: Mapping[str, Any] | None = None,
        extra: Iterable[ColumnElement[bool]] = (),
    ) -> EntityQuerySpec:
        """Translate a validated page request into an :class:`EntityQuerySpec`.

        :param page_request: Validated listing parameters.
        :type page_request: PageRequest
        :param date_range: Optional half-open UTC range on the timestamp column.
        :type date_range: DateBoundary | None
        :param filters: Public-key equality filters.
        :type filters: Mapping[str, Any] | None
        :param extra: Additional clauses AND-ed into the predicate.
        :type extra: Iterable[ColumnElement[bool]]
        :returns: Spec ready for :class:`PaginationEngine`.
        :rtype: EntityQuerySpec
        """
        sort = resolve_sort(
            page_request.sort_by,
            page_request.order,
            self._sortable_fields(),
            self._default_sort_field(),
        )
        predicate = self.filter_builder().build(
            search=page_request.query,
            date_range=date_range,
            filters=filters,
        )
        extra_clauses = list(extra)
        if extra_clauses:
            predicate = and_(predicate, *extra_clauses)
        return EntityQuerySpec(
            predicate=predicate,
            sort=sort,
            page=page_request.page,
            limit=page_request.limit,
            entity=self.model.__name__,
        )

    # ------------------------------ Paged reads ------------------------------

    def count(self, predicate: ColumnElement[bool]) -> int:
        """Return the number of rows matching ``predicate`` (no paging)."""
        stmt = select(func.count()).select_from(self.model).where(predicate)
        return int(self.session.execute(stmt).scalar_one())

    def fetch_page(
        self,
        predicate: ColumnElement[bool],
        sort: SortSpec | None,
        skip: int,
        take: int,
    ) -> list[E]:
        """Return at most ``take`` rows matching ``predicate`` after skipping ``skip``."""
        stmt: Select[Any] = select(self.model).where(predicate)
        stmt = self._default_eagerload(stmt)
        stmt = apply_sorting(
            stmt,
            self._sortable_fields(),
            sort,
            default_field=self._default_sort_field(),
            tiebreaker=self._tiebreaker_field(),
        )
        stmt = stmt.offset(int(skip)).limit(int(take))
        results = self.session.execute(stmt).scalars().unique().all()
        return cast(list[E], list(results))

    def fetch_spec(self, spec: EntityQuerySpec) -> list[E]:
        """Adapter matching the engine's ``fetch_page(spec)`` signature."""
        return self.fetch_page(spec.predicate, spec.sort, spec.skip, spec.take)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity for persistence and flush to materialize the PK."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        result = self.session.execute(stmt).scalars().unique().first()
        return cast(E | None, result)

    def get_for_update(self, entity_id: Any) -> E | None:
        """Retrieve an entity by PK with a ``FOR UPDATE`` lock (when supported).

        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get_for_update requires a detectable PK.")
        stmt = select(self.model).where(pk_attr == entity_id).with_for_update(of=self.model)
        result = self.session.execute(stmt).scalars().unique().first()
        return cast(E | None, result)

    def exists(self, predicate: ColumnElement[bool]) -> bool:
        """Return ``True`` when at least one row matches ``predicate``."""
        stmt = select(self._pk_attr()).where(predicate).limit(1)
        return self.session.execute(stmt).first() is not None

    def existing_ids(self, ids: Iterable[int]) -> set[int]:
        """Return the subset of ``ids`` that exist as primary keys."""
        wanted = set(ids)
        pk_attr = self._pk_attr()
        if not wanted or pk_attr is None:
            return set()
        stmt = select(pk_attr).where(pk_attr.in_(wanted))
        return set(self.session.execute(stmt).scalars().all())

    def get_many(self, ids: Iterable[int]) -> list[E]:
        """Return the entities whose primary key is in ``ids``, ordered by key."""
        wanted = set(ids)
        pk_attr = self._pk_attr()
        if not wanted or pk_attr is None:
            return []
        stmt = select(self.model).where(pk_attr.in_(wanted)).order_by(pk_attr)
        return cast(list[E], list(self.session.execute(stmt).scalars().unique().all()))

    def list(
        self,
        predicate: ColumnElement[bool] | None = None,
        *,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """List all rows matching ``predicate`` in ``sort`` order (default newest first)."""
        stmt: Select[Any] = select(self.model)
        if predicate is not None:
            stmt = stmt.where(predicate)
        stmt = self._default_eagerload(stmt)
        stmt = apply_sorting(
            stmt,
            self._sortable_fields(),
            sort,
            default_field=self._default_sort_field(),
            tiebreaker=self._tiebreaker_field(),
        )
        if limit is not None:
            stmt = stmt.limit(int(limit))
        results = self.session.execute(stmt).scalars().unique().all()
        return cast(list[E], list(results))

    def delete(self, instance: E) -> None:
        """Delete an entity and flush changes."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        flush: bool = True,
    ) -> E:
        """Assign only whitelisted keys to ``instance`` and optionally flush.

        The assignment uses ``setattr`` to trigger SQLAlchemy ``@validates``
        decorators defined on the mapped class.

        After a flush the instance is expired, so relationships follow any
        foreign key that changed (``area_id`` then ``area``).

        :raises ValueError: If ``fields`` contains non-updatable keys.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for k, v in fields.items():
            setattr(instance, k, v)
        if flush:
            self.flush()
            self.session.expire(instance)
        return instance


__all__ = ["BaseRepository", "apply_sorting"]
