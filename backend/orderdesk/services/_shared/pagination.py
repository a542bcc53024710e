"""Offset pagination shared by every listing endpoint.

The flow is always the same: validate raw parameters into a
:class:`PageRequest`, let the repository build an :class:`EntityQuerySpec`
(predicate + whitelisted sort + page window), then hand the spec to
:class:`PaginationEngine`, which runs the page fetch and the total count and
wraps both into a :class:`PageResult`.

Count and fetch are two independent reads, so a row inserted between them can
make ``total`` disagree with the rows actually returned. Callers that need a
consistent snapshot must run both inside a repeatable-read transaction.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from orderdesk.services._shared.errors import InvalidPageParameterError
from orderdesk.services._shared.sorting import SortSpec, normalize_direction

log = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _positive_int(name: str, raw: Any, default: int) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if isinstance(raw, bool):
        raise InvalidPageParameterError(name, raw, "must be an integer")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError as exc:
            raise InvalidPageParameterError(name, raw, "must be an integer") from exc
    else:
        raise InvalidPageParameterError(name, raw, "must be an integer")
    if value < 1:
        raise InvalidPageParameterError(name, raw, "must be >= 1")
    return value


@dataclass(frozen=True, slots=True)
class PageRequest:
    """
    Validated listing parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param sort_by: Requested public sort key (validated later per entity).
    :type sort_by: str | None
    :param order: ``"asc"`` or ``"desc"``.
    :type order: str
    :param query: Free-text search, stripped; ``None`` when blank.
    :type query: str | None
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str | None = None
    order: str = "desc"
    query: str | None = None

    @classmethod
    def from_params(
        cls,
        page: Any = None,
        limit: Any = None,
        sort_by: str | None = None,
        order: str | None = None,
        query: str | None = None,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> PageRequest:
        """
        Resolve defaults and validate raw parameters.

        Out-of-range values are rejected rather than clamped so the caller
        learns that the page it asked for is not the page it would get.

        :raises InvalidPageParameterError: For non-integer, non-positive or
            over-limit values.
        """
        page_value = _positive_int("page", page, DEFAULT_PAGE)
        limit_value = _positive_int("limit", limit, default_limit)
        if limit_value > max_limit:
            raise InvalidPageParameterError("limit", limit, f"must be <= {max_limit}")
        search = query.strip() if isinstance(query, str) else None
        return cls(
            page=page_value,
            limit=limit_value,
            sort_by=sort_by or None,
            order=normalize_direction(order),
            query=search or None,
        )


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    ``total_pages`` is never below 1 so an empty result still reports page 1
    of 1.
    """

    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> PageMeta:
        total_pages = max(1, math.ceil(total / limit))
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
        }


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """Page envelope: the rows of one page plus its metadata."""

    data: list[T]
    meta: PageMeta

    def map(self, fn: Callable[[T], U]) -> PageResult[U]:
        """Return a new page with ``fn`` applied to every row; ``meta`` is shared."""
        return PageResult(data=[fn(item) for item in self.data], meta=self.meta)

    def to_dict(self) -> dict[str, Any]:
        return {"data": list(self.data), "meta": self.meta.to_dict()}


@dataclass(frozen=True, slots=True)
class EntityQuerySpec:
    """
    Everything a repository needs to run one page of a listing.

    :param predicate: Storage-level filter (a SQLAlchemy boolean clause).
    :param sort: Resolved, whitelisted ordering.
    :param page: 1-based page number.
    :param limit: Page size.
    :param entity: Entity label used in logs.
    """

    predicate: Any
    sort: SortSpec
    page: int
    limit: int
    entity: str | None = field(default=None, compare=False)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit


FetchPage = Callable[[EntityQuerySpec], Sequence[T]]
CountMatches = Callable[[Any], int]


class PaginationEngine:
    """
    Run the fetch and count reads of a page and assemble the envelope.

    Parameters
    ----------
    executor : concurrent.futures.Executor | None
        When given, fetch and count are submitted concurrently. Leave unset
        when both callables share one SQLAlchemy session, which is not safe
        for concurrent use.

    Notes
    -----
    Rows are ordered by the spec's sort field only. Rows that tie on that
    field have no guaranteed relative order, so they may repeat or go missing
    across consecutive pages unless the repository adds its own tiebreaker.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor

    def paginate(
        self,
        spec: EntityQuerySpec,
        fetch_page: FetchPage[T],
        count_matches: CountMatches,
    ) -> PageResult[T]:
        if self._executor is None:
            items = list(fetch_page(spec))
            total = int(count_matches(spec.predicate))
        else:
            items_future = self._executor.submit(fetch_page, spec)
            total_future = self._executor.submit(count_matches, spec.predicate)
            items = list(items_future.result())
            total = int(total_future.result())

        meta = PageMeta.compute(spec.page, spec.limit, total)
        log.debug(
            "pagination.executed",
            extra={
                "entity": spec.entity,
                "page": meta.page,
                "limit": meta.limit,
                "total": meta.total,
            },
        )
        return PageResult(data=items, meta=meta)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "EntityQuerySpec",
    "PageMeta",
    "PageRequest",
    "PageResult",
    "PaginationEngine",
]
