"""Composition of listing predicates (date range, free-text search, equality filters)."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from orderdesk.services._shared.dates import DateBoundary

_INTEGER_TERM = re.compile(r"^-?[0-9]+\Z")
# Signed 64-bit range accepted by every supported driver
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def as_id_term(term: str) -> int | None:
    """Return ``term`` as an integer id, or ``None`` when it is not plain digits in range."""
    if not _INTEGER_TERM.match(term):
        return None
    value = int(term)
    if not _ID_MIN <= value <= _ID_MAX:
        return None
    return value


class QueryFilterBuilder:
    """
    Build the ``WHERE`` clause of a listing query for one entity.

    Parameters
    ----------
    text_fields : Sequence[ColumnElement]
        Columns matched by free-text search (case-insensitive substring).
    numeric_id_field : ColumnElement | None
        Column compared for equality when the search text is an integer.
    timestamp_field : ColumnElement | None
        UTC timestamp column constrained by a :class:`DateBoundary`.
    filterable_fields : Mapping[str, ColumnElement] | None
        Public key to column whitelist for equality filters.

    Notes
    -----
    The resulting clause is the conjunction of the date constraint, the
    search disjunction and the equality filters; a missing part contributes
    nothing. With no parts at all the clause is ``true()``.
    """

    def __init__(
        self,
        *,
        text_fields: Sequence[ColumnElement[Any]] = (),
        numeric_id_field: ColumnElement[Any] | None = None,
        timestamp_field: ColumnElement[Any] | None = None,
        filterable_fields: Mapping[str, ColumnElement[Any]] | None = None,
    ) -> None:
        self.text_fields = tuple(text_fields)
        self.numeric_id_field = numeric_id_field
        self.timestamp_field = timestamp_field
        self.filterable_fields = dict(filterable_fields or {})

    # ------------------------------ Parts ------------------------------------

    def date_clause(self, date_range: DateBoundary) -> ColumnElement[bool]:
        if self.timestamp_field is None:
            raise ValueError("This entity has no timestamp column to filter by date.")
        ts = self.timestamp_field
        return and_(ts >= date_range.start_inclusive_utc, ts < date_range.end_exclusive_utc)

    def search_clause(
        self,
        search: str,
        numeric_id_field: ColumnElement[Any] | None = None,
    ) -> ColumnElement[bool] | None:
        """
        OR of substring matches across the text columns.

        ``%`` and ``_`` in ``search`` are matched literally. When ``search`` is
        plain ASCII digits (optional leading ``-``) within the signed 64-bit
        range, the numeric id column joins the disjunction.
        """
        term = search.strip()
        if not term:
            return None
        branches: list[ColumnElement[bool]] = [
            col.icontains(term, autoescape=True) for col in self.text_fields
        ]
        id_col = numeric_id_field if numeric_id_field is not None else self.numeric_id_field
        if id_col is not None:
            id_value = as_id_term(term)
            if id_value is not None:
                branches.append(id_col == id_value)
        if not branches:
            return None
        return or_(*branches)

    def equality_clauses(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        """Equality on whitelisted keys; unknown keys and ``None`` values are skipped."""
        clauses: list[ColumnElement[bool]] = []
        for key, value in filters.items():
            col = self.filterable_fields.get(key)
            if col is None or value is None:
                continue
            clauses.append(col == value)
        return clauses

    # ------------------------------ Whole ------------------------------------

    def build(
        self,
        search: str | None = None,
        date_range: DateBoundary | None = None,
        filters: Mapping[str, Any] | None = None,
        numeric_id_field: ColumnElement[Any] | None = None,
    ) -> ColumnElement[bool]:
        parts: list[ColumnElement[bool]] = []
        if date_range is not None:
            parts.append(self.date_clause(date_range))
        if search:
            clause = self.search_clause(search, numeric_id_field)
            if clause is not None:
                parts.append(clause)
        if filters:
            parts.extend(self.equality_clauses(filters))
        if not parts:
            return true()
        if len(parts) == 1:
            return parts[0]
        return and_(*parts)


__all__ = ["QueryFilterBuilder"]
