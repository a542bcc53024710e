"""Whitelisted sort-field resolution.

Clients name the sort column by its public (camelCase) key. Only keys present
in the entity's whitelist are honoured; everything else silently falls back to
the entity default so a typo never becomes a 400 or reaches the SQL layer.
"""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortSpec:
    """
    Resolved ordering for a listing query.

    :param field: Whitelisted public sort key.
    :type field: str
    :param direction: ``"asc"`` or ``"desc"``.
    :type direction: str
    """

    field: str
    direction: str = DESC

    @property
    def descending(self) -> bool:
        return self.direction == DESC


def normalize_direction(direction: str | None) -> str:
    """Return ``"asc"`` only for an explicit ascending request; ``"desc"`` otherwise."""
    if direction is not None and direction.strip().lower() == ASC:
        return ASC
    return DESC


def resolve_sort_field(requested: str | None, allowed: Container[str], default: str) -> str:
    """
    Pick a safe sort field.

    :param requested: Field named by the client (may be ``None`` or empty).
    :type requested: str | None
    :param allowed: Whitelist of public sort keys for the entity.
    :type allowed: Container[str]
    :param default: Field used when ``requested`` is absent or not allowed.
    :type default: str
    :returns: ``requested`` when whitelisted, else ``default``.
    :rtype: str
    """
    if requested and requested in allowed:
        return requested
    return default


def resolve_sort(
    requested: str | None,
    direction: str | None,
    allowed: Container[str],
    default: str,
) -> SortSpec:
    """Combine :func:`resolve_sort_field` and :func:`normalize_direction`."""
    return SortSpec(
        field=resolve_sort_field(requested, allowed, default),
        direction=normalize_direction(direction),
    )


__all__ = ["ASC", "DESC", "SortSpec", "normalize_direction", "resolve_sort", "resolve_sort_field"]
