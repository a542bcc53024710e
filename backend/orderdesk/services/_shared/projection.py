"""Business-time display fields for order payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from orderdesk.services._shared.dates import TimezoneDateResolver


def _read(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


class OrderApiProjector:
    """
    Add business-timezone renderings of an order's timestamps to its payload.

    For each of ``created_at`` and ``updated_at`` three keys are produced,
    e.g. ``createdAtLocal`` (ISO 8601 with offset), ``createdDate``
    (``YYYY-MM-DD``) and ``createdTime`` (``HH:MM:SS``). A missing or empty
    timestamp yields ``None`` for all three. The entity itself is never modified.
    """

    FIELDS = (("created_at", "created"), ("updated_at", "updated"))

    def __init__(self, dates: TimezoneDateResolver) -> None:
        self.dates = dates

    def _render(self, prefix: str, instant: datetime | None) -> dict[str, str | None]:
        if not instant:
            return {f"{prefix}AtLocal": None, f"{prefix}Date": None, f"{prefix}Time": None}
        local = self.dates.to_business_datetime(instant)
        return {
            f"{prefix}AtLocal": local.isoformat(timespec="seconds"),
            f"{prefix}Date": local.date().isoformat(),
            f"{prefix}Time": local.strftime("%H:%M:%S"),
        }

    def project(self, entity: Any, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Return a copy of ``payload`` enriched with the display fields.

        :param entity: Order model instance or mapping holding ``created_at``
            and ``updated_at``.
        :param payload: Already-serialized representation; defaults to empty.
        :returns: New dict; neither ``entity`` nor ``payload`` is mutated.
        :rtype: dict[str, Any]
        """
        result = dict(payload or {})
        for attr, prefix in self.FIELDS:
            result.update(self._render(prefix, _read(entity, attr)))
        return result

    def project_many(self, entities: list[Any], payloads: list[dict[str, Any]]) -> list[dict]:
        return [self.project(e, p) for e, p in zip(entities, payloads, strict=True)]


__all__ = ["OrderApiProjector"]
