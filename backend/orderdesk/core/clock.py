"""Clock port and implementations.

Services never call ``datetime.now()`` directly; they receive a :class:`Clock`
so tests can pin "now" to a fixed instant.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Abstract source of the current UTC instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock delegating to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed instant.

    :param fixed: Instant returned by :meth:`now`. Naive values are read as UTC;
        aware values are converted to UTC.
    :type fixed: datetime
    """

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed.astimezone(UTC) if fixed.tzinfo else fixed.replace(tzinfo=UTC)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: float) -> None:
        """Move the frozen instant forward by ``timedelta(**kwargs)``."""
        self._fixed += timedelta(**kwargs)


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)`` used as a column default."""
    return datetime.now(UTC)


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
