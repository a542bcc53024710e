"""Business-calendar date handling.

Instants are stored in UTC, but "a day" always means a calendar day in the
business timezone. This module is the only place that converts between the
two. Every range it produces is half-open: ``start <= t < end``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from orderdesk.core.clock import Clock, SystemClock
from orderdesk.core.config import DEFAULT_BUSINESS_TIMEZONE
from orderdesk.services._shared.errors import InvalidDateFormatError, InvalidRangeError

_PLAIN_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}\Z")
# Extended-format date followed by at least HH:MM
_ISO_TIMESTAMP = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt ][0-9]{2}:[0-9]{2}")


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime (naive values are read as UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class DateBoundary:
    """
    Half-open UTC interval ``[start_inclusive_utc, end_exclusive_utc)``.

    :param start_inclusive_utc: First instant included.
    :type start_inclusive_utc: datetime
    :param end_exclusive_utc: First instant excluded.
    :type end_exclusive_utc: datetime
    :raises InvalidRangeError: If ``start >= end``.
    """

    start_inclusive_utc: datetime
    end_exclusive_utc: datetime

    def __post_init__(self) -> None:
        if not self.start_inclusive_utc < self.end_exclusive_utc:
            raise InvalidRangeError("Range start must be before its end")

    def contains(self, instant: datetime) -> bool:
        moment = as_utc(instant)
        return self.start_inclusive_utc <= moment < self.end_exclusive_utc


class TimezoneDateResolver:
    """
    Convert between business calendar dates and UTC instants.

    Parameters
    ----------
    tz : tzinfo
        Business timezone. Defaults to ``America/Lima``.
    clock : Clock
        Source of "now" for :meth:`business_today`.
    """

    def __init__(self, tz: tzinfo | None = None, clock: Clock | None = None) -> None:
        self.tz = tz or ZoneInfo(DEFAULT_BUSINESS_TIMEZONE)
        self.clock = clock or SystemClock()

    # ------------------------------ Parsing ----------------------------------

    def parse_business_date(self, value: str | date) -> date:
        """Return the business calendar date denoted by ``value``.

        :param value: ``YYYY-MM-DD``, an ISO 8601 timestamp, or a :class:`date`.
        :raises InvalidDateFormatError: If the value cannot be interpreted.
        """
        if isinstance(value, datetime):
            return as_utc(value).astimezone(self.tz).date()
        if isinstance(value, date):
            return value
        return date.fromisoformat(self.normalize_to_business_date(value))

    def normalize_to_business_date(self, value: str) -> str:
        """
        Reduce a plain date or ISO timestamp to a business ``YYYY-MM-DD``.

        A plain date is returned unchanged once it is known to be a real
        calendar date. A timestamp is converted to the business timezone first,
        so ``2024-03-16T03:00:00Z`` yields ``2024-03-15`` in Lima. Naive
        timestamps are read as UTC. Anything else, including compact forms such
        as ``20240315``, is rejected.

        :raises InvalidDateFormatError: If ``value`` is not parseable.
        """
        if not isinstance(value, str):
            raise InvalidDateFormatError(value)
        raw = value.strip()
        if _PLAIN_DATE.match(raw):
            try:
                date.fromisoformat(raw)
            except ValueError as exc:
                raise InvalidDateFormatError(value) from exc
            return raw
        if not _ISO_TIMESTAMP.match(raw):
            raise InvalidDateFormatError(value)
        try:
            instant = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise InvalidDateFormatError(value) from exc
        return self.to_business_date(instant)

    def to_business_date(self, instant: datetime) -> str:
        """Return the business calendar date of ``instant`` as ``YYYY-MM-DD``."""
        return as_utc(instant).astimezone(self.tz).date().isoformat()

    def to_business_datetime(self, instant: datetime) -> datetime:
        """Return ``instant`` expressed in the business timezone."""
        return as_utc(instant).astimezone(self.tz)

    # ------------------------------ Ranges -----------------------------------

    def _local_midnight_utc(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz).astimezone(UTC)

    def day_range_utc(self, business_date: str | date) -> DateBoundary:
        """
        UTC bounds of one business day.

        ``start`` is local midnight of the day; ``end`` is the next local
        midnight. For Lima, ``2024-03-15`` maps to
        ``[2024-03-15T05:00Z, 2024-03-16T05:00Z)``.
        """
        day = self.parse_business_date(business_date)
        return DateBoundary(
            self._local_midnight_utc(day),
            self._local_midnight_utc(day + timedelta(days=1)),
        )

    def range_across_dates(self, start_date: str | date, end_date: str | date) -> DateBoundary:
        """
        UTC bounds covering every business day from ``start_date`` to ``end_date``.

        Both ends are inclusive calendar days; the result is still half-open
        (it stops at local midnight after ``end_date``).

        :raises InvalidRangeError: If ``start_date`` is after ``end_date``.
        """
        first = self.parse_business_date(start_date)
        last = self.parse_business_date(end_date)
        if first > last:
            raise InvalidRangeError(
                f"startDate {first.isoformat()} is after endDate {last.isoformat()}"
            )
        return DateBoundary(
            self._local_midnight_utc(first),
            self._local_midnight_utc(last + timedelta(days=1)),
        )

    def resolve_filter(
        self,
        date: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> DateBoundary | None:
        """
        Turn request-level date parameters into a :class:`DateBoundary`.

        ``date`` selects a single day; ``start_date`` with ``end_date`` selects
        an inclusive range of days; nothing selects no constraint.

        :raises InvalidRangeError: If ``date`` is combined with a range or only
            one end of a range is given.
        """
        has_range = start_date is not None or end_date is not None
        if date is not None:
            if has_range:
                raise InvalidRangeError("Use either 'date' or 'startDate'/'endDate', not both")
            return self.day_range_utc(date)
        if not has_range:
            return None
        if start_date is None or end_date is None:
            raise InvalidRangeError("Both 'startDate' and 'endDate' are required for a range")
        return self.range_across_dates(start_date, end_date)

    def calendar_span(self, boundary: DateBoundary) -> tuple[date, date]:
        """Business dates ``(first, stop)`` covered by ``boundary``; ``stop`` is excluded.

        Used to filter calendar-date columns with the same half-open semantics
        as timestamp columns.
        """
        return (
            self.to_business_datetime(boundary.start_inclusive_utc).date(),
            self.to_business_datetime(boundary.end_exclusive_utc).date(),
        )

    # ------------------------------ Comparisons ------------------------------

    def same_business_day(self, a: datetime, b: datetime) -> bool:
        """Return ``True`` when both instants fall on the same business calendar date."""
        return self.to_business_date(a) == self.to_business_date(b)

    def business_today(self) -> str:
        """Business calendar date of the clock's current instant."""
        return self.to_business_date(self.clock.now())


__all__ = ["DateBoundary", "TimezoneDateResolver", "as_utc"]
