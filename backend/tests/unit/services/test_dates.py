"""Unit tests for the Lima business calendar."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from orderdesk.core.clock import FrozenClock
from orderdesk.services._shared.dates import DateBoundary, TimezoneDateResolver, as_utc
from orderdesk.services._shared.errors import InvalidDateFormatError, InvalidRangeError


@pytest.fixture()
def resolver() -> TimezoneDateResolver:
    return TimezoneDateResolver(clock=FrozenClock(datetime(2024, 3, 16, 3, 0, tzinfo=UTC)))


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


class TestNormalizeToBusinessDate:
    def test_plain_date_is_returned_unchanged(self, resolver) -> None:
        assert resolver.normalize_to_business_date("2024-03-15") == "2024-03-15"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-03-16T03:00:00Z", "2024-03-15"),
            ("2024-03-16T04:59:59.999Z", "2024-03-15"),
            ("2024-03-16T05:00:00Z", "2024-03-16"),
            ("2024-03-16T04:59:59", "2024-03-15"),  # naive read as UTC
            ("2024-03-16T00:30:00+09:00", "2024-03-15"),
            ("2024-03-15T23:30:00-05:00", "2024-03-15"),
        ],
    )
    def test_timestamps_use_the_lima_calendar(self, resolver, value, expected) -> None:
        assert resolver.normalize_to_business_date(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["2024-03-15", "2024-03-16T03:00:00Z", "2024-12-31T23:59:59+00:00"],
    )
    def test_idempotent(self, resolver, value) -> None:
        once = resolver.normalize_to_business_date(value)
        assert resolver.normalize_to_business_date(once) == once

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "yesterday",
            "2024-02-30",
            "2024-13-01",
            "15/03/2024",
            "2024-03-15T25:00:00Z",
            "20240315",
            "20240315T120000Z",
            "2024-W11-5",
            "2024-03-15T",
        ],
    )
    def test_invalid_values(self, resolver, value) -> None:
        with pytest.raises(InvalidDateFormatError) as exc_info:
            resolver.normalize_to_business_date(value)
        assert exc_info.value.code == "invalid_date_format"

    def test_non_string_is_rejected(self, resolver) -> None:
        with pytest.raises(InvalidDateFormatError):
            resolver.normalize_to_business_date(20240315)  # type: ignore[arg-type]


class TestDayRange:
    def test_lima_day_maps_to_five_am_utc(self, resolver) -> None:
        day = resolver.day_range_utc("2024-03-15")
        assert day.start_inclusive_utc == utc(2024, 3, 15, 5, 0)
        assert day.end_exclusive_utc == utc(2024, 3, 16, 5, 0)

    def test_half_open(self, resolver) -> None:
        day = resolver.day_range_utc("2024-03-15")
        assert day.contains(utc(2024, 3, 15, 5, 0))
        assert day.contains(utc(2024, 3, 16, 4, 59, 59, 999000))
        assert not day.contains(utc(2024, 3, 16, 5, 0))
        assert not day.contains(utc(2024, 3, 15, 4, 59, 59))

    def test_accepts_timestamp_and_date(self, resolver) -> None:
        expected = resolver.day_range_utc("2024-03-15")
        assert resolver.day_range_utc("2024-03-16T03:00:00Z") == expected
        assert resolver.day_range_utc(date(2024, 3, 15)) == expected

    @pytest.mark.parametrize(
        "instant",
        [
            utc(2024, 3, 15, 5, 0),
            utc(2024, 3, 16, 4, 59, 59),
            utc(2024, 1, 1, 0, 0),
            utc(2024, 12, 31, 23, 59),
        ],
    )
    def test_instant_falls_in_its_own_business_day(self, resolver, instant) -> None:
        assert resolver.day_range_utc(resolver.to_business_date(instant)).contains(instant)

    def test_invalid_date(self, resolver) -> None:
        with pytest.raises(InvalidDateFormatError):
            resolver.day_range_utc("not-a-date")


class TestRangeAcrossDates:
    def test_single_day_equals_day_range(self, resolver) -> None:
        assert resolver.range_across_dates("2024-03-15", "2024-03-15") == resolver.day_range_utc(
            "2024-03-15"
        )

    def test_end_day_is_included(self, resolver) -> None:
        span = resolver.range_across_dates("2024-03-01", "2024-03-15")
        assert span.start_inclusive_utc == utc(2024, 3, 1, 5, 0)
        assert span.end_exclusive_utc == utc(2024, 3, 16, 5, 0)

    def test_inverted_range(self, resolver) -> None:
        with pytest.raises(InvalidRangeError) as exc_info:
            resolver.range_across_dates("2024-03-16", "2024-03-15")
        assert exc_info.value.code == "invalid_range"


class TestResolveFilter:
    def test_nothing(self, resolver) -> None:
        assert resolver.resolve_filter() is None

    def test_single_date(self, resolver) -> None:
        assert resolver.resolve_filter(date="2024-03-15") == resolver.day_range_utc("2024-03-15")

    def test_range(self, resolver) -> None:
        assert resolver.resolve_filter(
            start_date="2024-03-10", end_date="2024-03-15"
        ) == resolver.range_across_dates("2024-03-10", "2024-03-15")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"date": "2024-03-15", "start_date": "2024-03-10"},
            {"date": "2024-03-15", "start_date": "2024-03-10", "end_date": "2024-03-15"},
            {"start_date": "2024-03-10"},
            {"end_date": "2024-03-10"},
        ],
    )
    def test_ambiguous_or_incomplete(self, resolver, kwargs) -> None:
        with pytest.raises(InvalidRangeError):
            resolver.resolve_filter(**kwargs)


class TestComparisons:
    def test_same_business_day_across_utc_midnight(self, resolver) -> None:
        # 00:00 and 23:59 Lima on 2024-03-15, which straddle UTC midnight
        assert resolver.same_business_day(utc(2024, 3, 15, 5, 0), utc(2024, 3, 16, 4, 59))

    def test_different_business_day_on_same_utc_date(self, resolver) -> None:
        assert not resolver.same_business_day(utc(2024, 3, 16, 4, 59), utc(2024, 3, 16, 5, 0))

    def test_business_today_uses_clock(self, resolver) -> None:
        assert resolver.business_today() == "2024-03-15"

    def test_business_datetime_carries_lima_offset(self, resolver) -> None:
        local = resolver.to_business_datetime(utc(2024, 3, 16, 3, 0))
        assert local.utcoffset() == timedelta(hours=-5)
        assert (local.year, local.month, local.day, local.hour) == (2024, 3, 15, 22)

    def test_calendar_span(self, resolver) -> None:
        span = resolver.range_across_dates("2024-03-10", "2024-03-15")
        assert resolver.calendar_span(span) == (date(2024, 3, 10), date(2024, 3, 16))


class TestDateBoundary:
    def test_start_must_precede_end(self) -> None:
        instant = utc(2024, 3, 15, 5, 0)
        with pytest.raises(InvalidRangeError):
            DateBoundary(instant, instant)

    def test_contains_naive_value_as_utc(self) -> None:
        boundary = DateBoundary(utc(2024, 3, 15, 5, 0), utc(2024, 3, 16, 5, 0))
        assert boundary.contains(datetime(2024, 3, 15, 12, 0))


def test_as_utc() -> None:
    assert as_utc(datetime(2024, 3, 15, 12, 0)) == utc(2024, 3, 15, 12, 0)
    lima_noon = datetime(2024, 3, 15, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert as_utc(lima_noon) == utc(2024, 3, 15, 17, 0)
    assert as_utc(lima_noon).tzinfo is UTC


def test_default_timezone_is_lima() -> None:
    assert str(TimezoneDateResolver().tz) == "America/Lima"
