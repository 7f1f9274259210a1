"""Building blocks: daily window, weekday filter, interval stepper, rendering."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from cronwindow import (
    WEEKEND,
    WORKDAYS,
    IntervalStepper,
    IntervalUnit,
    Schedule,
    TimeWindow,
    Weekday,
    WeekdayFilter,
    disable,
    disable_precision,
    set_allowed_weekdays,
    set_end_time,
    set_start_date,
    set_start_time,
)
from tests.conftest import UTC, format_utc, parse_utc

# =============================================================================
# Weekday
# =============================================================================


class TestWeekday:
    def test_try_parse(self) -> None:
        assert Weekday.try_parse("Mon") is Weekday.MONDAY
        assert Weekday.try_parse("sunday") is Weekday.SUNDAY
        assert Weekday.try_parse("someday") is None

    def test_from_date(self) -> None:
        assert Weekday.from_date(date(2024, 3, 11)) is Weekday.MONDAY
        assert Weekday.from_date(date(2024, 3, 17)) is Weekday.SUNDAY

    def test_groups(self) -> None:
        assert set(WORKDAYS) | set(WEEKEND) == set(Weekday)


# =============================================================================
# TimeWindow
# =============================================================================


class TestTimeWindow:
    def test_default_end_of_day(self) -> None:
        window = TimeWindow(time(9, 0))
        start, end = window.bounds(parse_utc("2024-03-11 12:00:00"))
        assert format_utc(start) == "2024-03-11 09:00:00"
        assert end == datetime(2024, 3, 11, 23, 59, 59, 999999, tzinfo=UTC)

    def test_contains_is_inclusive(self) -> None:
        window = TimeWindow(time(9, 0), time(17, 0))
        assert window.contains(parse_utc("2024-03-11 09:00:00"))
        assert window.contains(parse_utc("2024-03-11 17:00:00"))
        assert not window.contains(parse_utc("2024-03-11 17:00:01"))

    def test_contains_second_pass_of_repeated_hour(self) -> None:
        ny = ZoneInfo("America/New_York")
        window = TimeWindow(time(1, 30), time(1, 45))
        # 01:40 EST is 06:40Z, after the 01:45 EDT end at 05:45Z.
        assert window.contains(datetime(2024, 11, 3, 1, 40, tzinfo=ny))
        assert not window.contains(datetime(2024, 11, 3, 1, 40, tzinfo=ny, fold=1))

    def test_is_ordered(self) -> None:
        assert TimeWindow(time(9, 0), time(17, 0)).is_ordered()
        assert TimeWindow(time(9, 0)).is_ordered()
        assert not TimeWindow(time(17, 0), time(9, 0)).is_ordered()

    def test_aware_start_read_in_query_zone(self) -> None:
        dubai = ZoneInfo("Asia/Dubai")
        window = TimeWindow(time(9, 0, tzinfo=timezone.utc))
        assert window.start_on(date(2024, 3, 11), dubai) == datetime(2024, 3, 11, 13, 0, tzinfo=dubai)

    def test_str(self) -> None:
        assert str(TimeWindow(time(9, 0), time(17, 30))) == "from 09:00:00 to 17:30:00"


# =============================================================================
# WeekdayFilter
# =============================================================================


class TestWeekdayFilter:
    def test_unrestricted(self) -> None:
        f = WeekdayFilter()
        start = parse_utc("2024-03-16 10:00:00")
        assert f.allows(start)
        assert f.advance(start) == start

    def test_advance_keeps_time(self) -> None:
        f = WeekdayFilter.of(WORKDAYS)
        nxt = f.advance(parse_utc("2024-03-16 10:17:00"))
        assert format_utc(nxt) == "2024-03-18 10:17:00"

    def test_advance_to_window_start(self) -> None:
        f = WeekdayFilter.of([Weekday.WEDNESDAY])
        window = TimeWindow(time(8, 30))
        nxt = f.advance(parse_utc("2024-03-11 10:17:00"), window, preserve_time=True)
        assert format_utc(nxt) == "2024-03-13 08:30:00"

    def test_allowed_day_at_window_start(self) -> None:
        f = WeekdayFilter.of([Weekday.MONDAY])
        window = TimeWindow(time(8, 30))
        nxt = f.advance(parse_utc("2024-03-11 10:17:00"), window, preserve_time=True)
        assert format_utc(nxt) == "2024-03-11 08:30:00"

    def test_exhausted_search_returns_start(self) -> None:
        f = WeekdayFilter(frozenset())
        start = parse_utc("2024-03-11 10:00:00")
        assert f.advance(start) == start

    def test_str(self) -> None:
        assert str(WeekdayFilter.of([Weekday.FRIDAY, Weekday.MONDAY])) == "mon, fri"
        assert str(WeekdayFilter()) == "every day"


# =============================================================================
# IntervalStepper
# =============================================================================


class TestIntervalStepper:
    def test_year_from_leap_day(self) -> None:
        nxt = IntervalStepper(1, IntervalUnit.YEAR).step(parse_utc("2024-02-29 06:00:00"))
        assert format_utc(nxt) == "2025-02-28 06:00:00"

    def test_month_clamps_in_common_year(self) -> None:
        nxt = IntervalStepper(1, IntervalUnit.MONTH).step(parse_utc("2023-01-31 06:00:00"))
        assert format_utc(nxt) == "2023-02-28 06:00:00"

    def test_week(self) -> None:
        nxt = IntervalStepper(2, IntervalUnit.WEEK).step(parse_utc("2024-03-11 06:00:00"))
        assert format_utc(nxt) == "2024-03-25 06:00:00"

    def test_day_keeps_wall_clock_across_dst(self) -> None:
        ny = ZoneInfo("America/New_York")
        nxt = IntervalStepper(1, IntervalUnit.DAY).step(datetime(2024, 3, 9, 9, 0, tzinfo=ny))
        assert nxt == datetime(2024, 3, 10, 9, 0, tzinfo=ny)
        assert nxt.utcoffset() == timedelta(hours=-4)

    def test_duration(self) -> None:
        assert IntervalStepper(90, IntervalUnit.SECOND).duration == timedelta(seconds=90)
        assert IntervalStepper(1, IntervalUnit.DAY).duration is None

    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            ("2024-03-11 08:00:00", "2024-03-11 09:00:00"),
            ("2024-03-11 09:00:00", "2024-03-11 09:20:00"),
            ("2024-03-11 09:59:59", "2024-03-11 10:00:00"),
        ],
    )
    def test_align(self, now: str, expected: str) -> None:
        stepper = IntervalStepper(20, IntervalUnit.MINUTE)
        nxt = stepper.align(parse_utc("2024-03-11 09:00:00"), parse_utc(now))
        assert format_utc(nxt) == expected


# =============================================================================
# Rendering
# =============================================================================


class TestDisplay:
    def test_business_hours(self) -> None:
        schedule = Schedule(
            2,
            IntervalUnit.SECOND,
            set_start_time(time(9, 0)),
            set_end_time(time(17, 0)),
            set_allowed_weekdays(*WORKDAYS),
        )
        assert str(schedule) == "every 2 seconds from 09:00:00 to 17:00:00 on mon, tue, wed, thu, fri"

    def test_singular_unit(self) -> None:
        assert str(Schedule(1, IntervalUnit.DAY)) == "every 1 day"

    def test_flags_and_start_date(self) -> None:
        schedule = Schedule(
            5,
            IntervalUnit.MINUTE,
            set_start_date(datetime(2024, 3, 20, tzinfo=UTC)),
            disable_precision(),
            disable(),
        )
        assert str(schedule) == (
            "every 5 minutes starting 2024-03-20T00:00:00+00:00 (imprecise) (disabled)"
        )

    def test_repr(self) -> None:
        assert repr(Schedule(3, IntervalUnit.HOUR)) == "Schedule('every 3 hours')"
