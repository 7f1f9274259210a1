from __future__ import annotations

from datetime import datetime, timedelta

from ._step import FALLBACK_STEP, IntervalStepper
from ._types import ScheduleConfig
from ._weekday import WeekdayFilter
from ._window import TimeWindow, add_elapsed, at_time_on_date, is_before, project

# =============================================================================
# Evaluation Order
# =============================================================================
# The first matching rule produces the next run:
#
# 1. Disabled: now + 5 minutes, never cached.
# 2. Cached next run still in the future: returned untouched.
# 3. Start date in the future: the start date, at the window start when a
#    daily window is configured.
# 4. Daily window configured:
#    - today not an allowed weekday: next allowed day at the window start
#    - precision: step strictly from now, staying inside today's window
#    - otherwise: next slot of the grid anchored at today's window start
#    Anything that overflows today's window moves to the next allowed day
#    at the window start.
#    The aligned grid honors the window end too, not only precision mode.
# 5. No window: step from now; a step onto another date is pushed to the
#    next allowed weekday.
#
# Rules 1 and 2 live with the schedule's lock and hooks in `Schedule`; this
# module resolves rules 3 to 5.
#
# Configured instants and times are read in now's zone (see _window.project).
# Ordering goes through _window.is_before so a repeated DST hour compares by
# instant, not by wall clock.
# =============================================================================


def disabled_tick(now: datetime) -> datetime:
    return add_elapsed(now, FALLBACK_STEP)


def cached(config: ScheduleConfig, now: datetime) -> datetime | None:
    if config.next_run is None:
        return None
    next_run = project(config.next_run, now)
    return next_run if is_before(now, next_run) else None


def next_from(config: ScheduleConfig, now: datetime) -> datetime:
    stepper = IntervalStepper(config.interval, config.interval_unit)
    weekdays = WeekdayFilter(config.allowed_weekdays)
    window = None
    if config.start_time is not None:
        window = TimeWindow(config.start_time, config.end_time)

    if config.start_date is not None:
        start_date = project(config.start_date, now)
        if is_before(now, start_date):
            return _before_start_date(start_date, window, now)

    if window is not None:
        return _next_in_window(window, stepper, weekdays, config.precision, now)

    nxt = stepper.step(now)
    if nxt.date() != now.date():
        nxt = weekdays.advance(nxt)
    return nxt


def _before_start_date(
    start_date: datetime, window: TimeWindow | None, now: datetime
) -> datetime:
    if window is None:
        return start_date
    opening = at_time_on_date(start_date.date(), window.start, now.tzinfo)
    # The window may already have opened on the start date itself.
    return opening if is_before(now, opening) else start_date


def _next_in_window(
    window: TimeWindow,
    stepper: IntervalStepper,
    weekdays: WeekdayFilter,
    precision: bool,
    now: datetime,
) -> datetime:
    today_start, today_end = window.bounds(now)
    tomorrow_start = window.start_on(now.date() + timedelta(days=1), now.tzinfo)

    if not weekdays.allows(now):
        return weekdays.advance(tomorrow_start, window, preserve_time=True)

    if precision:
        if is_before(now, today_start):
            return today_start
        if is_before(today_end, now):
            return weekdays.advance(tomorrow_start, window, preserve_time=True)
        nxt = stepper.step(now)
        if not is_before(today_end, nxt):
            return nxt
        return weekdays.advance(tomorrow_start, window, preserve_time=True)

    nxt = stepper.align(today_start, now)
    if not is_before(today_end, nxt):
        return nxt
    # Fixed-length steps restart at the next window; calendar steps keep
    # their multi-day grid.
    seed = nxt if stepper.duration is None else tomorrow_start
    return weekdays.advance(seed, window, preserve_time=True)
