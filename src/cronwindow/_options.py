from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, time

from ._types import AfterNextHook, BeforeNextHook, IntervalUnit, ScheduleConfig, Weekday
from ._window import to_time_of_day

ScheduleOption = Callable[[ScheduleConfig], None]


def apply_options(config: ScheduleConfig, options: Iterable[ScheduleOption]) -> None:
    for option in options:
        option(config)


def set_start_time(t: time | datetime | None) -> ScheduleOption:
    """Daily window start. Only the time-of-day of a datetime is kept.

    Without an end time the window closes at the end of the day.
    """
    value = None if t is None else to_time_of_day(t)

    def option(config: ScheduleConfig) -> None:
        config.start_time = value

    return option


def set_end_time(t: time | datetime | None) -> ScheduleOption:
    """Daily window end; meaningful only together with a start time."""
    value = None if t is None else to_time_of_day(t)

    def option(config: ScheduleConfig) -> None:
        config.end_time = value

    return option


def set_start_date(dt: datetime | None) -> ScheduleOption:
    """Nothing is scheduled before this instant."""

    def option(config: ScheduleConfig) -> None:
        config.start_date = dt

    return option


def set_allowed_weekdays(*weekdays: Weekday) -> ScheduleOption:
    """Restrict runs to the given weekdays. No arguments lifts the restriction."""
    value = frozenset(weekdays) if weekdays else None

    def option(config: ScheduleConfig) -> None:
        config.allowed_weekdays = value

    return option


def set_interval(n: int) -> ScheduleOption:
    def option(config: ScheduleConfig) -> None:
        config.interval = n

    return option


def set_interval_unit(unit: IntervalUnit) -> ScheduleOption:
    def option(config: ScheduleConfig) -> None:
        config.interval_unit = unit

    return option


def set_before_next(hook: BeforeNextHook | None) -> ScheduleOption:
    """Called with the schedule before every next-run computation.

    The hook may call `Schedule.set` to reconfigure the schedule ahead of
    the computation it precedes.
    """

    def option(config: ScheduleConfig) -> None:
        config.before_next = hook

    return option


def set_after_next(hook: AfterNextHook | None) -> ScheduleOption:
    """Called with every freshly computed next run."""

    def option(config: ScheduleConfig) -> None:
        config.after_next = hook

    return option


def set_next_run(dt: datetime | None) -> ScheduleOption:
    """Pin the next run. Returned as-is until the query time passes it."""

    def option(config: ScheduleConfig) -> None:
        config.next_run = dt

    return option


def _set_flag(name: str, value: bool) -> ScheduleOption:
    def option(config: ScheduleConfig) -> None:
        setattr(config, name, value)

    return option


def enable() -> ScheduleOption:
    return _set_flag("enabled", True)


def disable() -> ScheduleOption:
    """While disabled, the next run is always five minutes out."""
    return _set_flag("enabled", False)


def enable_precision() -> ScheduleOption:
    """Step strictly from the query time inside the daily window (default)."""
    return _set_flag("precision", True)


def disable_precision() -> ScheduleOption:
    """Align runs to a grid anchored at the daily window start."""
    return _set_flag("precision", False)
