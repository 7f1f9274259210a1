from __future__ import annotations

from ._error import ScheduleError
from ._types import MULTI_DAY_UNITS, ScheduleConfig
from ._window import TimeWindow


def validate(config: ScheduleConfig) -> ScheduleError | None:
    """Check a configuration for internal consistency.

    Returns the first violation found, or None. Never raises and never
    mutates `config`.
    """
    if config.interval < 1:
        return ScheduleError.invalid_interval()

    if config.start_time is not None:
        if not TimeWindow(config.start_time, config.end_time).is_ordered():
            return ScheduleError.invalid_time_window()

    if config.allowed_weekdays is not None:
        if not config.allowed_weekdays:
            return ScheduleError.empty_weekday_set()
        if config.interval_unit in MULTI_DAY_UNITS:
            return ScheduleError.incompatible_weekday_filter()

    return None
