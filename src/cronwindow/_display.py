from __future__ import annotations

from ._types import IntervalUnit, ScheduleConfig
from ._weekday import WeekdayFilter
from ._window import TimeWindow


def display(config: ScheduleConfig) -> str:
    out = f"every {config.interval} {_unit_display(config.interval, config.interval_unit)}"

    if config.start_time is not None:
        out += f" {TimeWindow(config.start_time, config.end_time)}"

    if config.allowed_weekdays is not None:
        out += f" on {WeekdayFilter(config.allowed_weekdays)}"

    if config.start_date is not None:
        out += f" starting {config.start_date.isoformat()}"

    if not config.precision:
        out += " (imprecise)"

    if not config.enabled:
        out += " (disabled)"

    return out


def _unit_display(interval: int, unit: IntervalUnit) -> str:
    name = str(unit)
    return name if interval == 1 else f"{name}s"
