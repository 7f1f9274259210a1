from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from . import Schedule


class Weekday(Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def short(self) -> str:
        return self.value[:3]

    @classmethod
    def from_date(cls, d: date) -> Weekday:
        return _NUMBER_TO_WEEKDAY[d.isoweekday()]

    @classmethod
    def try_parse(cls, s: str) -> Weekday | None:
        return _WEEKDAY_PARSE.get(s.lower())

    def __str__(self) -> str:
        return self.value


_WEEKDAY_NUMBERS = {
    Weekday.MONDAY: 1,
    Weekday.TUESDAY: 2,
    Weekday.WEDNESDAY: 3,
    Weekday.THURSDAY: 4,
    Weekday.FRIDAY: 5,
    Weekday.SATURDAY: 6,
    Weekday.SUNDAY: 7,
}

_NUMBER_TO_WEEKDAY = {v: k for k, v in _WEEKDAY_NUMBERS.items()}

_WEEKDAY_PARSE: dict[str, Weekday] = {}
for _wd in Weekday:
    _WEEKDAY_PARSE[_wd.value] = _wd
    _WEEKDAY_PARSE[_wd.short] = _wd


class IntervalUnit(Enum):
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    def __str__(self) -> str:
        return self.value


# Units whose step is too coarse to combine with skipping individual days.
MULTI_DAY_UNITS: frozenset[IntervalUnit] = frozenset(
    {IntervalUnit.WEEK, IntervalUnit.MONTH, IntervalUnit.YEAR}
)

WORKDAYS: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)

WEEKEND: tuple[Weekday, ...] = (Weekday.SATURDAY, Weekday.SUNDAY)


BeforeNextHook = Callable[["Schedule"], Any]
AfterNextHook = Callable[[datetime], Any]


@dataclass(slots=True)
class ScheduleConfig:
    interval: int = 0
    interval_unit: IntervalUnit = IntervalUnit.SECOND
    start_date: datetime | None = None
    start_time: time | None = None
    end_time: time | None = None
    allowed_weekdays: frozenset[Weekday] | None = None
    enabled: bool = True
    precision: bool = True
    next_run: datetime | None = None
    before_next: BeforeNextHook | None = None
    after_next: AfterNextHook | None = None
